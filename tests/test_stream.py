from pathlib import Path

import pytest

from sqlfront_core.query.stream import EOF, CharacterStream


def test_peek_does_not_consume():
	stream = CharacterStream("ab")
	assert stream.peek() == "a"
	assert stream.peek() == "a"
	assert stream.position() == 0


def test_next_consumes_until_eof():
	stream = CharacterStream("ab")
	assert stream.next() == "a"
	assert stream.next() == "b"
	assert stream.next() == EOF
	assert stream.peek() == EOF
	assert stream.is_eof()
	assert stream.position() == 2


def test_skip_and_peek():
	stream = CharacterStream("xyz")
	assert stream.skip_and_peek() == "y"
	assert stream.position() == 1


def test_push_back_rewinds():
	stream = CharacterStream("abc")
	stream.next()
	stream.next()
	stream.push_back(2)
	assert stream.position() == 0
	assert stream.next() == "a"


def test_push_back_before_start_is_rejected():
	stream = CharacterStream("abc")
	stream.next()
	with pytest.raises(ValueError):
		stream.push_back(2)


def test_mark_and_reset():
	stream = CharacterStream("select")
	stream.next()
	checkpoint = stream.mark()
	for _ in range(4):
		stream.next()
	stream.reset(checkpoint)
	assert stream.position() == 1
	assert stream.peek() == "e"


def test_bytes_are_decoded():
	stream = CharacterStream("'é'".encode("utf-8"))
	assert [stream.next() for _ in range(3)] == ["'", "é", "'"]


def test_from_file(tmp_path: Path):
	path = tmp_path / "q.sql"
	path.write_text("USE db;", encoding="utf-8")
	stream = CharacterStream.from_file(path)
	assert stream.peek() == "U"
