import json

import pytest

from sqlfront_core import __version__
from sqlfront_core.cli import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
	for name in (
		"SQLFRONT_ENCODING",
		"SQLFRONT_ALLOW_UNTERMINATED_STRINGS",
		"SQLFRONT_INDENT_WIDTH",
		"SQLFRONT_LOG_LEVEL",
	):
		monkeypatch.delenv(name, raising=False)


def test_prints_tree(write_sql, capsys):
	path = write_sql("SELECT * FROM t WHERE x = 1;")
	assert main([str(path)]) == 0
	out = capsys.readouterr().out
	assert "Sql Root Node:" in out
	assert "        Binary operator: =" in out
	assert "Parsed 1 statement(s)" in out


def test_json_output(write_sql, capsys):
	path = write_sql("USE db;")
	assert main([str(path), "--json"]) == 0
	data = json.loads(capsys.readouterr().out)
	assert data == {
		"type": "RootQueries",
		"statements": [{"type": "UseStatement", "database": "db"}],
	}


def test_token_table_as_json(write_sql, capsys):
	path = write_sql("USE db;")
	assert main([str(path), "--tokens", "--json"]) == 0
	data = json.loads(capsys.readouterr().out)
	assert data["headers"] == ["Offset", "Kind", "Text"]
	assert data["rows"] == [[0, "Keyword", "USE"], [4, "Identifier", "db"], [6, "Punctuation", ";"]]


def test_token_table(write_sql, capsys):
	path = write_sql("SELECT a")
	assert main([str(path), "--tokens", "--no-color"]) == 0
	out = capsys.readouterr().out
	assert "Offset" in out
	assert "Keyword" in out


def test_syntax_error_is_reported_without_failing(write_sql, capsys):
	path = write_sql("SELECT FROM t;")
	assert main([str(path)]) == 0
	captured = capsys.readouterr()
	assert "Exception: Error at offset" in captured.err
	assert "Sql Root Node:" not in captured.out


def test_lexical_error_is_reported(write_sql, capsys):
	path = write_sql("SELECT 'open")
	assert main([str(path), "--tokens"]) == 0
	assert "Unterminated string literal" in capsys.readouterr().err


def test_missing_file_is_reported(tmp_path, capsys):
	assert main([str(tmp_path / "nope.sql")]) == 0
	assert "Exception:" in capsys.readouterr().err


def test_missing_path_is_a_usage_error(capsys):
	with pytest.raises(SystemExit) as exc:
		main([])
	assert exc.value.code == 2
	assert "usage:" in capsys.readouterr().err


def test_version(capsys):
	with pytest.raises(SystemExit) as exc:
		main(["--version"])
	assert exc.value.code == 0
	assert __version__ in capsys.readouterr().out


def test_config_file(write_sql, tmp_path, capsys):
	path = write_sql("SELECT a FROM t;")
	config = tmp_path / "sqlfront.yaml"
	config.write_text("indent_width: 2\n")
	assert main([str(path), "--config", str(config)]) == 0
	assert "\n  Select\n    Identifier: a\n" in capsys.readouterr().out


def test_config_from_environment(write_sql, monkeypatch, capsys):
	monkeypatch.setenv("SQLFRONT_ALLOW_UNTERMINATED_STRINGS", "true")
	path = write_sql("SELECT 'open")
	assert main([str(path), "--tokens", "--json"]) == 0
	data = json.loads(capsys.readouterr().out)
	assert data["rows"] == [[0, "Keyword", "SELECT"], [7, "String", "open"]]


@pytest.mark.parametrize("text", ["colour: blue\n", "indent_width: 0\n"])
def test_bad_config_is_a_usage_error(write_sql, tmp_path, text):
	path = write_sql("USE db;")
	config = tmp_path / "bad.yaml"
	config.write_text(text)
	with pytest.raises(SystemExit) as exc:
		main([str(path), "--config", str(config)])
	assert exc.value.code == 2


def test_deeply_nested_expression_is_reported(write_sql, capsys):
	path = write_sql("SELECT " + "(" * 2000 + "1" + ")" * 2000 + " FROM t;")
	assert main([str(path)]) == 0
	assert "Expression nested too deeply" in capsys.readouterr().err


def test_unknown_encoding_is_a_usage_error(write_sql, monkeypatch):
	monkeypatch.setenv("SQLFRONT_ENCODING", "no-such-codec")
	path = write_sql("USE db;")
	with pytest.raises(SystemExit) as exc:
		main([str(path)])
	assert exc.value.code == 2
