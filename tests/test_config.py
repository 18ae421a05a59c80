import logging

import pytest

from sqlfront_core.config import ConfigError, ParserConfig


def test_defaults():
	config = ParserConfig()
	assert config.encoding == "utf-8"
	assert config.allow_unterminated_strings is False
	assert config.indent == "    "
	assert config.logging_level == logging.WARNING


def test_log_level_is_normalized():
	assert ParserConfig(log_level="debug").log_level == "DEBUG"


@pytest.mark.parametrize("kwargs", [
	{"indent_width": 0},
	{"indent_width": -2},
	{"log_level": "LOUD"},
	{"encoding": "no-such-codec"},
	{"allow_unterminated_strings": "no"},
	{"allow_unterminated_strings": 1},
])
def test_invalid_values(kwargs):
	with pytest.raises(ConfigError):
		ParserConfig(**kwargs)


def test_from_yaml(tmp_path):
	path = tmp_path / "sqlfront.yaml"
	path.write_text("indent_width: 2\nallow_unterminated_strings: true\nlog_level: info\n")
	config = ParserConfig.from_yaml(path)
	assert config.indent == "  "
	assert config.allow_unterminated_strings is True
	assert config.log_level == "INFO"


def test_empty_yaml_gives_defaults(tmp_path):
	path = tmp_path / "empty.yaml"
	path.write_text("")
	assert ParserConfig.from_yaml(path) == ParserConfig()


@pytest.mark.parametrize("text", [
	"colour: blue\n",
	"- a\n- b\n",
	"indent_width: [unclosed\n",
])
def test_bad_yaml(tmp_path, text):
	path = tmp_path / "bad.yaml"
	path.write_text(text)
	with pytest.raises(ConfigError):
		ParserConfig.from_yaml(path)


def test_from_env():
	config = ParserConfig.from_env({
		"SQLFRONT_ENCODING": "latin-1",
		"SQLFRONT_ALLOW_UNTERMINATED_STRINGS": "yes",
		"SQLFRONT_INDENT_WIDTH": "3",
		"SQLFRONT_LOG_LEVEL": "error",
	})
	assert config == ParserConfig(
		encoding="latin-1",
		allow_unterminated_strings=True,
		indent_width=3,
		log_level="ERROR",
	)


def test_from_env_without_variables():
	assert ParserConfig.from_env({}) == ParserConfig()


@pytest.mark.parametrize("env", [
	{"SQLFRONT_INDENT_WIDTH": "wide"},
	{"SQLFRONT_ALLOW_UNTERMINATED_STRINGS": "maybe"},
])
def test_from_env_rejects_bad_values(env):
	with pytest.raises(ConfigError):
		ParserConfig.from_env(env)


@pytest.mark.parametrize("text", [
	"encoding: no-such-codec\n",
	"allow_unterminated_strings: \"no\"\n",
])
def test_yaml_values_are_validated(tmp_path, text):
	path = tmp_path / "sqlfront.yaml"
	path.write_text(text)
	with pytest.raises(ConfigError):
		ParserConfig.from_yaml(path)


def test_encoding_from_env_is_validated():
	with pytest.raises(ConfigError):
		ParserConfig.from_env({"SQLFRONT_ENCODING": "no-such-codec"})
