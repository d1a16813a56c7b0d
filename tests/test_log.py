import io
import json

import pytest

from cobaltc.log import (
    ContextConfig,
    ContextLogger,
    LogConfigParseError,
    LoggerConfig,
    LogLevel,
    log_level_from_string,
    log_level_to_string,
    read_config_file,
)


def write_config(tmp_path, data, name="log.json"):
    path = tmp_path / name
    path.write_text(data if isinstance(data, str) else json.dumps(data))
    return path


@pytest.mark.parametrize("level", list(LogLevel))
def test_level_string_round_trip(level):
    assert log_level_from_string(log_level_to_string(level)) == level


def test_level_names_match_config_words():
    assert log_level_to_string(LogLevel.WARN) == "warn"
    assert log_level_to_string(LogLevel.CRITICAL) == "critical"


def test_unknown_level_name_defaults_to_info():
    assert log_level_from_string("verbose") == LogLevel.INFO


def test_read_config_defaults(tmp_path):
    path = write_config(
        tmp_path,
        {
            "default_level": "debug",
            "contexts": {
                "main": {},
                "lexer": {"file": str(tmp_path / "lexer.log")},
                "parser": {"level": "error", "console": True, "enabled": False},
            },
        },
    )
    config = read_config_file(path)
    assert config.default_level == LogLevel.DEBUG
    main = config.contexts["main"]
    assert main.console is True
    assert main.level == LogLevel.DEBUG
    lexer = config.contexts["lexer"]
    assert lexer.console is False
    assert lexer.file_path == str(tmp_path / "lexer.log")
    assert (lexer.max_size_mb, lexer.max_files) == (5, 3)
    parser = config.contexts["parser"]
    assert parser.enabled is False
    assert parser.level == LogLevel.ERROR


def test_read_config_missing_file(tmp_path):
    with pytest.raises(LogConfigParseError, match="Failed to open config file"):
        read_config_file(tmp_path / "absent.json")


def test_read_config_invalid_json(tmp_path):
    path = write_config(tmp_path, "{not json")
    with pytest.raises(LogConfigParseError, match="Invalid JSON format"):
        read_config_file(path)


def test_read_config_missing_default_level(tmp_path):
    path = write_config(tmp_path, {"contexts": {}})
    with pytest.raises(LogConfigParseError, match="default_level"):
        read_config_file(path)


def test_read_config_contexts_must_be_object(tmp_path):
    path = write_config(tmp_path, {"default_level": "info", "contexts": []})
    with pytest.raises(LogConfigParseError, match="'contexts' must be an object"):
        read_config_file(path)


def test_main_console_cannot_be_disabled(tmp_path):
    path = write_config(tmp_path, {"default_level": "info", "contexts": {"main": {"console": False}}})
    with pytest.raises(LogConfigParseError, match="main's console"):
        read_config_file(path)


def test_file_must_be_string(tmp_path):
    path = write_config(tmp_path, {"default_level": "info", "contexts": {"lexer": {"file": 3}}})
    with pytest.raises(LogConfigParseError, match="'file' must be a string for context: lexer"):
        read_config_file(path)


def test_is_enabled_uses_context_and_default_levels():
    with ContextLogger(io.StringIO()) as logger:
        logger.configure(
            LoggerConfig(
                default_level=LogLevel.WARN,
                contexts={
                    "lexer": ContextConfig(level=LogLevel.DEBUG, console=True),
                    "parser": ContextConfig(enabled=False, console=True),
                },
            )
        )
        assert logger.is_enabled("lexer", LogLevel.DEBUG)
        assert not logger.is_enabled("lexer", LogLevel.TRACE)
        assert not logger.is_enabled("parser", LogLevel.CRITICAL)
        assert not logger.is_enabled("other", LogLevel.INFO)
        assert logger.is_enabled("other", LogLevel.ERROR)


def test_console_context_writes_messages_at_or_above_level():
    stream = io.StringIO()
    with ContextLogger(stream) as logger:
        logger.configure(LoggerConfig(contexts={"lexer": ContextConfig(level=LogLevel.INFO, console=True)}))
        logger.debug("lexer", "hidden")
        logger.warn("lexer", "shown")
        logger.flush_all()
    assert stream.getvalue().splitlines() == ["shown"]


def test_unconfigured_context_goes_to_main_with_notice():
    stream = io.StringIO()
    with ContextLogger(stream) as logger:
        logger.info("compiler", "hello")
        logger.flush_all()
    assert stream.getvalue().splitlines() == ["Log context not initialized: compiler", "hello"]


def test_disabled_context_writes_nothing():
    stream = io.StringIO()
    with ContextLogger(stream) as logger:
        logger.configure(LoggerConfig(contexts={"lexer": ContextConfig(enabled=False, console=True)}))
        logger.critical("lexer", "dropped")
        logger.flush_all()
    assert stream.getvalue() == ""


def test_context_without_output_is_rejected():
    with ContextLogger(io.StringIO()) as logger:
        with pytest.raises(LogConfigParseError, match="No output specified for context lexer"):
            logger.configure(LoggerConfig(contexts={"lexer": ContextConfig(console=False)}))


def test_file_context_writes_to_file(tmp_path):
    log_file = tmp_path / "parser.log"
    stream = io.StringIO()
    config_path = write_config(
        tmp_path,
        {"default_level": "info", "contexts": {"parser": {"file": str(log_file)}}},
    )
    with ContextLogger(stream) as logger:
        logger.configure_file(config_path)
        logger.error("parser", "bad token")
        logger.flush_all()
    assert log_file.read_text().splitlines() == ["bad token"]
    assert stream.getvalue() == ""


def test_configure_file_wraps_errors(tmp_path):
    with ContextLogger(io.StringIO()) as logger:
        with pytest.raises(LogConfigParseError) as info:
            logger.configure_file(tmp_path / "absent.json")
    assert str(info.value).startswith("Configuration error: Failed to open config file")