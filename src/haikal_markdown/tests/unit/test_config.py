"""
Unit tests for ConfigManager and its collaborators.

Tests cover packaged defaults, project file merging, environment overrides,
schema validation and building parser/formatter instances from settings.
"""

import json
import pytest
from pathlib import Path
from unittest.mock import patch

from haikal_markdown.utils.config import ConfigManager, ConfigPaths, EnvironmentHandler, merge_configs
from haikal_markdown.exceptions.config_exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
    EnvironmentVariableError,
)


DEFAULTS = {
    "version": "0.1.0",
    "parser": {"max_quote_depth": 32},
    "formatter": {"tab_size": 4},
    "logging": {"level": "INFO", "format": "standard"},
}


def make_manager(root: Path, environ=None, **kwargs) -> ConfigManager:
    return ConfigManager(project_root=root, load_env=False, environ=environ or {}, **kwargs)


def write_config(root: Path, data, name: str = "haikal.config.json") -> Path:
    path = root / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestConfigPaths:
    """Test ConfigPaths dataclass."""

    def test_default_paths(self):
        """Test file names and packaged locations."""
        paths = ConfigPaths()
        assert paths.DEFAULT_CONFIG_FILE == "haikal.config.json"
        assert paths.ENV_FILE == ".env"
        assert paths.defaults_path.name == "haikal.defaults.json"
        assert paths.defaults_path.exists()
        assert paths.schema_path.exists()


class TestConfigLoading:
    """Test the layered configuration sources."""

    def test_packaged_defaults(self, tmp_path):
        """Test defaults are used when no project file exists."""
        manager = make_manager(tmp_path)
        assert not manager.is_loaded
        assert manager.config == DEFAULTS
        assert manager.is_loaded

    def test_project_file_merged(self, tmp_path):
        """Test the project file overrides individual keys only."""
        write_config(tmp_path, {"formatter": {"tab_size": 2}})
        manager = make_manager(tmp_path)
        assert manager.get("formatter.tab_size") == 2
        assert manager.get("parser.max_quote_depth") == 32

    def test_explicit_config_file(self, tmp_path):
        """Test a custom file name is resolved against the project root."""
        write_config(tmp_path, {"parser": {"max_quote_depth": 3}}, name="custom.json")
        manager = make_manager(tmp_path, config_file="custom.json")
        assert manager.config_path == (tmp_path / "custom.json").resolve()
        assert manager.get("parser.max_quote_depth") == 3

    def test_explicit_missing_file_raises(self, tmp_path):
        """Test a requested file must exist."""
        manager = make_manager(tmp_path, config_file="missing.json")
        with pytest.raises(ConfigurationFileNotFoundError) as exc_info:
            manager.load_config()
        assert "Configuration file not found" in str(exc_info.value)

    def test_invalid_json_raises(self, tmp_path):
        """Test unparseable JSON is a configuration error."""
        (tmp_path / "haikal.config.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            make_manager(tmp_path).load_config()

    def test_non_object_json_raises(self, tmp_path):
        """Test the file must hold a JSON object."""
        write_config(tmp_path, [1, 2])
        with pytest.raises(ConfigurationError, match="JSON object"):
            make_manager(tmp_path).load_config()

    def test_config_is_cached_and_copied(self, tmp_path):
        """Test callers cannot mutate the loaded configuration."""
        manager = make_manager(tmp_path)
        config = manager.config
        config["formatter"]["tab_size"] = 99
        assert manager.get("formatter.tab_size") == 4

    def test_reload_picks_up_changes(self, tmp_path):
        """Test reload_config rereads the project file."""
        manager = make_manager(tmp_path)
        assert manager.get("formatter.tab_size") == 4
        write_config(tmp_path, {"formatter": {"tab_size": 8}})
        assert manager.get("formatter.tab_size") == 4
        manager.reload_config()
        assert manager.get("formatter.tab_size") == 8

    def test_get_and_has(self, tmp_path):
        """Test dotted lookups."""
        manager = make_manager(tmp_path)
        assert manager.get("logging.level") == "INFO"
        assert manager.get("logging.missing", "fallback") == "fallback"
        assert manager.get("version.nested") is None
        assert manager.has("parser.max_quote_depth")
        assert not manager.has("parser.unknown")


class TestEnvironmentOverrides:
    """Test HAIKAL_* overrides."""

    def test_overrides_applied(self, tmp_path):
        """Test every mapped variable lands on its key."""
        manager = make_manager(tmp_path, environ={
            "HAIKAL_LOG_LEVEL": "debug",
            "HAIKAL_LOG_FORMAT": "json",
            "HAIKAL_LOG_FILE": "haikal.log",
            "HAIKAL_MAX_QUOTE_DEPTH": "4",
            "HAIKAL_TAB_SIZE": " 8 ",
        })
        config = manager.config
        assert config["logging"] == {"level": "DEBUG", "format": "json", "file": "haikal.log"}
        assert config["parser"]["max_quote_depth"] == 4
        assert config["formatter"]["tab_size"] == 8

    def test_environment_beats_project_file(self, tmp_path):
        """Test overrides apply after the project file."""
        write_config(tmp_path, {"formatter": {"tab_size": 2}})
        manager = make_manager(tmp_path, environ={"HAIKAL_TAB_SIZE": "6"})
        assert manager.get("formatter.tab_size") == 6

    def test_blank_value_ignored(self, tmp_path):
        """Test empty variables do not override."""
        assert make_manager(tmp_path, environ={"HAIKAL_TAB_SIZE": "  "}).get("formatter.tab_size") == 4

    def test_bad_integer_raises(self, tmp_path):
        """Test integer conversion failures name the variable."""
        manager = make_manager(tmp_path, environ={"HAIKAL_MAX_QUOTE_DEPTH": "deep"})
        with pytest.raises(EnvironmentVariableError) as exc_info:
            manager.load_config()
        assert exc_info.value.variable_name == "HAIKAL_MAX_QUOTE_DEPTH"

    def test_convert_env_value(self):
        """Test the supported conversions."""
        handler = EnvironmentHandler({})
        assert handler.convert_env_value("12", "integer") == 12
        assert handler.convert_env_value("warning", "upper") == "WARNING"
        assert handler.convert_env_value(" text ") == "text"

    @patch('haikal_markdown.utils.config.file_operations.load_dotenv')
    def test_dotenv_loaded_when_present(self, mock_load_dotenv, tmp_path):
        """Test the .env file in the project root is loaded."""
        (tmp_path / ".env").write_text("HAIKAL_TAB_SIZE=6\n", encoding="utf-8")
        ConfigManager(project_root=tmp_path, load_env=True)
        mock_load_dotenv.assert_called_once_with((tmp_path / ".env").resolve(), override=False)

    @patch('haikal_markdown.utils.config.file_operations.load_dotenv')
    def test_dotenv_skipped_when_absent(self, mock_load_dotenv, tmp_path):
        """Test a missing .env file is not an error."""
        ConfigManager(project_root=tmp_path, load_env=True)
        mock_load_dotenv.assert_not_called()


class TestSchemaValidation:
    """Test the merged configuration is checked against the schema."""

    def test_out_of_range_value(self, tmp_path):
        """Test minimum constraints."""
        write_config(tmp_path, {"parser": {"max_quote_depth": 0}})
        with pytest.raises(ConfigurationValidationError) as exc_info:
            make_manager(tmp_path).load_config()
        assert "parser.max_quote_depth" in exc_info.value.invalid_fields

    def test_unknown_key(self, tmp_path):
        """Test additional properties are rejected."""
        write_config(tmp_path, {"formatter": {"tab_size": 4, "wrap": 80}})
        with pytest.raises(ConfigurationValidationError):
            make_manager(tmp_path).load_config()

    def test_invalid_level_from_environment(self, tmp_path):
        """Test overrides are validated too."""
        manager = make_manager(tmp_path, environ={"HAIKAL_LOG_LEVEL": "loud"})
        with pytest.raises(ConfigurationValidationError):
            manager.load_config()

    def test_error_message_names_file_and_fields(self, tmp_path):
        """Test the rendered message carries the file, a hint and the failing field."""
        path = write_config(tmp_path, {"parser": {"max_quote_depth": 0}})
        with pytest.raises(ConfigurationValidationError) as exc_info:
            make_manager(tmp_path).load_config()
        message = str(exc_info.value)
        assert f"Config file: {path.resolve()}" in message
        assert "Hint: Check haikal.config.json" in message
        assert "  - parser.max_quote_depth" in message

    def test_validation_can_be_skipped(self, tmp_path):
        """Test validate=False loads without checking."""
        write_config(tmp_path, {"formatter": {"tab_size": 99}})
        assert make_manager(tmp_path).load_config(validate=False)["formatter"]["tab_size"] == 99


class TestFactories:
    """Test components built from configuration."""

    def test_create_parser(self, tmp_path):
        """Test the parser receives the quote depth."""
        parser = make_manager(tmp_path, environ={"HAIKAL_MAX_QUOTE_DEPTH": "2"}).create_parser()
        assert parser.max_quote_depth == 2

    def test_create_formatter(self, tmp_path):
        """Test the formatter receives the tab size."""
        formatter = make_manager(tmp_path, environ={"HAIKAL_TAB_SIZE": "2"}).create_formatter()
        assert formatter.tab_size == 2
        assert formatter.convert_tabs_to_spaces("\t") == "  "


class TestMergeConfigs:
    """Test deep merging."""

    def test_nested_merge(self):
        """Test nested dictionaries merge key by key."""
        base = {"a": {"x": 1, "y": 2}, "b": 1}
        merged = merge_configs(base, {"a": {"y": 3}, "c": 4})
        assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}

    def test_base_not_mutated(self):
        """Test the inputs are left untouched."""
        base = {"a": {"x": 1}}
        merge_configs(base, {"a": {"x": 2}})
        assert base == {"a": {"x": 1}}

    def test_non_dict_replaces(self):
        """Test scalars and lists replace wholesale."""
        assert merge_configs({"a": {"x": 1}}, {"a": [1]}) == {"a": [1]}
