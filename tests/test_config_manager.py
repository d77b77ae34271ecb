"""Unit tests for configuration management."""

from pathlib import Path

import pytest
import yaml

from filelight.config import (
    DEFAULT_HIDDEN_NAMES,
    ConfigError,
    ConfigManager,
    ConfigValidationError,
    FileLightConfig,
    flatten_for_env,
    parse_env_overrides,
    resolve_with_precedence,
)


def _fresh_manager(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ConfigManager:
    monkeypatch.setenv("HOME", str(tmp_path))
    return ConfigManager()


def test_ensure_exists_creates_default_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)

    path = manager.ensure_exists()

    assert path == tmp_path / ".filelight" / "config.yaml"
    text = path.read_text(encoding="utf-8")
    assert "FileLight configuration file" in text
    assert "Last updated:" in text

    config = manager.load(include_env=False)
    assert isinstance(config, FileLightConfig)
    assert config.browser.sidecar_name == "DESCRIPT.ION"
    assert config.browser.hidden_names == DEFAULT_HIDDEN_NAMES


def test_resolve_with_precedence_respects_order(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    manager.ensure_exists()

    manager.save({"browser": {"root": "/srv/files"}, "logging": {"level": "INFO"}})

    env = {"FILELIGHT__BROWSER__DEFAULT_ORDER": "desc", "FILELIGHT__LOGGING__LEVEL": "DEBUG"}
    cli = {"browser.default_order": "asc"}

    config = manager.load(cli_overrides=cli, env_overrides=env)

    assert config.browser.root == "/srv/files"
    assert config.logging.level == "DEBUG"
    # CLI overrides take precedence over environment
    assert config.browser.default_order == "asc"


def test_environment_values_are_parsed_as_yaml(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)

    config = manager.load(
        env_overrides={
            "FILELIGHT__CLI__QUIET_DEFAULT": "true",
            "FILELIGHT__BROWSER__HIDDEN_NAMES": "[secret, .git]",
            "UNRELATED__BROWSER__ROOT": "/ignored",
        }
    )

    assert config.cli.quiet_default is True
    assert config.browser.hidden_names == ["secret", ".git"]
    assert config.browser.root == "."


def test_invalid_yaml_raises_config_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    manager.ensure_exists()

    manager.config_path.write_text("- not-a-mapping", encoding="utf-8")

    with pytest.raises(ConfigError):
        manager.load()


def test_flatten_for_env_round_trips_defaults() -> None:
    flat = flatten_for_env(FileLightConfig())

    assert flat["FILELIGHT__BROWSER__SIDECAR_NAME"] == "DESCRIPT.ION"
    assert flat["FILELIGHT__BROWSER__DEFAULT_SORT"] == "name"
    assert flat["FILELIGHT__CLI__QUIET_DEFAULT"] == "False"
    assert yaml.safe_load(flat["FILELIGHT__BROWSER__HIDDEN_NAMES"]) == DEFAULT_HIDDEN_NAMES


@pytest.mark.parametrize(
    "overrides",
    [
        {"browser": {"default_sort": "owner"}},
        {"browser": {"default_order": "sideways"}},
        {"browser": {"sidecar_name": "../DESCRIPT.ION"}},
        {"browser": {"unknown": True}},
    ],
)
def test_resolve_with_precedence_invalid_value_raises(overrides: dict) -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(defaults=FileLightConfig(), file_overrides=overrides)


def test_validation_error_names_each_rejected_field() -> None:
    with pytest.raises(ConfigValidationError) as excinfo:
        resolve_with_precedence(
            defaults=FileLightConfig(),
            file_overrides={"browser": {"default_sort": "owner"}},
            cli_overrides={"cli.quiet_default": "sometimes"},
        )

    fields = [issue.split(":", 1)[0] for issue in excinfo.value.issues]
    assert fields == ["browser.default_sort", "cli.quiet_default"]
    assert str(excinfo.value).startswith("Invalid configuration values: ")


def test_dotted_and_nested_overrides_merge() -> None:
    config = resolve_with_precedence(
        defaults=FileLightConfig(),
        file_overrides={"browser": {"root": "/srv/files", "default_sort": "size"}},
        cli_overrides={"browser.default_sort": "date", "browser": {"default_order": "desc"}},
    )

    assert config.browser.root == "/srv/files"
    assert config.browser.default_sort == "date"
    assert config.browser.default_order == "desc"


def test_parse_env_overrides_ignores_foreign_and_empty_segments() -> None:
    overrides = parse_env_overrides(
        {
            "FILELIGHT__BROWSER__ROOT": "/data",
            "FILELIGHT__LOGGING__LEVEL": "INFO",
            "FILELIGHT____ROOT": "/ignored",
            "HOME": "/home/user",
        }
    )

    assert overrides == {"browser": {"root": "/data"}, "logging": {"level": "INFO"}}


def test_conflicting_override_keys_raise() -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(
            defaults=FileLightConfig(),
            cli_overrides={"browser": "flat", "browser.root": "/srv"},
        )
