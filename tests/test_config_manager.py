"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from mediacat.config import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    ConfigManager,
    MediacatConfig,
    flatten_for_env,
    resolve_with_precedence,
)


def _fresh_manager(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ConfigManager:
    monkeypatch.setenv("HOME", str(tmp_path))
    return ConfigManager()


def test_default_path_is_under_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)

    assert manager.config_path == DEFAULT_CONFIG_PATH.expanduser()
    assert manager.config_path == tmp_path / ".mediacat" / "config.yaml"


def test_ensure_exists_creates_default_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)

    path = manager.ensure_exists()

    assert path.exists()
    text = path.read_text(encoding="utf-8")
    assert "Mediacat configuration file" in text
    assert "Last updated:" in text

    config = manager.load(include_env=False)
    assert config == MediacatConfig()
    assert config.client.notification_seconds == pytest.approx(1.8)
    assert config.media.url_prefix == "/Media"


def test_resolve_with_precedence_respects_order(tmp_path: Path) -> None:
    env = {"MEDIACAT__SERVER__PORT": "8100", "MEDIACAT__MEDIA__INCLUDE_HIDDEN": "false"}
    manager = ConfigManager(tmp_path / "config.yaml", env=env)

    manager.replace_overrides({"media": {"directory": "/srv/media"}, "server": {"port": 8000}})

    config = manager.load(cli_overrides={"server.port": 8200})

    assert config.media.directory == "/srv/media"
    assert config.media.include_hidden is False
    # CLI overrides take precedence over environment
    assert config.server.port == 8200
    assert manager.load(include_env=False).server.port == 8000


def test_set_value_writes_validated_override(tmp_path: Path) -> None:
    manager = ConfigManager(tmp_path / "config.yaml", env={})

    config = manager.set_value("media.include_directories", True)

    assert config.media.include_directories is True
    assert manager.load_file_overrides()["media"]["include_directories"] is True
    assert "MEDIACAT__SECTION__KEY" in manager.read_text()


def test_set_value_rejects_invalid_result_without_writing(tmp_path: Path) -> None:
    manager = ConfigManager(tmp_path / "config.yaml", env={})
    manager.ensure_exists()
    before = manager.read_text()

    with pytest.raises(ConfigError):
        manager.set_value("server.port", 70000)
    with pytest.raises(ConfigError):
        manager.set_value(" . ", 1)
    with pytest.raises(ConfigError):
        manager.set_value("server.port.value", 1)

    assert manager.read_text() == before


def test_environment_overrides_apply_without_cli(tmp_path: Path) -> None:
    manager = ConfigManager(tmp_path / "config.yaml", env={"MEDIACAT__LOGGING__LEVEL": "debug"})

    config = manager.load()

    assert config.logging.level == "DEBUG"


def test_invalid_yaml_raises_config_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    manager.ensure_exists()

    manager.config_path.write_text("- not-a-mapping", encoding="utf-8")

    with pytest.raises(ConfigError):
        manager.load()


def test_flatten_for_env_renders_defaults() -> None:
    flat = flatten_for_env(MediacatConfig())

    assert flat["MEDIACAT__MEDIA__URL_PREFIX"] == "/Media"
    assert flat["MEDIACAT__SERVER__PORT"] == "3000"
    assert flat["MEDIACAT__MEDIA__INCLUDE_DIRECTORIES"] == "false"


@pytest.mark.parametrize(
    "overrides",
    [
        {"server": {"port": "not-an-int"}},
        {"server": {"port": 70000}},
        {"logging": {"level": "chatty"}},
        {"client": {"notification_seconds": 0}},
        {"media": {"unknown": True}},
    ],
)
def test_resolve_with_precedence_invalid_value_raises(overrides: dict) -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(defaults=MediacatConfig(), file_overrides=overrides)


def test_url_prefix_is_normalized() -> None:
    config = resolve_with_precedence(
        defaults=MediacatConfig(), cli_overrides={"media.url_prefix": "files/"}
    )

    assert config.media.url_prefix == "/files"
