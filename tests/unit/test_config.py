"""Unit tests for configuration loading."""

import pytest
from pydantic import ValidationError

from user_directory.lib.config import APIConfig, AuthConfig, Config, ConfigManager, get_config_manager


@pytest.mark.unit
def test_defaults(reset_config_manager, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = ConfigManager().load_config()

    assert config.auth.issuer == "https://your-issuer.com"
    assert config.auth.audience == "https://your-audience.com"
    assert config.auth.algorithm == "HS256"
    assert config.auth.clock_skew_seconds == 300
    assert config.api.debug is False
    assert config.directory.seed_demo_users is True
    assert config.log_dir is None


@pytest.mark.unit
def test_yaml_file_then_env_overrides(reset_config_manager, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "auth:\n"
        "  issuer: https://yaml-issuer.example.com\n"
        "  audience: https://yaml-audience.example.com\n"
        "api:\n"
        "  port: 9000\n"
        "directory:\n"
        "  seed_demo_users: false\n"
    )
    monkeypatch.setenv("JWT_ISSUER", "https://env-issuer.example.com")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = ConfigManager(str(config_file)).load_config()

    assert config.auth.issuer == "https://env-issuer.example.com"
    assert config.auth.audience == "https://yaml-audience.example.com"
    assert config.api.port == 9000
    assert config.api.log_level == "DEBUG"
    assert config.directory.seed_demo_users is False


@pytest.mark.unit
def test_env_file_is_loaded(reset_config_manager, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    env_file = tmp_path / "service.env"
    env_file.write_text("JWT_AUDIENCE=https://dotenv-audience.example.com\nSEED_DEMO_USERS=no\n")

    config = ConfigManager(env_file=str(env_file)).load_config()

    assert config.auth.audience == "https://dotenv-audience.example.com"
    assert config.directory.seed_demo_users is False


@pytest.mark.unit
def test_invalid_integer_env_is_ignored(reset_config_manager, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("API_PORT", "eighty")
    monkeypatch.setenv("JWT_CLOCK_SKEW_SECONDS", "soon")

    config = ConfigManager().load_config()

    assert config.api.port == 8000
    assert config.auth.clock_skew_seconds == 300


@pytest.mark.unit
def test_unreadable_yaml_falls_back_to_defaults(reset_config_manager, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("auth: [unclosed\n")

    config = ConfigManager(str(config_file)).load_config()

    assert config.auth.issuer == "https://your-issuer.com"


@pytest.mark.unit
def test_load_is_cached_until_reload(reset_config_manager, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    manager = ConfigManager()
    first = manager.load_config()

    monkeypatch.setenv("API_HOST", "0.0.0.0")
    assert manager.get_config() is first
    assert manager.reload_config().api.host == "0.0.0.0"


@pytest.mark.unit
def test_global_manager_is_shared(reset_config_manager):
    assert get_config_manager() is get_config_manager()


@pytest.mark.unit
def test_log_dir_is_created(reset_config_manager, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))

    ConfigManager().load_config()

    assert (tmp_path / "logs").is_dir()


@pytest.mark.unit
def test_validation_rules():
    with pytest.raises(ValidationError):
        APIConfig(log_level="LOUD")
    with pytest.raises(ValidationError):
        AuthConfig(algorithm="RS256")
    with pytest.raises(ValidationError):
        Config(unknown_section={})
