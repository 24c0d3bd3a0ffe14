"""Tests for environment-driven settings."""
from request_tracker.config import Settings


def test_env_file_values_loaded(tmp_path, monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("JWT_SECRET=from-dotenv\nLOG_LEVEL=DEBUG\n")

    settings = Settings()
    assert settings.JWT_SECRET == "from-dotenv"
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.JWT_ALGORITHM == "HS256"


def test_environment_overrides_env_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("JWT_SECRET=from-dotenv\n")
    monkeypatch.setenv("JWT_SECRET", "from-environment")

    assert Settings().JWT_SECRET == "from-environment"


def test_settings_use_model_config():
    assert Settings.model_config["env_file"] == ".env"
