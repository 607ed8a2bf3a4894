import os
from pathlib import Path

import pytest
import yaml

from aisummarizer.infrastructure.config import settings
from aisummarizer.infrastructure.config.settings import (
    ConfigurationError, clear_test_config, env_key_for, get_config, get_huggingface_options,
    load_configuration, reset_configuration, set_config_for_testing
)

@pytest.fixture(autouse=True)
def fresh_configuration():
    reset_configuration()
    yield
    reset_configuration()

@pytest.fixture
def empty_env_file(tmp_path: Path) -> Path:
    path = tmp_path / ".env"
    path.write_text("", encoding="utf-8")
    return path

def write_yaml(path: Path, data: dict) -> Path:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path

def test_env_key_mapping():
    assert env_key_for("huggingface.api_token") == "HUGGINGFACE_API_TOKEN"

def test_test_overrides_win(monkeypatch):
    monkeypatch.setenv("HUGGINGFACE_SUMMARIZATION_MODEL", "env/model")
    set_config_for_testing({"huggingface.summarization_model": "override/model"})
    assert get_config("huggingface.summarization_model") == "override/model"

def test_environment_values_are_coerced(monkeypatch):
    monkeypatch.setenv("HUGGINGFACE_REQUESTS_PER_MINUTE", "12")
    monkeypatch.setenv("HUGGINGFACE_TIMEOUT_SECONDS", "7.5")
    monkeypatch.setenv("FEATURE_FLAG", "True")
    assert get_config("huggingface.requests_per_minute") == 12
    assert get_config("huggingface.timeout_seconds") == 7.5
    assert get_config("feature.flag") is True

def test_default_returned_when_missing():
    assert get_config("does.not.exist", "fallback") == "fallback"

def test_nested_yaml_keys_are_dotted(tmp_path, empty_env_file):
    config_file = write_yaml(tmp_path / "config.yaml", {
        "huggingface": {"summarization_model": "org/yaml-model", "timeout_seconds": 12},
        "logging": {"level": "DEBUG"},
    })
    load_configuration(config_file=config_file, env_file=empty_env_file)

    assert get_config("huggingface.summarization_model") == "org/yaml-model"
    assert get_config("logging.level") == "DEBUG"
    assert get_huggingface_options().timeout_seconds == 12.0

def test_environment_beats_yaml(tmp_path, empty_env_file, monkeypatch):
    config_file = write_yaml(tmp_path / "config.yaml", {"huggingface": {"summarization_model": "org/yaml-model"}})
    monkeypatch.setenv("HUGGINGFACE_SUMMARIZATION_MODEL", "org/env-model")
    load_configuration(config_file=config_file, env_file=empty_env_file)
    assert get_config("huggingface.summarization_model") == "org/env-model"

def test_dotenv_file_is_loaded(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("HUGGINGFACE_BASE_URL=https://dotenv.test\n", encoding="utf-8")
    try:
        load_configuration(config_file=tmp_path / "missing.yaml", env_file=env_file)
        assert get_config("huggingface.base_url") == "https://dotenv.test"
    finally:
        os.environ.pop("HUGGINGFACE_BASE_URL", None)

def test_malformed_yaml_is_ignored(tmp_path, empty_env_file):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("huggingface: [unclosed", encoding="utf-8")
    load_configuration(config_file=config_file, env_file=empty_env_file)
    assert get_config("huggingface.summarization_model") is None

def test_options_defaults():
    options = get_huggingface_options()
    assert options.api_token == "test-token"
    assert options.base_url == "https://api-inference.huggingface.co"
    assert options.summarization_model == "facebook/bart-large-cnn"
    assert options.requests_per_minute == 30
    assert options.max_retry_attempts == 3
    assert options.base_retry_delay_ms == 1000
    assert options.circuit_failure_threshold == 5
    assert options.circuit_break_seconds == 30.0
    assert options.model_path == "/models/facebook/bart-large-cnn"

def test_hf_api_token_fallback(monkeypatch):
    clear_test_config()
    monkeypatch.setenv("HF_API_TOKEN", "hf_fallback")
    assert get_huggingface_options().api_token == "hf_fallback"

def test_missing_token_is_not_fatal():
    clear_test_config()
    assert get_huggingface_options().api_token == ""

@pytest.mark.parametrize("key, value", [
    ("huggingface.requests_per_minute", 0),
    ("huggingface.requests_per_minute", "lots"),
    ("huggingface.max_retry_attempts", 0),
    ("huggingface.timeout_seconds", -1),
])
def test_invalid_values_raise_configuration_error(key, value):
    set_config_for_testing({key: value})
    with pytest.raises(ConfigurationError):
        get_huggingface_options()

def test_load_is_idempotent(tmp_path, empty_env_file):
    config_file = write_yaml(tmp_path / "config.yaml", {"a": 1})
    load_configuration(config_file=config_file, env_file=empty_env_file)
    write_yaml(config_file, {"a": 2})
    load_configuration(config_file=config_file, env_file=empty_env_file)
    assert settings._config["a"] == 1
