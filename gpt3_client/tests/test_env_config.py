from __future__ import annotations

import json

import pytest

from gpt3_client import ClientConfig, Gpt3Client, ValidationError
from gpt3_client.config import DEFAULTS, get_client_config, reset_config_cache
from gpt3_client.config.env import (
    ENV_MAP,
    env_overrides,
    get_env_var_candidates,
    is_placeholder,
    resolve_env_value,
)


def test_env_map_contains_expected_keys():
    for field in ["api_key", "base_url", "default_engine", "organization", "user_agent", "timeout_seconds"]:
        assert field in ENV_MAP  # nosec B101
    assert list(get_env_var_candidates("api_key")) == ["OPENAI_API_KEY", "API_KEY"]  # nosec B101


def test_is_placeholder_heuristics():
    assert is_placeholder("placeholder-value")  # nosec B101
    assert is_placeholder("ChangeMe123")  # nosec B101
    assert is_placeholder("example-key")  # nosec B101
    assert is_placeholder("test_token")  # nosec B101
    assert not is_placeholder("real-value")  # nosec B101
    assert not is_placeholder(None)  # nosec B101


def test_resolve_env_value_prefers_canonical(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "canon")
    monkeypatch.setenv("API_KEY", "alias")
    assert resolve_env_value("api_key") == ("canon", "OPENAI_API_KEY")  # nosec B101


def test_resolve_env_value_alias_and_placeholder(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "changeme")
    monkeypatch.setenv("API_KEY", "alias-key")
    assert resolve_env_value("api_key") == ("alias-key", "API_KEY")  # nosec B101
    monkeypatch.delenv("API_KEY")
    assert resolve_env_value("api_key") == (None, None)  # nosec B101
    assert "api_key" not in env_overrides()  # nosec B101


def test_defaults_without_any_source():
    cfg = get_client_config()
    assert cfg == DEFAULTS  # nosec B101


def test_missing_api_key_is_validation_error():
    with pytest.raises(ValidationError, match="missing api key"):
        ClientConfig.resolve()
    with pytest.raises(ValidationError):
        Gpt3Client()


def test_layering_precedence(monkeypatch, tmp_path):
    config_file = tmp_path / "gpt3.yaml"
    config_file.write_text(
        "openai:\n"
        "  base_url: https://file.example/v1\n"
        "  default_engine: curie\n"
        "  organization: org-file\n"
        "  unrelated: ignored\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("GPT3_CONFIG_FILE", str(config_file))
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("OPENAI_ENGINE", "babbage")
    reset_config_cache()

    cfg = ClientConfig.resolve(organization="org-override")

    assert cfg.api_key == "sk-env"  # nosec B101
    assert cfg.base_url == "https://file.example/v1"  # from file  # nosec B101
    assert cfg.default_engine == "babbage"  # env beats file  # nosec B101
    assert cfg.organization == "org-override"  # override beats file  # nosec B101
    assert cfg.user_agent == "gpt3-client"  # default  # nosec B101


def test_json_config_file_flat_mapping(monkeypatch, tmp_path):
    config_file = tmp_path / "gpt3.json"
    config_file.write_text(json.dumps({"api_key": "sk-file", "timeout_seconds": 12}), encoding="utf-8")
    monkeypatch.setenv("GPT3_CONFIG_FILE", str(config_file))
    reset_config_cache()

    cfg = ClientConfig.resolve()
    assert cfg.api_key == "sk-file" and cfg.timeout_seconds == 12.0  # nosec B101


def test_dotenv_file_loaded_once(monkeypatch, tmp_path):
    dotenv = tmp_path / ".env"
    dotenv.write_text("# comment\nOPENAI_API_KEY='sk-dotenv'\nOPENAI_USER_AGENT=agent/2\n", encoding="utf-8")
    monkeypatch.setenv("DOTENV_FILE", str(dotenv))
    # registered for cleanup; the loader writes into os.environ directly
    monkeypatch.setenv("OPENAI_USER_AGENT", "placeholder")
    monkeypatch.setenv("OPENAI_API_KEY", "changeme")
    reset_config_cache()

    cfg = ClientConfig.resolve()
    assert cfg.api_key == "sk-dotenv" and cfg.user_agent == "agent/2"  # nosec B101


def test_explicit_api_key_and_normalization():
    cfg = ClientConfig.resolve("sk-explicit", base_url="https://api.test/v1/", timeout_seconds="4.5")
    assert cfg.api_key == "sk-explicit"  # nosec B101
    assert cfg.base_url == "https://api.test/v1"  # nosec B101
    assert cfg.timeout_seconds == 4.5  # nosec B101


@pytest.mark.parametrize("timeout", [0, -1, "soon"])
def test_invalid_timeout_rejected(timeout):
    with pytest.raises(ValidationError):
        ClientConfig(api_key="sk-x", timeout_seconds=timeout)


def test_unknown_override_rejected():
    with pytest.raises(ValidationError, match="unknown client option"):
        ClientConfig.resolve("sk-x", engine="ada")


def test_config_is_immutable():
    cfg = ClientConfig(api_key="sk-x")
    with pytest.raises(AttributeError):
        cfg.api_key = "other"  # type: ignore[misc]


def test_client_rejects_config_plus_options():
    with pytest.raises(ValidationError):
        Gpt3Client("sk-x", config=ClientConfig(api_key="sk-y"))
