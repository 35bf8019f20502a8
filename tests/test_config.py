"""Tests for YAML configuration loading."""

from __future__ import annotations

import pytest

from knowledge_vault.config import (
    AppConfig,
    ServiceConfig,
    get_api_key,
    get_base_url,
    is_service_configured,
    load_config,
)


def test_load_config_without_path_returns_defaults():
    cfg = load_config(None)

    assert cfg == AppConfig()
    assert cfg.tagging.max_tags == 6
    assert cfg.summary.min_content_chars == 100


def test_load_config_merges_sections(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "service:\n"
        "  base_url: https://demo.supabase.co\n"
        "  timeout_seconds: 5\n"
        "  unknown_key: ignored\n"
        "tagging:\n"
        "  max_tags: 3\n"
        "unknown_section:\n"
        "  value: 1\n",
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.service.base_url == "https://demo.supabase.co"
    assert cfg.service.timeout_seconds == 5
    assert cfg.service.function_path == "/functions/v1/ai-process"
    assert cfg.tagging.max_tags == 3
    assert cfg.logging.level == "INFO"


def test_load_config_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(str(path)) == AppConfig()


def test_load_config_rejects_non_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError, match="mapping"):
        load_config(str(path))


def test_default_configs_are_independent():
    first = load_config(None)
    first.store.path = "elsewhere.json"

    assert load_config(None).store.path == "knowledge.json"


def test_endpoint_joins_base_url_and_path():
    cfg = ServiceConfig(base_url="https://demo.supabase.co/", function_path="functions/v1/ai-process")

    assert cfg.endpoint == "https://demo.supabase.co/functions/v1/ai-process"


def test_api_key_precedence(monkeypatch):
    monkeypatch.setenv("KNOWLEDGE_VAULT_API_KEY", "primary")
    monkeypatch.setenv("KNOWLEDGE_VAULT_ANON_KEY", "secondary")

    assert get_api_key(ServiceConfig(api_key="inline")) == "inline"
    assert get_api_key(ServiceConfig()) == "primary"

    monkeypatch.delenv("KNOWLEDGE_VAULT_API_KEY")
    assert get_api_key(ServiceConfig()) == "secondary"

    monkeypatch.delenv("KNOWLEDGE_VAULT_ANON_KEY")
    assert get_api_key(ServiceConfig()) is None


def test_base_url_from_environment(monkeypatch):
    monkeypatch.setenv("KNOWLEDGE_VAULT_URL", "https://env.supabase.co")
    monkeypatch.setenv("KNOWLEDGE_VAULT_API_KEY", "key")

    cfg = ServiceConfig()

    assert get_base_url(cfg) == "https://env.supabase.co"
    assert is_service_configured(cfg)


def test_service_not_configured_without_url(monkeypatch):
    monkeypatch.delenv("KNOWLEDGE_VAULT_URL", raising=False)

    assert not is_service_configured(ServiceConfig(api_key="key"))
