"""Tests for logging helpers."""

from __future__ import annotations

import json
import logging

from knowledge_vault.config import LoggingConfig
from knowledge_vault.core.store import KnowledgeStore
from knowledge_vault.core.types import CreateKnowledgeItem
from knowledge_vault.utils.logging import JsonlFormatter, log_event, setup_logging, truncate_text


def test_jsonl_formatter_includes_extra_fields():
    record = logging.LogRecord("knowledge_vault.ai", logging.INFO, __file__, 1, "AI fallback", None, None)
    record.action = "auto-tag"
    record.tag_count = 2

    payload = json.loads(JsonlFormatter().format(record))

    assert payload["message"] == "AI fallback"
    assert payload["level"] == "INFO"
    assert payload["action"] == "auto-tag"
    assert payload["tag_count"] == 2


def test_setup_logging_writes_jsonl_file(tmp_path):
    cfg = LoggingConfig(console=False, file=True, filename="run.jsonl")

    logger = setup_logging(cfg, tmp_path)
    log_event(logger, "Created item", item_type="note")
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "run.jsonl").read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[-1])["item_type"] == "note"

    for handler in logger.handlers:
        handler.close()
    logger.handlers = []


def test_log_event_ignores_missing_logger():
    log_event(None, "ignored", field="value")


def test_truncate_text():
    assert truncate_text("short", 10) == "short"
    assert truncate_text("x" * 20, 10) == "x" * 10 + "...(truncated)"


def test_store_events_reach_jsonl_file(tmp_path):
    cfg = LoggingConfig(console=False, file=True, filename="store.jsonl")
    logger = setup_logging(cfg, tmp_path)

    item = KnowledgeStore(tmp_path / "knowledge.json").create(
        CreateKnowledgeItem(title="React", content="Hooks", type="insight")
    )
    for handler in logger.handlers:
        handler.flush()

    records = [json.loads(line) for line in (tmp_path / "store.jsonl").read_text(encoding="utf-8").splitlines()]
    created = [record for record in records if record["message"] == f"Created knowledge item {item.id}"]
    assert created[0]["item_type"] == "insight"
    assert created[0]["logger"] == "knowledge_vault.core.store"

    for handler in logger.handlers:
        handler.close()
    logger.handlers = []
