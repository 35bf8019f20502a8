"""
Command-line interface for Knowledge Vault.

Uses Typer to provide commands for capturing, listing and tagging
knowledge items. Supports loading .env files for API key configuration.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .ai.client import AIClient
from .capture import capture_item, suggest_tags
from .config import AppConfig, load_config
from .core.store import KnowledgeStore
from .core.types import KNOWLEDGE_TYPES, SORT_OPTIONS, CreateKnowledgeItem, FilterState
from .exceptions import ItemNotFoundError, StoreError, ValidationError
from .tagging.extractor import extract_tags
from .utils.logging import setup_logging

try:
    from dotenv import load_dotenv
except Exception:  # noqa: BLE001
    load_dotenv = None

app = typer.Typer(add_completion=False)
console = Console()
err_console = Console(stderr=True)


def _notify(level: str, message: str) -> None:
    style = "green" if level == "success" else "red"
    err_console.print(f"[{style}]{escape(message)}[/{style}]")


def _build_client(cfg: AppConfig) -> AIClient:
    return AIClient(cfg.service, cfg.tagging, notifier=_notify)


def _open_store(cfg: AppConfig) -> KnowledgeStore:
    try:
        return KnowledgeStore(Path(cfg.store.path))
    except StoreError as exc:
        err_console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    store: Path | None = typer.Option(None, "--store", "-s", help="Knowledge store JSON file."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        help="Override the AI service bearer token (or set KNOWLEDGE_VAULT_API_KEY / .env).",
    ),
):
    """Capture notes, links and insights with AI-assisted tagging."""
    # Load environment variables from .env if available
    if load_dotenv is not None:
        load_dotenv()

    cfg = load_config(str(config) if config else None)

    if store is not None:
        cfg.store.path = str(store)
    if log_level:
        cfg.logging.level = log_level
    if api_key:
        cfg.service.api_key = api_key

    setup_logging(cfg.logging, Path(cfg.store.path).parent)
    ctx.obj = cfg


@app.command()
def tags(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Text to extract tags from."),
    max_tags: int | None = typer.Option(None, "--max-tags", "-n", help="Maximum tags to return."),
):
    """Extract tags locally without calling the AI service."""
    cfg: AppConfig = ctx.obj
    limit = max_tags if max_tags is not None else cfg.tagging.max_tags
    found = extract_tags(text, limit)
    if not found:
        console.print("No tags found.")
        return
    console.print(", ".join(found))


@app.command()
def suggest(
    ctx: typer.Context,
    title: str = typer.Option(..., "--title", "-t"),
    content: str = typer.Option(..., "--content", "-b"),
):
    """Suggest tags through the AI service, falling back to local extraction."""
    cfg: AppConfig = ctx.obj
    result = asyncio.run(suggest_tags(_build_client(cfg), title, content))
    if not result.tags:
        console.print("No tags suggested.")
        return
    console.print(escape(", ".join(result.tags)))


@app.command()
def summarize(
    ctx: typer.Context,
    title: str = typer.Option(..., "--title", "-t"),
    content: str = typer.Option(..., "--content", "-b"),
):
    """Summarize an item through the AI service."""
    cfg: AppConfig = ctx.obj
    summary = asyncio.run(_build_client(cfg).summarize(title, content))
    if summary is None:
        console.print("Summary unavailable.")
        raise typer.Exit(code=1)
    console.print(escape(summary))


@app.command()
def ask(
    ctx: typer.Context,
    question: str = typer.Argument(..., help="Question about your knowledge items."),
):
    """Ask the AI assistant a question."""
    cfg: AppConfig = ctx.obj
    answer = asyncio.run(_build_client(cfg).query(question))
    if answer is None:
        console.print("Answer unavailable.")
        raise typer.Exit(code=1)
    console.print(escape(answer))


@app.command()
def add(
    ctx: typer.Context,
    title: str = typer.Option(..., "--title", "-t"),
    content: str = typer.Option(..., "--content", "-b"),
    item_type: str = typer.Option("note", "--type", help=f"One of: {', '.join(KNOWLEDGE_TYPES)}."),
    tags: str | None = typer.Option(None, "--tags", help="Comma-separated tags."),
    source_url: str | None = typer.Option(None, "--source-url"),
    summary: bool = typer.Option(True, "--summary/--no-summary", help="Request an AI summary."),
):
    """Capture a new knowledge item."""
    cfg: AppConfig = ctx.obj
    store = _open_store(cfg)
    client = _build_client(cfg) if summary else None
    draft = CreateKnowledgeItem(
        title=title,
        content=content,
        type=item_type,
        tags=tags,
        source_url=source_url,
    )
    try:
        item = asyncio.run(capture_item(store, client, draft, cfg))
    except ValidationError as exc:
        for field_name, message in exc.errors.items():
            err_console.print(f"[red]{field_name}: {escape(message)}[/red]")
        raise typer.Exit(code=2) from exc
    console.print(f"Created {item.id}")


@app.command("list")
def list_items(
    ctx: typer.Context,
    search: str = typer.Option("", "--search", "-q"),
    item_type: str = typer.Option("all", "--type"),
    tag: list[str] | None = typer.Option(None, "--tag", help="Require tag (repeatable)."),
    sort: str = typer.Option("recent", "--sort", help=f"One of: {', '.join(SORT_OPTIONS)}."),
):
    """List knowledge items."""
    cfg: AppConfig = ctx.obj
    store = _open_store(cfg)
    filters = FilterState(search=search, type=item_type, tags=list(tag or []), sort=sort)
    try:
        items = store.list_items(filters)
    except ValueError as exc:
        err_console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=2) from exc

    if not items:
        console.print("No knowledge items found.")
        return

    table = Table("ID", "Type", "Title", "Tags")
    for item in items:
        table.add_row(item.id[:8], item.type, escape(item.title), escape(", ".join(item.tags)))
    console.print(table)


@app.command("all-tags")
def all_tags(ctx: typer.Context):
    """List every tag in use."""
    cfg: AppConfig = ctx.obj
    for name in _open_store(cfg).all_tags():
        console.print(name)


@app.command()
def delete(
    ctx: typer.Context,
    item_id: str = typer.Argument(..., help="Full item id."),
):
    """Delete a knowledge item."""
    cfg: AppConfig = ctx.obj
    try:
        _open_store(cfg).delete(item_id)
    except ItemNotFoundError as exc:
        err_console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"Deleted {item_id}")


if __name__ == "__main__":
    app()
