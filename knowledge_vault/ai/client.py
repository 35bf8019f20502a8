"""
Client for the remote AI processing function.

The remote function accepts a single JSON POST with an "action" field
("summarize", "auto-tag" or "query"). Every operation here issues exactly
one request and never raises: tag suggestions fall back to the local
extractor, while summaries and answers come back as None when the
service cannot produce them.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import httpx

from ..config import ServiceConfig, TaggingConfig, get_api_key, get_base_url
from ..core.types import AutoTagResult
from ..tagging.extractor import extract_tags
from ..utils.logging import log_event, truncate_text

Notifier = Callable[[str, str], None]

OFFLINE_NOTICE = "Using local tag suggestions (offline)."
UNAVAILABLE_NOTICE = "AI unavailable, using local tag suggestions."
SUMMARY_FAILED_NOTICE = "Failed to generate summary"
QUERY_FAILED_NOTICE = "Failed to answer question"


class AIClient:
    """Facade over the remote AI function with a local tagging fallback.

    Attributes:
        cfg: Endpoint, credentials and transport settings
        max_tags: Limit applied to locally extracted fallback tags
        notifier: Optional callback receiving (level, message) user notices
        logger: Logger used for request/response events
    """

    def __init__(
        self,
        cfg: ServiceConfig,
        tagging_cfg: TaggingConfig | None = None,
        notifier: Notifier | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ):
        self.cfg = cfg
        self.max_tags = (tagging_cfg or TaggingConfig()).max_tags
        self.notifier = notifier
        self.logger = logger or logging.getLogger(__name__)
        self._transport = transport
        self._in_flight = 0

    @property
    def is_loading(self) -> bool:
        """True while at least one request is awaiting the remote service."""
        return self._in_flight > 0

    async def summarize(self, title: str, content: str) -> str | None:
        """Request a short summary of a knowledge item.

        Returns:
            The summary text, or None when the service failed or replied
            without a usable "result" field
        """
        return await self._request_text(
            {"action": "summarize", "title": title, "content": content},
            failure_notice=SUMMARY_FAILED_NOTICE,
        )

    async def query(self, question: str) -> str | None:
        """Ask the assistant a free-form question about stored knowledge."""
        return await self._request_text(
            {"action": "query", "content": question},
            failure_notice=QUERY_FAILED_NOTICE,
        )

    async def auto_tag(self, title: str, content: str) -> AutoTagResult:
        """Suggest tags for a knowledge item.

        A failed request (non-2xx status or transport error) is answered
        with locally extracted tags and `fallback=True`. A successful
        response without a usable "tags" list yields an empty,
        non-fallback result.
        """
        action = "auto-tag"
        self._in_flight += 1
        try:
            try:
                resp = await self._post({"action": action, "title": title, "content": content})
            except Exception as exc:  # noqa: BLE001
                self._log_failure(action, status="transport_error", error=f"{type(exc).__name__}: {exc}")
                self._notify("success", OFFLINE_NOTICE)
                return self._fallback_tags(title, content)

            if not resp.is_success:
                self._log_failure(action, status="http_error", error=_error_message(resp))
                self._notify("success", UNAVAILABLE_NOTICE)
                return self._fallback_tags(title, content)

            tags = _parse_tags(_json_body(resp))
            log_event(self.logger, "AI response", action=action, status="ok", tag_count=len(tags))
            return AutoTagResult(tags=tags, fallback=False)
        finally:
            self._in_flight -= 1

    async def _request_text(self, payload: dict[str, Any], failure_notice: str) -> str | None:
        action = payload["action"]
        self._in_flight += 1
        try:
            try:
                resp = await self._post(payload)
            except Exception as exc:  # noqa: BLE001
                self._log_failure(action, status="transport_error", error=f"{type(exc).__name__}: {exc}")
                self._notify("error", failure_notice)
                return None

            if not resp.is_success:
                self._log_failure(action, status="http_error", error=_error_message(resp))
                self._notify("error", failure_notice)
                return None

            result = _json_body(resp).get("result")
            if not isinstance(result, str):
                self._log_failure(action, status="parse_error", error="missing result field")
                self._notify("error", failure_notice)
                return None

            log_event(
                self.logger,
                "AI response",
                action=action,
                status="ok",
                result=truncate_text(result, 200),
            )
            return result
        finally:
            self._in_flight -= 1

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        if not get_base_url(self.cfg):
            raise ValueError("AI service base URL is not configured")
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {get_api_key(self.cfg) or ''}",
        }
        log_event(self.logger, "AI request", action=payload.get("action"), endpoint=self.cfg.endpoint)
        async with httpx.AsyncClient(
            timeout=self.cfg.timeout_seconds,
            follow_redirects=True,
            trust_env=self.cfg.trust_env,
            transport=self._transport,
        ) as client:
            return await client.post(self.cfg.endpoint, json=payload, headers=headers)

    def _fallback_tags(self, title: str, content: str) -> AutoTagResult:
        tags = extract_tags(f"{title} \n {content}", self.max_tags)
        log_event(self.logger, "AI fallback", action="auto-tag", tag_count=len(tags))
        return AutoTagResult(tags=tags, fallback=True)

    def _log_failure(self, action: str, status: str, error: str) -> None:
        self.logger.warning(
            "AI %s failed: %s",
            action,
            error,
            extra={"action": action, "status": status},
        )

    def _notify(self, level: str, message: str) -> None:
        if self.notifier is not None:
            self.notifier(level, message)


def _json_body(resp: httpx.Response) -> dict[str, Any]:
    try:
        data = resp.json()
    except (ValueError, RecursionError):
        return {}
    return data if isinstance(data, dict) else {}


def _parse_tags(data: dict[str, Any]) -> list[str]:
    tags = data.get("tags")
    if not isinstance(tags, list):
        return []
    return [tag for tag in tags if isinstance(tag, str)]


def _error_message(resp: httpx.Response) -> str:
    error = _json_body(resp).get("error")
    if isinstance(error, str) and error:
        return error
    if resp.status_code == 404:
        return "AI function not deployed"
    return f"Request failed ({resp.status_code})"
