from __future__ import annotations  # LLM request gateway module

import json
import logging
import re
from typing import Any, Callable, Dict, Optional, Protocol, Sequence, Tuple

import httpx

from config import LlmRoute
from errors import ParseError, ProviderError


logger = logging.getLogger(__name__)  # Module logger setup

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


class HttpClient(Protocol):  # Minimal HTTP client protocol
    def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> "HttpResponse": ...


class HttpResponse(Protocol):  # Minimal HTTP response protocol
    @property
    def status_code(self) -> int: ...

    def json(self) -> Any: ...


def chat(
    messages: Sequence[Dict[str, str]],
    *,
    cfg: LlmRoute,
    client: Optional[HttpClient] = None,
    options: Optional[Dict[str, Any]] = None,
) -> str:  # Send one chat completion request and return the raw message content
    if not cfg.configured:
        raise ProviderError("AI features are not configured. Missing API key.")
    payload: Dict[str, Any] = {"model": cfg.model, "messages": _normalize_messages(messages)}
    if options:
        payload.update(options)
    if cfg.response_format:
        payload["response_format"] = {"type": cfg.response_format}
    headers = {"Content-Type": "application/json", "Authorization": f"Bearer {cfg.api_key}"}
    headers.update(cfg.extra_headers)
    preview = _preview(payload["messages"])
    if len(preview) > 120:
        preview = preview[:117] + "..."
    logger.info("LLM request send route=%s model=%s preview=%s", cfg.name, cfg.model, preview)
    try:
        response, close_cb = _post(f"{cfg.base_url}{cfg.endpoint}", payload, headers, cfg.timeout_s, client)
    except Exception as exc:  # noqa: BLE001
        logger.error("LLM transport failure: %s", exc)
        raise ProviderError("AI service is unavailable. Please try again later.") from exc
    try:
        if response.status_code >= 400:
            logger.error("LLM error status: %s", response.status_code)
            raise ProviderError("AI service is unavailable. Please try again later.")
        try:
            data = response.json()
        except Exception as exc:  # noqa: BLE001
            logger.error("Invalid JSON payload from LLM: %s", exc)
            raise ParseError("AI returned an unusable response.") from exc
    finally:
        _close_safely(close_cb)
    content = _extract_content(data)
    logger.info("LLM request done route=%s model=%s chars=%d", cfg.name, cfg.model, len(content))
    return content


def parse_json_object(content: str) -> Dict[str, Any]:  # Parse model output, salvaging an embedded object once
    cleaned = _strip_code_fences(content)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        match = _JSON_OBJECT.search(content)
        if not match:
            raise ParseError("AI returned an unusable response.")
        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError as exc:
            logger.warning("LLM output salvage failed: %s", exc)
            raise ParseError("AI returned an unusable response.") from exc
    if not isinstance(parsed, dict):
        raise ParseError("AI returned an unusable response.")
    return parsed


def _post(url: str, payload: Dict[str, Any], headers: Dict[str, str], timeout: float, client: Optional[HttpClient]) -> Tuple[HttpResponse, Optional[Callable[[], None]]]:  # Dispatch HTTP request
    if client is not None:
        return client.post(url, json=payload, headers=headers, timeout=timeout), None
    http_client = httpx.Client(timeout=timeout)
    try:
        response = http_client.post(url, json=payload, headers=headers)
    except Exception:
        http_client.close()
        raise
    return response, http_client.close


def _close_safely(close_cb: Optional[Callable[[], None]]) -> None:  # Close HTTP client callback when provided
    if close_cb is not None:
        close_cb()


def _normalize_messages(messages: Sequence[Dict[str, str]]) -> list[Dict[str, str]]:  # Ensure message payload shape
    normalized: list[Dict[str, str]] = []
    for item in messages:
        if not isinstance(item, dict):
            raise TypeError("Each chat message must be a dict with role/content")
        role = str(item.get("role", "")).strip()
        content = str(item.get("content", ""))
        if not role:
            raise ValueError("Chat message missing role")
        normalized.append({"role": role, "content": content})
    return normalized


def _preview(messages: Sequence[Dict[str, str]]) -> str:  # Build preview string for logging
    for message in messages:
        if message.get("role") == "system":
            continue
        text = message.get("content", "").strip()
        if text:
            return text.splitlines()[0]
    return ""


def _extract_content(data: Any) -> str:  # Extract message content from LLM response
    if isinstance(data, dict):
        choices = data.get("choices")
        if isinstance(choices, list) and choices:
            message = choices[0].get("message") if isinstance(choices[0], dict) else None
            content = message.get("content") if isinstance(message, dict) else None
            if isinstance(content, str):
                return content
        if isinstance(data.get("content"), str):
            return data["content"]
    raise ParseError("AI returned an unusable response.")


def _strip_code_fences(content: str) -> str:  # Remove common markdown fences from LLM output
    text = content.strip()
    if text.startswith("```"):
        lines = text.splitlines()
        if lines:
            lines = lines[1:]
            while lines and lines[0].strip() == "":
                lines = lines[1:]
            while lines and lines[-1].strip() == "":
                lines = lines[:-1]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            text = "\n".join(lines).strip()
    return text
