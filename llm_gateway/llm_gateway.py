from __future__ import annotations  # LLM request gateway module

import logging
import os
from typing import Any, Dict, Optional, Protocol

import httpx

from config import LlmRoute


logger = logging.getLogger(__name__)  # Module logger setup


class HttpClient(Protocol):  # Minimal HTTP client protocol
    def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> "HttpResponse": ...


class HttpResponse(Protocol):  # Minimal HTTP response protocol
    @property
    def status_code(self) -> int: ...

    def json(self) -> Any: ...

    @property
    def text(self) -> str: ...


class LlmGatewayError(RuntimeError):  # Base gateway error
    pass


class TransportError(LlmGatewayError):  # Remote call could not be completed
    pass


class QuotaError(TransportError):  # Remote service rejected the call for rate or quota
    pass


class EmptyResponseError(LlmGatewayError):  # Call succeeded without a usable completion
    pass


def complete(
    prompt: str,
    max_tokens: int,
    *,
    cfg: LlmRoute,
    client: Optional[HttpClient] = None,
) -> str:  # Send one prompt and return the generated text
    payload: Dict[str, Any] = {
        "model": cfg.model,
        "messages": [{"role": "user", "content": prompt}],
        "temperature": cfg.temperature,
        "max_tokens": max_tokens,
    }
    headers = _headers(cfg)
    preview = _preview(prompt)
    logger.info(
        "LLM request send route=%s model=%s max_tokens=%d preview=%s",
        cfg.name,
        cfg.model,
        max_tokens,
        preview,
    )
    url = f"{cfg.base_url}{cfg.endpoint}"
    try:
        response = _post(url, payload, headers, cfg.timeout_s, client)
    except LlmGatewayError:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.error("LLM transport failure: %s", exc)
        raise TransportError(f"LLM transport failed: {exc}") from exc
    if response.status_code == 429:
        logger.error("LLM quota exhausted route=%s", cfg.name)
        raise QuotaError(f"LLM quota exceeded (status 429): {_clip(response.text)}")
    if response.status_code >= 400:
        logger.error("LLM error status: %s", response.status_code)
        raise TransportError(f"LLM returned status {response.status_code}: {_clip(response.text)}")
    try:
        data = response.json()
    except Exception as exc:  # noqa: BLE001
        logger.error("Invalid JSON payload from LLM: %s", exc)
        raise TransportError("LLM payload was not JSON") from exc
    content = _extract_content(data)
    logger.info("LLM request done route=%s model=%s chars=%d", cfg.name, cfg.model, len(content))
    return content


def _headers(cfg: LlmRoute) -> Dict[str, str]:  # Build request headers with optional bearer token
    headers = {"Content-Type": "application/json"}
    if cfg.api_key_env:
        api_key = os.getenv(cfg.api_key_env)
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        else:
            logger.warning("%s not set; calling route=%s without credentials", cfg.api_key_env, cfg.name)
    headers.update(cfg.extra_headers)
    return headers


def _post(url: str, payload: Dict[str, Any], headers: Dict[str, str], timeout: float, client: Optional[HttpClient]) -> HttpResponse:  # Dispatch HTTP request
    if client is not None:
        return client.post(url, json=payload, headers=headers, timeout=timeout)
    with httpx.Client(timeout=timeout) as http_client:
        return http_client.post(url, json=payload, headers=headers)


def _preview(prompt: str) -> str:  # First non-blank prompt line for logging
    for line in prompt.splitlines():
        text = line.strip()
        if text:
            return _clip(text, 120)
    return ""


def _clip(text: str, limit: int = 300) -> str:
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def _extract_content(data: Any) -> str:  # Extract message content from LLM response
    if isinstance(data, dict):
        choices = data.get("choices")
        if isinstance(choices, list) and choices:
            message = choices[0].get("message") if isinstance(choices[0], dict) else None
            content = message.get("content") if isinstance(message, dict) else None
            if isinstance(content, str) and content.strip():
                return content
    raise EmptyResponseError("LLM response returned no usable choice")
