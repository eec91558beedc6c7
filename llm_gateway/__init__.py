from __future__ import annotations  # Re-export llm_gateway public API

from .llm_gateway import (
    EmptyResponseError,
    HttpClient,
    HttpResponse,
    LlmGatewayError,
    QuotaError,
    TransportError,
    complete,
)

__all__ = [
    "EmptyResponseError",
    "HttpClient",
    "HttpResponse",
    "LlmGatewayError",
    "QuotaError",
    "TransportError",
    "complete",
]
