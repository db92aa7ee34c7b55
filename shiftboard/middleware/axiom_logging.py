"""Axiom 요청 로깅 미들웨어.

Axiom request logging middleware.
Ships one structured record per API call to the Axiom dataset shared with
the domain event logger: method, path, query, masked body, status,
duration, the acting employee and, for error responses, the reason.

Employee contact data (email, phone, address) and credentials are masked.
"""

import json
import re
import time
from typing import Any

import jwt
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from shiftboard.config import settings
from shiftboard.utils.event_logger import get_axiom_client
from shiftboard.utils.jwt import decode_token

# 마스킹 대상 키 — Keys whose values never reach the log
_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|authorization|api_key|apikey|credential|email|phone|address)",
    re.IGNORECASE,
)

_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}
_MAX_LIST_ITEMS: int = 20
_MAX_ERROR_LENGTH: int = 500


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드를 재귀적으로 마스킹합니다.

    Recursively replace sensitive values with "***". Lists are cut to their
    first items (generated shift batches can be large) and nesting deeper
    than five levels is elided.
    """
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else mask_sensitive(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:_MAX_LIST_ITEMS]]
    return data


def request_user_id(request: Request) -> str | None:
    """Bearer 토큰의 sub (직원 ID). 토큰이 없거나 무효하면 None."""
    scheme, _, token = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    try:
        subject: Any = decode_token(token).get("sub")
    except jwt.InvalidTokenError:
        return None
    return str(subject) if subject else None


def error_reason(body: bytes) -> str:
    """오류 응답 본문에서 사유를 추출합니다 (FastAPI "detail" when present)."""
    try:
        data: Any = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:_MAX_ERROR_LENGTH]
    detail: Any = data.get("detail", data) if isinstance(data, dict) else data
    return str(detail)[:_MAX_ERROR_LENGTH]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """API 요청마다 Axiom에 로그 한 건을 남기는 미들웨어.

    Middleware logging every API call to Axiom. A pass-through when Axiom is
    not configured.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        client = get_axiom_client()
        if client is None or request.url.path in _SKIP_PATHS:
            return await call_next(request)

        started: float = time.perf_counter()
        record: dict[str, Any] = {
            "kind": "http_request",
            "method": request.method,
            "path": request.url.path,
            "user_id": request_user_id(request),
        }
        if request.query_params:
            record["query_params"] = mask_sensitive(dict(request.query_params))

        if request.method in ("POST", "PUT", "PATCH"):
            body: bytes = await request.body()
            if body:
                try:
                    record["request_body"] = mask_sensitive(json.loads(body))
                except (json.JSONDecodeError, UnicodeDecodeError):
                    record["request_body"] = "(non-json body)"

        record["status_code"] = 500
        try:
            response: Response = await call_next(request)
            record["status_code"] = response.status_code

            if response.status_code >= 400:
                # 본문을 읽었으므로 새 응답으로 다시 감쌈 — The body is consumed, so re-wrap it
                content: bytes = b""
                async for chunk in response.body_iterator:
                    content += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                record["error"] = error_reason(content)
                response = Response(
                    content=content,
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            record["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            record["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
            try:
                client.ingest_events(settings.AXIOM_DATASET, [record])
            except Exception:
                pass  # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break a request on log failure

        return response
