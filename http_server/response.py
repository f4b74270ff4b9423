import json
from dataclasses import dataclass, field, replace
from typing import Any

JSON = 'application/json'
TEXT = 'text/plain; charset=utf-8'


@dataclass
class Response:
    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def with_body(self, body: bytes, content_type: str) -> 'Response':
        """Copy of this response carrying body; self is left untouched."""
        return replace(self, headers={**self.headers, 'content-type': content_type}, body=body)

    def json(self, payload: Any) -> 'Response':
        return self.with_body(json.dumps(payload).encode(), JSON)

    def text(self, payload: str) -> 'Response':
        return self.with_body(payload.encode(), TEXT)


def response(status_code: int = 200, headers: dict[str, str] | None = None) -> Response:
    return Response(status=status_code, headers=dict(headers or {}))


def error(status_code: int, message: str, **extra: Any) -> Response:
    """Uniform JSON error envelope: {"error": message, ...extra}."""
    return response(status_code).json({"error": message, **extra})
