import json
from dataclasses import dataclass
from typing import Any


@dataclass
class Request:
    method: str
    path: str
    headers: dict[str, str]
    query_params: dict[str, list]
    body: bytes
    version: str

    def __post_init__(self):
        try:
            self._payload = json.loads(self.body) if self.body else None
            self._valid_json = bool(self.body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            self._payload = None
            self._valid_json = False

        self._dict = self._payload if isinstance(self._payload, dict) else None

    def json(self) -> Any:
        """Return the decoded JSON body, or raise ValueError if there is none."""
        if not self._valid_json:
            raise ValueError("Request body is not valid JSON")
        return self._payload

    def has(self, field: str) -> bool:
        if field is None:
            raise ValueError("Field cannot be None")

        if len(field) == 0:
            raise ValueError("Field cannot be empty")

        if field in self.query_params:
            return True

        if self._dict and field in self._dict:
            return True

        return False

    def get(self, field: str, default: Any = None) -> Any:
        if field is None:
            raise ValueError("Field cannot be None")

        if len(field) == 0:
            raise ValueError("Field cannot be empty")

        if field in self.query_params and self.query_params[field]:
            return self.query_params[field][0]

        if self._dict and field in self._dict:
            return self._dict[field]

        return default
