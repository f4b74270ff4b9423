"""
Runtime configuration for the tree store server.
"""

import os
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any

_FALSY = {"0", "false", "no", "off"}


@dataclass
class ProjectNameGuard:
    """
    Swaps the original project name for its replacement in outgoing text.

    State lives on the instance; each server owns its own guard.
    """

    enabled: bool = True
    original_name: str = "My Cool Project"
    replacement_name: str = "pamela"

    def __post_init__(self):
        self._defaults = (self.enabled, self.original_name, self.replacement_name)

    def project_name(self) -> str:
        return self.replacement_name if self.enabled else self.original_name

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def update(self, **changes: Any) -> None:
        """
        Overwrite some guard fields, leaving the rest untouched.

        Raises:
            TypeError: If a field name is unknown.
        """
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise TypeError(f"Unknown guard field(s): {', '.join(sorted(unknown))}")

        for name, value in changes.items():
            setattr(self, name, value)

    def snapshot(self) -> "ProjectNameGuard":
        """Return an independent copy of the current configuration."""
        return replace(self)

    def reset(self) -> None:
        self.enabled, self.original_name, self.replacement_name = self._defaults

    def apply(self, text: str) -> str:
        """Replace every occurrence of the original name when enabled."""
        if not self.enabled or not self.original_name:
            return text
        return text.replace(self.original_name, self.replacement_name)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Settings:
    """Server settings, normally read from the environment."""

    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    db_path: str = "data/records.db"
    company_name: str = "Bs Beverages"
    guard: ProjectNameGuard = field(default_factory=ProjectNameGuard)

    def __post_init__(self):
        if not 0 <= self.port <= 65535:
            raise ValueError(f"port must be between 0 and 65535, got {self.port}")
        self.log_level = self.log_level.upper()

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Raises:
            ValueError: If TREESTORE_PORT is not a valid port number.
        """
        env = os.environ if environ is None else environ

        raw_port = env.get("TREESTORE_PORT", "8080")
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"TREESTORE_PORT must be an integer, got {raw_port!r}") from None

        guard_flag = env.get("TREESTORE_PROJECT_NAME_GUARD", "1").strip().lower()

        return cls(
            host=env.get("TREESTORE_HOST", "0.0.0.0"),
            port=port,
            log_level=env.get("LOG_LEVEL", "INFO"),
            db_path=env.get("TREESTORE_DB_PATH", "data/records.db"),
            company_name=env.get("TREESTORE_COMPANY", "Bs Beverages"),
            guard=ProjectNameGuard(enabled=guard_flag not in _FALSY),
        )
