"""seoinspector data models.

Contains the value objects that cross module boundaries: the immutable
Document every check reads, and the CheckResult every check produces.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union
from urllib.parse import urlsplit


# --- Enums ---


class Status(str, Enum):
    """Closed set of check outcomes.

    UNKNOWN is reserved for a requested name that resolves to neither a
    built-in check nor a registered plugin.
    """

    OK = "ok"
    WARN = "warn"
    MISSING = "missing"
    ERROR = "error"
    UNKNOWN = "unknown"


class OutputFormat(str, Enum):
    """Report rendering modes."""

    TEXT = "text"
    STRUCTURED = "structured"
    JSON = "json"


class PluginOrder(str, Enum):
    """How plugin identities are ordered in aggregated output."""

    SORTED = "sorted"
    DISCOVERY = "discovery"


class InspectorState(str, Enum):
    """Lifecycle of one Inspector instance."""

    CREATED = "created"
    PLUGINS_LOADED = "plugins_loaded"
    DOCUMENT_ACQUIRED = "document_acquired"
    RESULTS_AVAILABLE = "results_available"


# --- Dataclasses ---


@dataclass(frozen=True)
class Document:
    """One fetched or injected page plus the locator it came from.

    Immutable. Shared by reference across every check run against it.
    """

    content: str
    url: Optional[str] = None

    @classmethod
    def of(cls, value: Union["Document", str, bytes], url: Optional[str] = None) -> "Document":
        """Wrap raw HTML (text or bytes) in a Document. Documents pass through."""
        if isinstance(value, Document):
            return value
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")
        if not isinstance(value, str):
            raise TypeError(f"Cannot build a Document from {type(value).__name__}")
        return cls(content=value, url=url)

    @property
    def host(self) -> Optional[str]:
        """Lower-cased host of an absolute http(s) url, else None."""
        if not self.url:
            return None
        parts = urlsplit(self.url.strip())
        if parts.scheme.lower() not in ("http", "https") or not parts.hostname:
            return None
        return parts.hostname.lower()

    @property
    def is_empty(self) -> bool:
        return not self.content.strip()


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one check against one Document.

    Immutable value object with no back-reference to the Document or the
    Inspector. ``name`` is stored lower-cased, ``notes`` is never None.
    """

    name: str
    status: Status
    notes: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("CheckResult name must be a non-empty string")
        object.__setattr__(self, "name", self.name.strip().lower())
        # Raises ValueError for anything outside the closed set
        object.__setattr__(self, "status", Status(self.status))
        object.__setattr__(self, "notes", "" if self.notes is None else str(self.notes))

    @classmethod
    def unknown(cls, name: str) -> "CheckResult":
        return cls(name=name.strip() or "(empty)", status=Status.UNKNOWN, notes="")

    @classmethod
    def coerce(cls, name: str, value: Any) -> "CheckResult":
        """Normalize whatever a check returned into a CheckResult keyed by ``name``.

        Accepts a CheckResult (re-keyed to ``name``) or a mapping carrying
        ``status`` and optional ``notes``.

        Raises:
            TypeError: If the value has neither shape.
            ValueError: If the status is outside the closed set.
        """
        if isinstance(value, CheckResult):
            if value.name == name.strip().lower():
                return value
            return cls(name=name, status=value.status, notes=value.notes)
        if isinstance(value, Mapping) and "status" in value:
            notes = value.get("notes")
            return cls(name=name, status=value["status"], notes="" if notes is None else notes)
        raise TypeError(
            f"Check '{name}' returned {type(value).__name__}, expected CheckResult"
        )

    def to_dict(self) -> dict[str, str]:
        """Plain, directly serializable form."""
        return {"name": self.name, "status": self.status.value, "notes": self.notes}

    def to_line(self) -> str:
        """Format as a single ``[status] name: notes`` report line."""
        return f"[{self.status.value}] {self.name}: {self.notes}"
