# seoinspector/checks/__init__.py

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from seoinspector.models import CheckResult, Document, Status

logger = logging.getLogger(__name__)


@runtime_checkable
class Check(Protocol):
    """Protocol for a single on-page check.

    Each check receives the Document and returns one CheckResult.
    Checks are stateless, pure functions of the Document: no I/O, no
    mutation of the Document.
    """

    @property
    def name(self) -> str:
        """Unique identity for this check."""
        ...

    def evaluate(self, document: Document) -> CheckResult:
        """Run the check and return its result."""
        ...


# --- Built-in table ---

# Fixed order for run_all. Checks registered outside this list run after it.
BUILTIN_ORDER: tuple[str, ...] = (
    "title",
    "meta_description",
    "canonical",
    "robots_meta",
    "viewport",
    "h1_presence",
    "word_count",
    "links_alt_text",
    "structured_data",
    "headings",
    "links",
)

# Older identities still accepted by name lookup
ALIASES: dict[str, str] = {
    "check_structured_data": "structured_data",
    "check_headings": "headings",
    "check_links": "links",
}

_BUILTINS: dict[str, Check] = {}


def check(name: str):
    """Decorator for registering a built-in check class.

    Usage:
        @check("title")
        class TitleCheck:
            name = "title"
            def evaluate(self, document: Document) -> CheckResult:
                ...

    The table is filled once, at import. The Inspector copies it into its
    own CheckRegistration and never writes back.
    """
    def decorator(cls):
        _BUILTINS[name.lower()] = cls()
        return cls
    return decorator


def get_builtin_checks() -> dict[str, Check]:
    """Return all built-in checks in run order. Inspector calls this."""
    ordered = {name: _BUILTINS[name] for name in BUILTIN_ORDER if name in _BUILTINS}
    for name, instance in _BUILTINS.items():
        ordered.setdefault(name, instance)
    return ordered


def canonical_name(name: str) -> str:
    """Lower-case a requested identity and map legacy aliases."""
    key = name.strip().lower()
    return ALIASES.get(key, key)


def run_check(check_obj: Any, document: Document, name: str = "") -> CheckResult:
    """Invoke one check at the engine boundary.

    Total: any fault raised by the check, or a malformed return value,
    becomes an ERROR result for that check alone.
    """
    key = (name or getattr(check_obj, "name", "") or type(check_obj).__name__).lower()
    try:
        return CheckResult.coerce(key, check_obj.evaluate(document))
    except Exception as e:
        logger.warning("Check '%s' failed: %s", key, e)
        return CheckResult(name=key, status=Status.ERROR, notes=f"{type(e).__name__}: {e}")


# --- Explicit imports to trigger registration ---
# Each check module uses @check() decorator which registers on import.
# New checks: add an import line here.
from seoinspector.checks import meta      # noqa: F401,E402
from seoinspector.checks import content   # noqa: F401,E402
from seoinspector.checks import links     # noqa: F401,E402
