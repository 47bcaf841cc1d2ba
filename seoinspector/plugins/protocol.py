"""Plugin protocol: the contract every externally supplied check satisfies."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from seoinspector.core.errors import PluginLoadError
from seoinspector.models import CheckResult, Document

# Module attribute a loadable unit exposes: an instance, or a class /
# zero-argument factory producing one.
PLUGIN_ATTR = "plugin"


@runtime_checkable
class Plugin(Protocol):
    """Protocol for plugin checks.

    Plugins implement evaluate(document) and return a CheckResult.
    ``name`` is the plugin's identity; the registry keys it lower-cased.
    evaluate must not raise and must not perform I/O, same as a built-in
    check. The engine still converts a raised exception into an ERROR
    result.
    """

    name: str

    def evaluate(self, document: Document) -> CheckResult:
        ...


def plugin_identity(obj: Any) -> str:
    """Declared identity of ``obj``, lower-cased.

    ``name`` may be an attribute, a property, or a zero-argument method.

    Raises:
        PluginLoadError: If the identity is missing or empty.
    """
    name = getattr(obj, "name", None)
    if callable(name):
        name = name()
    if not isinstance(name, str) or not name.strip():
        raise PluginLoadError(f"{type(obj).__name__} does not declare a non-empty name")
    return name.strip().lower()


def validate_plugin(obj: Any, candidate: str) -> Any:
    """Reject objects that do not satisfy the plugin contract at load time."""
    identity = plugin_identity(obj)
    if not callable(getattr(obj, "evaluate", None)):
        raise PluginLoadError(f"{candidate}: plugin '{identity}' does not implement evaluate()")
    return obj
