"""Plugin discovery and registration.

Sources (in order): each configured location, then the
``seoinspector.plugins`` entry point group. A location is either a dotted
package name, where every submodule is a candidate, or a filesystem
directory, where every ``*.py`` file is a candidate.

One bad candidate never aborts discovery: it is logged, recorded in
``failures`` and skipped.
"""

from __future__ import annotations

import importlib
import importlib.metadata
import importlib.util
import logging
import pkgutil
import re
import sys
import threading
import types
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from seoinspector.config import PluginConfig
from seoinspector.core.errors import PluginDiscoveryError, PluginLoadError
from seoinspector.models import PluginOrder
from seoinspector.plugins.protocol import PLUGIN_ATTR, Plugin, plugin_identity, validate_plugin

logger = logging.getLogger(__name__)

_DOTTED_NAME = re.compile(r"^[A-Za-z_]\w*(\.[A-Za-z_]\w*)*$")

Candidate = tuple[str, Callable[[], Any]]


@dataclass(frozen=True)
class PluginLoadFailure:
    """One candidate that could not be loaded, and why."""

    candidate: str
    reason: str


def instantiate(unit: Any, candidate: str) -> Plugin:
    """Turn a loaded unit into a validated plugin instance.

    ``unit`` may be a module exposing ``plugin``, a class, a zero-argument
    factory, or an instance.
    """
    obj = unit
    if isinstance(obj, types.ModuleType):
        if not hasattr(obj, PLUGIN_ATTR):
            raise PluginLoadError(f"{candidate}: module defines no '{PLUGIN_ATTR}' attribute")
        obj = getattr(obj, PLUGIN_ATTR)
    if isinstance(obj, type) or (callable(obj) and not hasattr(obj, "evaluate")):
        try:
            obj = obj()
        except Exception as e:
            raise PluginLoadError(f"{candidate}: could not instantiate plugin: {e}") from e
    return validate_plugin(obj, candidate)


def import_file(path: Path) -> types.ModuleType:
    """Import a plugin file under a private module name.

    The file's directory is importable while it executes, so a plugin
    can import its own sibling helpers.
    """
    path = Path(path).resolve()
    module_name = "_seoinspector_plugin_" + re.sub(r"\W", "_", str(path.with_suffix("")))
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise PluginLoadError(f"Cannot import {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    parent = str(path.parent)
    sys.path.insert(0, parent)
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    finally:
        if parent in sys.path:
            sys.path.remove(parent)
    return module


class PluginRegistry:
    """Discovers, loads and holds plugin instances keyed by lower-cased identity.

    Owned by one Inspector. Within the registry the last loaded plugin
    wins an identity collision, with a warning. Identities in ``reserved``
    (the built-in check names) are still registered, with a warning that
    the built-in takes precedence at lookup.
    """

    def __init__(self, config: Optional[PluginConfig] = None, reserved: Iterable[str] = ()) -> None:
        self.config = config or PluginConfig()
        self._reserved = frozenset(name.lower() for name in reserved)
        self._plugins: dict[str, Plugin] = {}
        self._sources: dict[str, str] = {}
        self._failures: list[PluginLoadFailure] = []
        self._lock = threading.RLock()

    # --- Discovery ---

    def discover(self, locations: Optional[Iterable[str]] = None) -> None:
        """Load every candidate found at ``locations`` (default: configured ones).

        Raises:
            PluginDiscoveryError: If locations were given but none could be
                reached and no entry point plugin was found either.
        """
        locs = self.config.locations if locations is None else tuple(str(loc) for loc in locations)
        with self._lock:
            self._failures = []
            reached = 0
            for location in locs:
                try:
                    candidates = self._candidates_at(location)
                except PluginLoadError as e:
                    logger.warning("Plugin location '%s' is unreachable: %s", location, e)
                    continue
                reached += 1
                for candidate, loader in candidates:
                    self._load_candidate(candidate, loader)

            entry_points = self._entry_points() if self.config.use_entry_points else []
            for ep in entry_points:
                self._load_candidate(f"entry point '{ep.name}'", ep.load)

            if locs and not reached and not entry_points:
                raise PluginDiscoveryError(
                    f"None of the plugin locations could be reached: {', '.join(locs)}"
                )
            logger.info(
                "Plugin discovery: %d registered, %d failure(s)",
                len(self._plugins), len(self._failures),
            )

    def load_one(self, identity: str) -> Plugin:
        """Explicitly load and register one plugin by name.

        ``identity`` may be a ``module:attr`` reference, an entry point
        name, a submodule of a configured package location, or a file
        stem under a configured directory location.

        Raises:
            PluginLoadError: If nothing resolves or the unit breaks the contract.
        """
        ref = identity.strip()
        if not ref:
            raise PluginLoadError("Plugin identity must not be empty")
        with self._lock:
            candidate, loader = self._resolve(ref)
            try:
                plugin = instantiate(loader(), candidate)
            except PluginLoadError:
                raise
            except (Exception, SystemExit) as e:
                raise PluginLoadError(f"{candidate}: {type(e).__name__}: {e}") from e
            self._register(plugin, candidate)
            return plugin

    # --- Lookup ---

    def get(self, identity: str) -> Optional[Plugin]:
        with self._lock:
            return self._plugins.get(identity.strip().lower())

    def all(self) -> dict[str, Plugin]:
        """Snapshot of identity -> plugin in the configured order."""
        with self._lock:
            items = list(self._plugins.items())
        if self.config.order == PluginOrder.SORTED:
            items.sort(key=lambda item: item[0])
        return dict(items)

    @property
    def failures(self) -> list[PluginLoadFailure]:
        """Failures recorded by the most recent discovery pass."""
        with self._lock:
            return list(self._failures)

    def __contains__(self, identity: object) -> bool:
        return isinstance(identity, str) and self.get(identity) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._plugins)

    # --- Internals ---

    def _candidates_at(self, location: str) -> list[Candidate]:
        path = Path(location).expanduser()
        if path.is_dir():
            return [
                (str(file), partial(import_file, file))
                for file in sorted(path.glob("*.py"))
                if not file.name.startswith("_")
            ]
        if not _DOTTED_NAME.match(location):
            raise PluginLoadError("not a directory or an importable package name")
        try:
            package = importlib.import_module(location)
        except ImportError as e:
            raise PluginLoadError(str(e)) from e
        if not hasattr(package, "__path__"):
            return [(location, lambda: package)]
        names = sorted(info.name for info in pkgutil.iter_modules(package.__path__))
        return [
            (f"{location}.{name}", partial(importlib.import_module, f"{location}.{name}"))
            for name in names
            if not name.startswith("_")
        ]

    def _resolve(self, ref: str) -> Candidate:
        if ":" in ref:
            module_name, _, attr = ref.partition(":")

            def load_attr() -> Any:
                module = importlib.import_module(module_name.strip())
                try:
                    return getattr(module, attr.strip())
                except AttributeError as e:
                    raise PluginLoadError(f"{module_name} has no attribute '{attr}'") from e

            return ref, load_attr

        if self.config.use_entry_points:
            for ep in self._entry_points():
                if ep.name.lower() == ref.lower():
                    return f"entry point '{ep.name}'", ep.load

        for location in self.config.locations:
            path = Path(location).expanduser()
            if path.is_dir():
                file = path / f"{ref}.py"
                if file.is_file():
                    return str(file), partial(import_file, file)
            elif _DOTTED_NAME.match(location) and _DOTTED_NAME.match(ref):
                full_name = f"{location}.{ref}"
                try:
                    found = importlib.util.find_spec(full_name) is not None
                except (ImportError, ValueError):
                    found = False
                if found:
                    return full_name, partial(importlib.import_module, full_name)

        raise PluginLoadError(f"No loadable plugin unit named '{ref}'")

    def _load_candidate(self, candidate: str, loader: Callable[[], Any]) -> None:
        try:
            plugin = instantiate(loader(), candidate)
        except (Exception, SystemExit) as e:
            logger.warning("Skipping plugin candidate %s: %s", candidate, e)
            self._failures.append(PluginLoadFailure(candidate, f"{type(e).__name__}: {e}"))
            return
        self._register(plugin, candidate)

    def _register(self, plugin: Plugin, candidate: str) -> None:
        identity = plugin_identity(plugin)
        previous = self._sources.get(identity)
        if previous is not None and previous != candidate:
            logger.warning(
                "Plugin identity '%s' from %s replaces the one from %s",
                identity, candidate, previous,
            )
        if identity in self._reserved:
            logger.warning(
                "Plugin '%s' from %s has the name of a built-in check; the built-in takes precedence",
                identity, candidate,
            )
        self._plugins[identity] = plugin
        self._sources[identity] = candidate

    def _entry_points(self) -> list[importlib.metadata.EntryPoint]:
        try:
            return list(importlib.metadata.entry_points(group=self.config.entry_point_group))
        except Exception as e:
            logger.warning("Failed to read entry points: %s", e)
            return []
