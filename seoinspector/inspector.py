# seoinspector/inspector.py

from __future__ import annotations

import dataclasses
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from os import PathLike
from typing import Any, Iterable, Mapping, Optional, Union

from seoinspector.checks import Check, canonical_name, get_builtin_checks, run_check
from seoinspector.config import InspectorConfig
from seoinspector.core.errors import FetchError, NoSourceError, PluginDiscoveryError
from seoinspector.core.fetch import Fetcher, RequestsFetcher
from seoinspector.models import CheckResult, Document, InspectorState, OutputFormat
from seoinspector.plugins import Plugin, PluginRegistry
from seoinspector.report import merge_results, render

logger = logging.getLogger(__name__)

DocumentInput = Union[Document, str, bytes]


class CheckRegistration:
    """Identity -> check lookup owned by one Inspector.

    Two disjoint sources: a copy of the compiled-in built-in table, and the
    Inspector's own PluginRegistry. Built-ins always win a name lookup.
    """

    def __init__(self, builtins: Mapping[str, Check], plugins: PluginRegistry) -> None:
        self.builtins: dict[str, Check] = dict(builtins)
        self.plugins = plugins

    def resolve(self, name: str) -> Optional[Union[Check, Plugin]]:
        key = canonical_name(name)
        if key in self.builtins:
            return self.builtins[key]
        return self.plugins.get(key)

    def plugin_checks(self, *, exclude_builtins: bool = False) -> dict[str, Plugin]:
        plugins = self.plugins.all()
        if exclude_builtins:
            return {name: p for name, p in plugins.items() if name not in self.builtins}
        return plugins

    def names(self) -> list[str]:
        return list(self.builtins) + list(self.plugin_checks(exclude_builtins=True))


class Inspector:
    """Run on-page SEO checks against one HTML document.

    The single entry point tying together document acquisition, the
    built-in checks and the plugin registry.

    Usage:
        inspector = Inspector(url="https://example.com")
        inspector.run_one("title")          # fetches once, then reuses
        inspector.run_all()                 # built-ins, fixed order
        inspector.run_plugins()             # plugins only
        inspector.run_url("https://example.org")   # fetch + everything, merged

    Document acquisition happens at most once per source; concurrent
    callers wait for the first fetch instead of starting their own.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        html: Optional[DocumentInput] = None,
        *,
        config: Optional[InspectorConfig] = None,
        fetcher: Optional[Fetcher] = None,
        plugin_dirs: Optional[Iterable[Union[str, PathLike]]] = None,
    ) -> None:
        config = config or InspectorConfig()
        if plugin_dirs:
            plugins = config.plugins.with_locations(*(str(d) for d in plugin_dirs))
            config = dataclasses.replace(config, plugins=plugins)
        self.config = config
        self.url = url

        self._fetcher = fetcher
        self._owns_fetcher = False
        self._document: Optional[Document] = Document.of(html, url=url) if html is not None else None
        self._report: Optional[dict[str, CheckResult]] = None
        self._results_available = False
        self._plugins_loaded = False
        self._lock = threading.RLock()

        builtins = get_builtin_checks()
        self.registration = CheckRegistration(
            builtins, PluginRegistry(config.plugins, reserved=builtins)
        )

        if config.eager_plugins:
            self.load_plugins()

    # --- Properties ---

    @property
    def plugins(self) -> PluginRegistry:
        return self.registration.plugins

    @property
    def fetcher(self) -> Fetcher:
        if self._fetcher is None:
            self._fetcher = RequestsFetcher(self.config.fetch)
            self._owns_fetcher = True
        return self._fetcher

    @property
    def document(self) -> Document:
        """The held Document, fetched from ``url`` on first access."""
        return self._acquire()

    @property
    def state(self) -> InspectorState:
        if self._results_available:
            return InspectorState.RESULTS_AVAILABLE
        if self._document is not None:
            return InspectorState.DOCUMENT_ACQUIRED
        if self._plugins_loaded:
            return InspectorState.PLUGINS_LOADED
        return InspectorState.CREATED

    # --- Setup ---

    def load_plugins(self, locations: Optional[Iterable[str]] = None) -> None:
        """(Re-)run plugin discovery. An unreachable search path is logged, not raised."""
        with self._lock:
            try:
                self.plugins.discover(locations)
            except PluginDiscoveryError as e:
                logger.warning("Plugin discovery failed: %s", e)
            self._plugins_loaded = True
            self._report = None

    def set_source(self, url: Optional[str] = None, html: Optional[DocumentInput] = None) -> None:
        """Replace the page source. Drops the held document and any cached report."""
        with self._lock:
            self.url = url
            self._document = Document.of(html, url=url) if html is not None else None
            self._report = None
            self._results_available = False

    def names(self) -> list[str]:
        """Every resolvable identity: built-ins first, then plugins."""
        self._ensure_plugins()
        return self.registration.names()

    # --- Running checks ---

    def run_one(self, name: str, document: Optional[DocumentInput] = None) -> CheckResult:
        """Run one built-in check or plugin.

        An identity found in neither returns an UNKNOWN result; nothing is
        fetched for it.
        """
        self._ensure_plugins()
        check_obj = self.registration.resolve(name)
        if check_obj is None:
            return CheckResult.unknown(name)
        result = run_check(check_obj, self._resolve_document(document), canonical_name(name))
        self._results_available = True
        return result

    def run_all(self, document: Optional[DocumentInput] = None) -> list[CheckResult]:
        """Run every built-in check in its fixed order.

        With ``config.run_all_includes_plugins`` every plugin whose name does
        not collide with a built-in runs afterwards, in registry order.
        """
        self._ensure_plugins()
        doc = self._resolve_document(document)
        checks: list[tuple[str, Any]] = list(self.registration.builtins.items())
        if self.config.run_all_includes_plugins:
            checks.extend(self.registration.plugin_checks(exclude_builtins=True).items())
        results = self._evaluate(checks, doc)
        self._results_available = True
        return results

    def run_plugins(self, document: Optional[DocumentInput] = None) -> dict[str, CheckResult]:
        """Run only the plugin checks, keyed by plugin identity."""
        self._ensure_plugins()
        results = self._run_plugins_on(self._resolve_document(document))
        self._results_available = True
        return results

    def report(self, document: Optional[DocumentInput] = None) -> dict[str, CheckResult]:
        """Merged built-in and plugin report.

        For the held document the report is cached until the source changes.
        """
        self._ensure_plugins()
        if document is not None:
            return self._build_report(Document.of(document, url=self.url))
        doc = self._acquire()
        with self._lock:
            if self._report is not None and self._document is doc:
                return dict(self._report)
        report = self._build_report(doc)
        with self._lock:
            if self._document is doc:
                self._report = report
        return dict(report)

    def run_url(self, url: str) -> Union[dict[str, CheckResult], dict[str, str]]:
        """Fetch ``url`` and run built-ins and plugins, merged into one report.

        The fetched page replaces any held document. A fetch failure is
        returned as ``{"error": message}`` and the held document is kept,
        so batch callers can move on to the next URL.
        """
        try:
            content = self.fetcher.fetch(url)
        except FetchError as e:
            logger.warning("Fetching %s failed: %s", url, e)
            return {"error": str(e)}

        doc = Document(content=content, url=url)
        with self._lock:
            self.url = url
            self._document = doc
            self._report = None
        self._ensure_plugins()
        report = self._build_report(doc)
        with self._lock:
            if self._document is doc:
                self._report = report
        logger.info("Inspected %s: %d result(s)", url, len(report))
        return dict(report)

    def render(
        self,
        report: Optional[Any] = None,
        fmt: Optional[Union[OutputFormat, str]] = None,
    ) -> Any:
        """Render ``report`` (default: this Inspector's report) in ``fmt``."""
        if report is None:
            report = self.report()
        return render(report, fmt or self.config.output_format)

    def close(self) -> None:
        """Close the fetcher this Inspector created. An injected fetcher is left open."""
        with self._lock:
            if self._owns_fetcher and self._fetcher is not None:
                self._fetcher.close()
                self._fetcher = None
                self._owns_fetcher = False

    def __enter__(self) -> "Inspector":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # --- Internals ---

    def _ensure_plugins(self) -> None:
        if self._plugins_loaded:
            return
        with self._lock:
            if not self._plugins_loaded:
                self.load_plugins()

    def _acquire(self) -> Document:
        with self._lock:
            if self._document is None:
                if not self.url:
                    raise NoSourceError("URL missing: no document given and no url to fetch")
                content = self.fetcher.fetch(self.url)
                self._document = Document(content=content, url=self.url)
                self._report = None
            return self._document

    def _resolve_document(self, document: Optional[DocumentInput]) -> Document:
        if document is None:
            return self._acquire()
        return Document.of(document, url=self.url)

    def _run_plugins_on(self, doc: Document) -> dict[str, CheckResult]:
        results = self._evaluate(list(self.registration.plugin_checks().items()), doc)
        return {result.name: result for result in results}

    def _build_report(self, doc: Document) -> dict[str, CheckResult]:
        builtin_results = self._evaluate(list(self.registration.builtins.items()), doc)
        report = merge_results(builtin_results, self._run_plugins_on(doc))
        self._results_available = True
        return report

    def _evaluate(self, checks: list[tuple[str, Any]], doc: Document) -> list[CheckResult]:
        """Run ``checks`` against one Document, results in input order.

        Checks are pure, so with max_workers > 1 they fan out over a thread
        pool with no locking beyond collecting the results.
        """
        workers = self.config.max_workers
        if workers <= 1 or len(checks) <= 1:
            return [run_check(check_obj, doc, name) for name, check_obj in checks]
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(lambda item: run_check(item[1], doc, item[0]), checks))
