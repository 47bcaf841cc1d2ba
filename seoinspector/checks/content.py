# seoinspector/checks/content.py

from __future__ import annotations

import re
from collections import Counter

from seoinspector.checks import check
from seoinspector.html import NON_VISIBLE_TAGS, parse, text_of
from seoinspector.models import CheckResult, Document, Status

_HEADING_TAG = re.compile(r"^h[1-6]$")
_JSON_LD_TYPE = re.compile(r"^\s*application/ld\+json\s*$", re.IGNORECASE)


@check("h1_presence")
class H1PresenceCheck:
    """At least one ``<h1>`` with text. Notes carry the first such heading."""
    name = "h1_presence"

    def evaluate(self, document: Document) -> CheckResult:
        for h1 in parse(document).find_all("h1"):
            text = text_of(h1)
            if text:
                return CheckResult(self.name, Status.OK, text)
        return CheckResult(self.name, Status.WARN, "missing h1")


@check("word_count")
class WordCountCheck:
    """Count whitespace-separated words of visible text.

    Script, style and similar non-visible element bodies are excluded
    before counting.
    """
    name = "word_count"

    def evaluate(self, document: Document) -> CheckResult:
        soup = parse(document)
        for tag in soup.find_all(list(NON_VISIBLE_TAGS)):
            tag.decompose()
        words = len(soup.get_text(" ").split())
        return CheckResult(self.name, Status.OK if words > 0 else Status.WARN, f"{words} words")


@check("headings")
class HeadingsCheck:
    name = "headings"

    def evaluate(self, document: Document) -> CheckResult:
        counts = Counter(tag.name.lower() for tag in parse(document).find_all(_HEADING_TAG))
        if not counts:
            return CheckResult(self.name, Status.WARN, "no headings found")
        summary = ", ".join(f"{level}: {counts[level]}" for level in sorted(counts))
        return CheckResult(self.name, Status.OK, summary)


@check("structured_data")
class StructuredDataCheck:
    name = "structured_data"

    def evaluate(self, document: Document) -> CheckResult:
        blocks = parse(document).find_all("script", attrs={"type": _JSON_LD_TYPE})
        if not blocks:
            return CheckResult(self.name, Status.WARN, "no structured data found")
        return CheckResult(self.name, Status.OK, f"{len(blocks)} JSON-LD block(s) found")
