# seoinspector/checks/meta.py

from __future__ import annotations

from seoinspector.checks import check
from seoinspector.html import attr_text, find_link, find_meta, parse, text_of
from seoinspector.models import CheckResult, Document, Status


@check("title")
class TitleCheck:
    """The page has a ``<title>`` with non-empty text. Missing is an ERROR."""
    name = "title"

    def evaluate(self, document: Document) -> CheckResult:
        soup = parse(document)
        title = soup.find("title")
        text = text_of(title) if title is not None else ""
        if text:
            return CheckResult(self.name, Status.OK, text)
        return CheckResult(self.name, Status.ERROR, "missing title")


@check("meta_description")
class MetaDescriptionCheck:
    name = "meta_description"

    def evaluate(self, document: Document) -> CheckResult:
        content = attr_text(find_meta(parse(document), "description"), "content")
        if content:
            return CheckResult(self.name, Status.OK, content)
        return CheckResult(self.name, Status.WARN, "missing meta description")


@check("canonical")
class CanonicalCheck:
    name = "canonical"

    def evaluate(self, document: Document) -> CheckResult:
        href = attr_text(find_link(parse(document), "canonical"), "href")
        if href:
            return CheckResult(self.name, Status.OK, href)
        return CheckResult(self.name, Status.WARN, "missing canonical link")


@check("robots_meta")
class RobotsMetaCheck:
    """Presence of a robots meta tag. Notes carry the directive itself."""
    name = "robots_meta"

    def evaluate(self, document: Document) -> CheckResult:
        tag = find_meta(parse(document), "robots")
        if tag is None:
            return CheckResult(self.name, Status.WARN, "missing robots meta")
        return CheckResult(self.name, Status.OK, attr_text(tag, "content") or "robots meta present")


@check("viewport")
class ViewportCheck:
    name = "viewport"

    def evaluate(self, document: Document) -> CheckResult:
        if find_meta(parse(document), "viewport") is None:
            return CheckResult(self.name, Status.WARN, "missing viewport meta")
        return CheckResult(self.name, Status.OK, "viewport meta present")
