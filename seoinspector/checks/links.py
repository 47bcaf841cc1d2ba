# seoinspector/checks/links.py

from __future__ import annotations

import re
from typing import Optional

from seoinspector.checks import check
from seoinspector.html import href_host, is_absolute_href, parse, text_of
from seoinspector.models import CheckResult, Document, Status

# Anchor text that tells neither users nor crawlers where the link goes.
# Matched against the whole whitespace-normalized text.
POOR_ANCHOR_TEXT = re.compile(
    r"^(?:click\s*here|read\s*more|more|link|here|details)$", re.IGNORECASE
)


def is_internal(href: Optional[str], base_host: Optional[str]) -> bool:
    """Classify one href against the Document's host.

    Relative, fragment, mailto and other non-absolute hrefs are internal.
    An absolute href is internal only when its host equals ``base_host``;
    with no base host known every absolute href counts as external.
    """
    if href is None or not is_absolute_href(href):
        return True
    host = href_host(href)
    return base_host is not None and host is not None and host == base_host


@check("links_alt_text")
class ImageAltTextCheck:
    """Every ``<img>`` carries a non-empty ``alt`` attribute."""
    name = "links_alt_text"

    def evaluate(self, document: Document) -> CheckResult:
        images = parse(document).find_all("img")
        if not images:
            return CheckResult(self.name, Status.OK, "no images found")
        missing = sum(1 for img in images if not (img.get("alt") or "").strip())
        if missing:
            return CheckResult(self.name, Status.WARN, f"{missing} image(s) missing alt")
        return CheckResult(self.name, Status.OK, "all images have alt")


@check("links")
class LinksCheck:
    """Link quality over every ``<a>`` element.

    WARN when any link is external, any anchor text is a poor pattern,
    or the page has no links at all.
    """
    name = "links"

    def evaluate(self, document: Document) -> CheckResult:
        base_host = document.host
        total = internal = external = poor = 0

        for anchor in parse(document).find_all("a"):
            total += 1
            href = anchor.get("href")
            if is_internal(href, base_host):
                internal += 1
            else:
                external += 1
            if POOR_ANCHOR_TEXT.match(text_of(anchor)):
                poor += 1

        if not total:
            return CheckResult(self.name, Status.WARN, "no links found")

        status = Status.WARN if (external or poor) else Status.OK
        notes = (
            f"{total} total ({internal} internal, {external} external). "
            f"{poor} link(s) with poor anchor text"
        )
        return CheckResult(self.name, status, notes)
