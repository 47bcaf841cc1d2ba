# seoinspector/plugins/contrib/title_check.py

from __future__ import annotations

from seoinspector.html import parse, text_of
from seoinspector.models import CheckResult, Document, Status


class TitleCheck:
    """Plugin variant of the title check, keyed ``titlecheck``."""
    name = "TitleCheck"

    def evaluate(self, document: Document) -> CheckResult:
        title = parse(document).find("title")
        if title is not None and text_of(title):
            return CheckResult(self.name, Status.OK, "title present")
        return CheckResult(self.name, Status.ERROR, "missing title")


plugin = TitleCheck
