# seoinspector/plugins/contrib/meta_description_check.py

from __future__ import annotations

from seoinspector.html import attr_text, find_meta, parse
from seoinspector.models import Document, Status


class MetaDescriptionCheck:
    """Plugin variant of the meta description check, keyed ``metadescriptioncheck``.

    Returns the plain mapping shape; the engine coerces it to a CheckResult.
    """
    name = "MetaDescriptionCheck"

    def evaluate(self, document: Document) -> dict[str, str]:
        if attr_text(find_meta(parse(document), "description"), "content"):
            return {"status": Status.OK.value, "notes": "meta description present"}
        return {"status": Status.WARN.value, "notes": "missing meta description"}


plugin = MetaDescriptionCheck
