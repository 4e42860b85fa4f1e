from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field

from .model import Document, iter_elements

URL_REF_RE = re.compile(r"url\(#([^)]+)\)")


def extract_url_id(value: str | None) -> str | None:
    if not value or not isinstance(value, str):
        return None
    match = URL_REF_RE.search(value)
    if not match:
        return None
    return match.group(1)


@dataclass(frozen=True)
class ReferenceGraph:
    """Identifiers defined in a document and identifiers it points to.

    Both collections keep first-seen traversal order so reports built from
    them are reproducible.
    """

    defined_ids: tuple[str, ...] = ()
    referenced_ids: tuple[str, ...] = ()
    id_counts: dict[str, int] = field(default_factory=dict)

    def missing_references(self) -> list[str]:
        defined = set(self.defined_ids)
        return [ref for ref in self.referenced_ids if ref not in defined]

    def unreferenced_ids(self) -> list[str]:
        referenced = set(self.referenced_ids)
        return [ident for ident in self.defined_ids if ident not in referenced]

    def duplicate_ids(self) -> list[str]:
        return [ident for ident in self.defined_ids if self.id_counts.get(ident, 0) > 1]

    def is_consistent(self) -> bool:
        return not self.missing_references()


def build_reference_graph(document: Document) -> ReferenceGraph:
    counts: Counter[str] = Counter()
    referenced: dict[str, None] = {}

    for element, _ in iter_elements(document.elements):
        if element.id:
            counts[element.id] += 1
        for attr in (element.clip_path, element.mask):
            ref = extract_url_id(attr)
            if ref:
                referenced.setdefault(ref, None)

    for definition in document.defs:
        if definition.id:
            counts[definition.id] += 1

    return ReferenceGraph(
        defined_ids=tuple(counts),
        referenced_ids=tuple(referenced),
        id_counts=dict(counts),
    )
