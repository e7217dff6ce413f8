"""Reveal-in-source lookup used by the host.

The lookup is a naive literal search for id="<node id>" over the raw
document text, not a structural re-parse. It can land on an earlier
occurrence of the same text inside another attribute value.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourcePosition:
    """Zero-based location of a match in the document text."""
    line: int
    column: int
    offset: int


def identifier_needle(node_id: str) -> str:
    return f'id="{node_id}"'


def locate_identifier(text: str, node_id: str) -> SourcePosition | None:
    """Find the first literal id="<node_id>" occurrence.

    Returns:
        SourcePosition of the match, or None when the text has no occurrence
    """
    offset = text.find(identifier_needle(node_id))
    if offset < 0:
        return None
    before = text[:offset]
    line = before.count("\n")
    column = offset - (before.rfind("\n") + 1)
    return SourcePosition(line=line, column=column, offset=offset)
