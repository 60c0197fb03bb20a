# src/docs/parser.py — v1
"""Parser for consolidated documentation markdown.

Contract: a document is an optional preamble, then sections that each
start on a line beginning with ``## 🧪`` (or ``### 🧪``), then an optional
``_Last Updated: ..._`` footer. A section's key is the first backticked
token of its header::

    ## 🧪 `login.spec.js` → `User can log in`

Sections whose header carries no backticked key are ignored.
"""

from __future__ import annotations

import logging
import re

from autodocumentator.docs.models import DocumentSection, ParsedDocument

logger = logging.getLogger(__name__)

SECTION_MARKER = "🧪"

_SECTION_START = re.compile(r"^#{2,3} 🧪 ", re.MULTILINE)
_SECTION_HEADER = re.compile(
    r"^#{2,3} 🧪 `(?P<key>[^`]+)`(?:\s*→\s*`(?P<test_name>[^`]*)`)?"
)
_FOOTER = re.compile(r"\n+---[ \t]*\n+_Last Updated: [^\n]*_\s*$")


def parse_document(markdown: str) -> ParsedDocument:
    """Split ``markdown`` into a typed sequence of sections.

    CRLF and bare CR line endings are normalized to ``\\n`` first, so a
    document saved on Windows parses (and re-renders) the same way.
    """
    body = markdown.replace("\r\n", "\n").replace("\r", "\n")
    footer = ""
    footer_match = _FOOTER.search(body)
    if footer_match:
        footer = footer_match.group(0).strip()
        body = body[: footer_match.start()]

    starts = [m.start() for m in _SECTION_START.finditer(body)]
    if not starts:
        return ParsedDocument(preamble=body.strip(), footer=footer)

    sections: list[DocumentSection] = []
    bounds = zip(starts, starts[1:] + [len(body)])
    for start, end in bounds:
        text = body[start:end].strip()
        header = _SECTION_HEADER.match(text)
        if header is None:
            logger.debug("Ignoring section without a file key: %.60s", text)
            continue
        sections.append(
            DocumentSection(
                key=header.group("key"),
                test_name=header.group("test_name"),
                text=text,
            )
        )

    return ParsedDocument(
        preamble=body[: starts[0]].strip(),
        sections=sections,
        footer=footer,
    )


def extract_entries(markdown: str) -> dict[str, str]:
    """Map basename → section text for every keyed section."""
    return parse_document(markdown).entries()


def documented_keys(markdown: str) -> set[str]:
    """Basenames that have a section in ``markdown``."""
    return {section.key for section in parse_document(markdown).sections}
