#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/footnotes.py
"""Footnote numbering and end-of-document definitions."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

FOOTNOTE_REFERENCE_PATTERN = re.compile(r"\[\^([^\]]+)\](?!:)")
FOOTNOTE_DEFINITION_PATTERN = re.compile(r"^\[\^([^\]]+)\]:\s*(.*)$", re.MULTILINE)


@dataclass(frozen=True)
class FootnoteDefinition:
    """Collected footnote text with its display number."""

    ref_id: str
    content: str
    number: int


@dataclass
class FootnoteState:
    """Document-wide footnote numbers.

    A reference identifier receives its number the first time it is seen,
    whether as a reference or as a definition, and keeps it for the rest of
    the document.
    """

    counter: int = 0
    numbers: dict[str, int] = field(default_factory=dict)
    definitions: dict[str, FootnoteDefinition] = field(default_factory=dict)
    referenced: set[str] = field(default_factory=set)

    def number_for(self, ref_id: str) -> int:
        """Return the number of ``ref_id``, assigning the next one on first use."""
        number = self.numbers.get(ref_id)
        if number is None:
            self.counter += 1
            number = self.counter
            self.numbers[ref_id] = number
        return number

    def reference(self, ref_id: str) -> int:
        """Record a reference occurrence."""
        self.referenced.add(ref_id)
        return self.number_for(ref_id)

    def define(self, ref_id: str, content: str) -> int:
        """Record the definition text of ``ref_id``."""
        number = self.number_for(ref_id)
        if ref_id in self.definitions:
            logger.debug("Footnote %r defined more than once; keeping the last definition", ref_id)
        self.definitions[ref_id] = FootnoteDefinition(ref_id=ref_id, content=content.strip(), number=number)
        return number

    def ordered_definitions(self) -> list[FootnoteDefinition]:
        """Return the definitions sorted by number."""
        return sorted(self.definitions.values(), key=lambda d: d.number)

    def render_definitions(self) -> str:
        """Render the definitions block appended to the document.

        Returns
        -------
        str
            ``[^N]: content`` entries separated by blank lines, or an empty
            string when nothing was defined

        """
        return "\n\n".join(f"[^{d.number}]: {d.content}" for d in self.ordered_definitions())

    def tooltip_contents(self) -> dict[str, str]:
        """Return definition texts keyed by footnote number."""
        return {str(d.number): d.content for d in self.ordered_definitions()}

    def findings(self) -> list[str]:
        """Describe references without definitions and definitions never referenced."""
        messages = [
            f"Orphaned footnote reference: [^{self.numbers[ref_id]}]"
            for ref_id in sorted(self.referenced - set(self.definitions), key=self.numbers.__getitem__)
        ]
        messages.extend(
            f"Orphaned footnote definition: [^{d.number}]"
            for d in self.ordered_definitions()
            if d.ref_id not in self.referenced
        )
        return messages

    def reset(self) -> None:
        """Forget all numbers and definitions."""
        self.counter = 0
        self.numbers.clear()
        self.definitions.clear()
        self.referenced.clear()


def validate_footnotes(text: str) -> list[str]:
    """Report orphaned footnote references and definitions in Markdown text.

    Parameters
    ----------
    text : str
        Markdown source

    Returns
    -------
    list of str
        One message per orphaned identifier; empty when consistent

    """
    reference_ids: list[str] = []
    for match in FOOTNOTE_REFERENCE_PATTERN.finditer(text):
        if match.group(1) not in reference_ids:
            reference_ids.append(match.group(1))
    definition_ids: list[str] = []
    for match in FOOTNOTE_DEFINITION_PATTERN.finditer(text):
        if match.group(1) not in definition_ids:
            definition_ids.append(match.group(1))

    errors = [f"Orphaned footnote reference: [^{rid}]" for rid in reference_ids if rid not in definition_ids]
    errors.extend(f"Orphaned footnote definition: [^{did}]" for did in definition_ids if did not in reference_ids)
    return errors


__all__ = [
    "FootnoteDefinition",
    "FootnoteState",
    "validate_footnotes",
    "FOOTNOTE_REFERENCE_PATTERN",
    "FOOTNOTE_DEFINITION_PATTERN",
]
