#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/annotations.py
"""Annotation numbering for Material-style annotated blocks.

An annotated block starts at a ``{ .annotate }`` sentinel line. Inside it,
markers such as ``(1)`` refer to definitions written as ``1. text`` lines
after the block. Each block has its own local numbering, while the rendered
document needs identifiers that are unique across all blocks. The classes
here assign those global identifiers:

- :class:`AnnotationState` holds the document-wide counter, the local to
  global map of the open block and every definition seen so far.
- :class:`AnnotationProcessor` runs the line state machine over Markdown
  text, rewriting markers and lifting definitions out of the text. Text can
  be fed in several chunks; the state machine resumes where it stopped.

Examples
--------
    >>> state = AnnotationState()
    >>> processor = AnnotationProcessor(state)
    >>> processor.process("{ .annotate }\\n\\nSee (1).\\n\\n1. A note")
    '{ .annotate }\\n\\nSee (1).\\n'
    >>> state.tooltip_contents()
    {'1': 'A note'}

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Mapping, Optional

from adf2md.constants import ADMONITION_BODY_INDENT

logger = logging.getLogger(__name__)

REFERENCE_PATTERN = re.compile(r"\((\d+)\)")
DEFINITION_PATTERN = re.compile(r"^(\d+)\.\s+(.*)$")
ANNOTATE_BLOCK_PATTERN = re.compile(r"\{\s*\.annotate\s*\}")


@dataclass(frozen=True)
class AnnotationDefinition:
    """Content of one annotation, keyed by its global identifier."""

    global_id: str
    content: str
    number: int


@dataclass
class AnnotationState:
    """Document-wide annotation identifiers.

    Global identifiers are handed out from a single counter and are never
    reused. The local map only covers the currently open block and is
    cleared when the block closes; definitions persist for the whole
    document.

    Parameters
    ----------
    counter : int, default 0
        Last global identifier handed out
    global_definitions : dict
        Definitions keyed by global identifier
    current_block : dict
        Local identifier to global identifier map of the open block

    """

    counter: int = 0
    global_definitions: dict[str, AnnotationDefinition] = field(default_factory=dict)
    current_block: dict[str, str] = field(default_factory=dict)
    referenced: set[str] = field(default_factory=set)

    def resolve(self, local_id: str) -> str:
        """Return the global identifier for ``local_id``, allocating it on first use."""
        global_id = self.current_block.get(local_id)
        if global_id is None:
            self.counter += 1
            global_id = str(self.counter)
            self.current_block[local_id] = global_id
        return global_id

    def is_known(self, local_id: str) -> bool:
        """Check whether the open block already uses ``local_id``."""
        return local_id in self.current_block

    def reference(self, local_id: str) -> str:
        """Resolve a marker occurrence and remember that it was referenced."""
        global_id = self.resolve(local_id)
        self.referenced.add(global_id)
        return global_id

    def define(self, local_id: str, content: str) -> str:
        """Store the definition of ``local_id`` under its global identifier."""
        global_id = self.resolve(local_id)
        self.global_definitions[global_id] = AnnotationDefinition(
            global_id=global_id, content=content.strip(), number=int(global_id)
        )
        return global_id

    def add_definitions(self, definitions: Mapping[str, str]) -> None:
        """Store definitions that already carry global identifiers.

        Definitions found in the text win over supplied ones with the same
        identifier. Identifiers that are not numbers are skipped.
        """
        for global_id, content in definitions.items():
            if global_id in self.global_definitions:
                continue
            if not global_id.isdigit():
                logger.debug("Skipping annotation definition with non-numeric id %r", global_id)
                continue
            self.global_definitions[global_id] = AnnotationDefinition(
                global_id=global_id, content=content.strip(), number=int(global_id)
            )

    def rewrite_references(self, text: str) -> str:
        """Replace every ``(local)`` marker in ``text`` with ``(global)``."""
        return REFERENCE_PATTERN.sub(lambda m: f"({self.reference(m.group(1))})", text)

    def close_block(self) -> None:
        """End the open block; global definitions are kept."""
        if self.current_block:
            logger.debug("Closing annotated block with %d local ids", len(self.current_block))
        self.current_block.clear()

    def tooltip_contents(self) -> dict[str, str]:
        """Return definition contents keyed by global identifier, in number order."""
        ordered = sorted(self.global_definitions.values(), key=lambda d: d.number)
        return {d.global_id: d.content for d in ordered}

    def findings(self) -> list[str]:
        """Describe references without definitions and definitions never referenced."""
        messages = [
            f"Orphaned annotation reference: ({gid})"
            for gid in sorted(self.referenced - set(self.global_definitions), key=int)
        ]
        messages.extend(
            f"Orphaned annotation definition: {gid}."
            for gid in sorted(set(self.global_definitions) - self.referenced, key=int)
        )
        return messages


class AnnotationProcessor:
    """Line state machine rewriting annotated blocks in Markdown text.

    Outside a block, lines pass through unchanged. A sentinel line opens a
    block. Inside it, markers are rewritten to global identifiers and
    ``N. text`` lines whose ``N`` is already used in the block are removed
    from the output and stored as definitions, together with any following
    lines indented by four spaces. A blank line closes the block when the
    next line is neither a ``(``-prefixed continuation nor a numbered
    definition. Blank lines between the sentinel and the first content line
    never close it.

    Parameters
    ----------
    state : AnnotationState, optional
        State to populate; a fresh one is created when omitted

    """

    def __init__(self, state: Optional[AnnotationState] = None):
        """Initialize the processor with an outside-of-block state."""
        self.state = state if state is not None else AnnotationState()
        self._in_block = False
        self._has_content = False
        self._pending_close_check = False

    @property
    def in_block(self) -> bool:
        """Whether an annotated block is currently open."""
        return self._in_block

    def process(self, markdown: str) -> str:
        """Process a complete text and close any block left open at its end."""
        result = self.feed(markdown)
        self.finish()
        return result

    def feed(self, chunk: str) -> str:
        """Process the next chunk of a document.

        A blank line at the end of a chunk is judged against the first line
        of the next chunk.
        """
        lines = chunk.split("\n")
        output: list[str] = []

        if self._pending_close_check:
            self._pending_close_check = False
            if lines and self._closes_block(lines[0]):
                self._close()

        i = 0
        while i < len(lines):
            line = lines[i]
            stripped = line.strip()

            if ANNOTATE_BLOCK_PATTERN.search(stripped):
                if self._in_block:
                    self._close()
                self._in_block = True
                self._has_content = False
                output.append(line)
                i += 1
                continue

            if not self._in_block:
                output.append(line)
                i += 1
                continue

            definition = DEFINITION_PATTERN.match(stripped)
            if definition and self.state.is_known(definition.group(1)):
                i = self._capture_definition(lines, i, definition)
                continue

            output.append(self.state.rewrite_references(line))
            if stripped:
                self._has_content = True
            elif self._has_content:
                if i + 1 < len(lines):
                    if self._closes_block(lines[i + 1]):
                        self._close()
                else:
                    self._pending_close_check = True
            i += 1

        return "\n".join(output)

    def finish(self) -> None:
        """Close any open block at the end of the document."""
        self._pending_close_check = False
        if self._in_block:
            self._close()

    def _capture_definition(self, lines: list[str], index: int, match: re.Match[str]) -> int:
        """Store a definition with its indented continuation and return the next line index."""
        parts = [match.group(2).strip()]
        indent = " " * ADMONITION_BODY_INDENT
        j = index + 1
        while j < len(lines) and lines[j].strip() and (lines[j].startswith(indent) or lines[j].startswith("\t")):
            parts.append(lines[j].strip())
            j += 1
        global_id = self.state.define(match.group(1), "\n".join(parts))
        logger.debug("Captured annotation definition %s -> %s", match.group(1), global_id)
        return j

    def _closes_block(self, next_line: str) -> bool:
        following = next_line.strip()
        return not following.startswith("(") and not DEFINITION_PATTERN.match(following)

    def _close(self) -> None:
        self._in_block = False
        self._has_content = False
        self.state.close_block()


def validate_annotations(text: str) -> list[str]:
    """Report orphaned annotation markers and definitions in Markdown text.

    Parameters
    ----------
    text : str
        Markdown source

    Returns
    -------
    list of str
        One message per orphaned local identifier; empty when consistent

    """
    reference_ids = {m.group(1) for m in REFERENCE_PATTERN.finditer(text)}
    definition_ids: set[str] = set()
    for line in text.split("\n"):
        match = DEFINITION_PATTERN.match(line.strip())
        if match:
            definition_ids.add(match.group(1))

    errors = [f"Orphaned annotation reference: ({rid})" for rid in sorted(reference_ids - definition_ids, key=int)]
    errors.extend(f"Orphaned annotation definition: {did}." for did in sorted(definition_ids - reference_ids, key=int))
    return errors


__all__ = [
    "AnnotationDefinition",
    "AnnotationState",
    "AnnotationProcessor",
    "validate_annotations",
    "REFERENCE_PATTERN",
    "DEFINITION_PATTERN",
    "ANNOTATE_BLOCK_PATTERN",
]
