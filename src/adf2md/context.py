#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/context.py
"""Per-conversion context and converter result types.

Every call to :func:`adf2md.api.convert_document` builds one
:class:`ConversionContext`. The context is handed unchanged to every
converter in the tree walk. Its fields never change during the walk, but
the annotation and footnote state objects it carries accumulate identifiers
for the whole document. A context is never shared between two conversions,
so separate documents can be converted concurrently.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from adf2md.annotations import AnnotationState
from adf2md.footnotes import FootnoteState
from adf2md.links import LinkResolver, resolve_link
from adf2md.options import ConversionOptions


@dataclass(frozen=True)
class ConversionResult:
    """Output of converting one node.

    Parameters
    ----------
    markdown : str
        Markdown fragment for the node
    side_context : Mapping, default = empty
        Facts about the node a parent converter may need, such as the cell
        texts of a table row, so parents never re-parse Markdown

    """

    markdown: str
    side_context: Mapping[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a side-context value."""
        return self.side_context.get(key, default)


EMPTY_RESULT = ConversionResult("")


@dataclass(frozen=True)
class MarkdownBlock:
    """A rendered list item with its nesting depth.

    Parameters
    ----------
    text : str
        Item Markdown without list marker or indentation
    level : int
        Nesting depth of the owning list (0 = top level)
    nested_lines : frozenset of int
        Indices of lines that belong to nested lists and are already indented

    """

    text: str
    level: int
    nested_lines: frozenset[int] = frozenset()


@dataclass(frozen=True)
class ConversionContext:
    """Environment shared by all converters during one conversion.

    Parameters
    ----------
    options : ConversionOptions
        Conversion settings
    link_resolver : LinkResolver
        Collaborator resolving link targets and texts
    annotations : AnnotationState
        Document-wide annotation numbering
    footnotes : FootnoteState
        Document-wide footnote numbering
    findings : list of str
        Non-fatal validation messages collected while converting

    """

    options: ConversionOptions = field(default_factory=ConversionOptions)
    link_resolver: LinkResolver = resolve_link
    annotations: AnnotationState = field(default_factory=AnnotationState)
    footnotes: FootnoteState = field(default_factory=FootnoteState)
    findings: list[str] = field(default_factory=list)

    @property
    def base_url(self) -> str:
        """Base URL for resolving relative links."""
        return self.options.base_url

    def report(self, message: str) -> None:
        """Record a non-fatal finding."""
        if message not in self.findings:
            self.findings.append(message)


__all__ = ["ConversionResult", "EMPTY_RESULT", "MarkdownBlock", "ConversionContext"]
