#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/api.py
"""Public conversion entry points.

Examples
--------
Convert a document dictionary:

    >>> from adf2md import to_markdown
    >>> to_markdown({"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "Hi"}]}]})
    'Hi'

Keep the footnote and annotation maps for a preview:

    >>> from adf2md import convert_document
    >>> converted = convert_document(document, base_url="https://example.atlassian.net/wiki/")
    >>> converted.findings
    ()

"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Mapping, Optional, Union

from adf2md.context import ConversionContext
from adf2md.constants import DEFAULT_MAX_NESTING_DEPTH
from adf2md.exceptions import InputError, NestingDepthError, ValidationError
from adf2md.links import LinkResolver, resolve_link
from adf2md.nodes import DocumentNode
from adf2md.options import ConversionOptions
from adf2md.registry import ConverterRegistry
from adf2md.utils.text import collapse_blank_lines
from adf2md.walker import TreeWalker

logger = logging.getLogger(__name__)

DocumentSource = Union[DocumentNode, Mapping[str, Any]]


@dataclass(frozen=True)
class ConvertedDocument:
    """Result of converting one document.

    Parameters
    ----------
    markdown : str
        The Markdown text, footnote definitions included
    annotations : Mapping
        Annotation definition contents keyed by global annotation id
    footnotes : Mapping
        Footnote definition contents keyed by footnote number
    findings : tuple of str
        Non-fatal problems found while converting, such as orphaned
        footnote references

    """

    markdown: str
    annotations: Mapping[str, str] = field(default_factory=dict)
    footnotes: Mapping[str, str] = field(default_factory=dict)
    findings: tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.markdown


def load_document(
    source: Union[str, Path, IO[str], IO[bytes], Mapping[str, Any], DocumentNode],
    max_depth: int = DEFAULT_MAX_NESTING_DEPTH,
) -> DocumentNode:
    """Load a document tree from JSON.

    Parameters
    ----------
    source : str, Path, file-like, Mapping or DocumentNode
        A path to a JSON file, JSON text (a string starting with ``{``), an
        open file, an already decoded dictionary or a loaded tree
    max_depth : int, default 64
        Deepest nesting level accepted while building the tree

    Returns
    -------
    DocumentNode
        Root of the document tree

    Raises
    ------
    InputError
        If the source cannot be read, is not valid JSON or does not hold a
        JSON object
    NestingDepthError
        If the document is nested deeper than ``max_depth``

    """
    if isinstance(source, DocumentNode):
        return source
    if isinstance(source, Mapping):
        return DocumentNode.from_dict(source, max_depth)

    description = str(source) if isinstance(source, (str, Path)) else getattr(source, "name", "<stream>")
    try:
        if isinstance(source, str) and source.lstrip().startswith("{"):
            description = "<string>"
            data = json.loads(source)
        elif isinstance(source, (str, Path)):
            data = json.loads(Path(source).read_text(encoding="utf-8"))
        else:
            data = json.load(source)
    except OSError as e:
        raise InputError(f"Cannot read document: {e}", source=description, original_error=e) from e
    except (ValueError, UnicodeDecodeError) as e:
        raise InputError(f"Document is not valid JSON: {e}", source=description, original_error=e) from e
    except RecursionError as e:
        raise NestingDepthError(max_depth) from e

    if not isinstance(data, Mapping):
        raise InputError(
            f"Document must be a JSON object, got {type(data).__name__}",
            source=description,
        )
    return DocumentNode.from_dict(data, max_depth)


def convert_document(
    document: DocumentSource,
    options: Optional[ConversionOptions] = None,
    link_resolver: Optional[LinkResolver] = None,
    *,
    registry: Optional[ConverterRegistry] = None,
    **kwargs: Any,
) -> ConvertedDocument:
    """Convert a document tree to Markdown.

    Each call uses fresh annotation and footnote state, so numbering always
    starts at 1 and concurrent conversions do not interfere.

    Parameters
    ----------
    document : DocumentNode or Mapping
        The tree, loaded or as a JSON-like dictionary
    options : ConversionOptions, optional
        Conversion settings
    link_resolver : LinkResolver, optional
        Collaborator resolving link targets; the default joins relative
        targets onto ``options.base_url``
    registry : ConverterRegistry, optional
        Converters to use; the built-in set when omitted
    kwargs : Any
        Individual option overrides applied on top of ``options``

    Returns
    -------
    ConvertedDocument
        Markdown plus the annotation and footnote maps and findings

    Raises
    ------
    ValidationError
        If ``document`` is None or of an unsupported type, or an option
        override is invalid
    NestingDepthError
        If the tree is nested deeper than ``options.max_nesting_depth``

    """
    if document is None:
        raise ValidationError("Document tree must not be None", parameter_name="document")
    options = _merge_options(options, kwargs)
    if isinstance(document, Mapping):
        document = DocumentNode.from_dict(document, options.max_nesting_depth)
    elif not isinstance(document, DocumentNode):
        raise ValidationError(
            f"Unsupported document type: {type(document).__name__}",
            parameter_name="document",
            parameter_value=type(document).__name__,
        )

    context = ConversionContext(options=options, link_resolver=link_resolver or resolve_link)
    walker = TreeWalker(registry)

    logger.debug("Converting %r document", document.type)
    markdown = walker.convert(document, 0, context).markdown.strip("\n")
    context.annotations.close_block()

    if options.include_footnotes:
        definitions = context.footnotes.render_definitions()
        if definitions:
            markdown = f"{markdown}\n\n{definitions}" if markdown else definitions
    if options.collapse_blank_lines:
        markdown = collapse_blank_lines(markdown)

    for message in context.footnotes.findings() + context.annotations.findings():
        context.report(message)
    if context.findings:
        logger.debug("Conversion finished with %d findings", len(context.findings))

    return ConvertedDocument(
        markdown=markdown,
        annotations=context.annotations.tooltip_contents(),
        footnotes=context.footnotes.tooltip_contents(),
        findings=tuple(context.findings),
    )


def to_markdown(
    document: DocumentSource,
    options: Optional[ConversionOptions] = None,
    link_resolver: Optional[LinkResolver] = None,
    **kwargs: Any,
) -> str:
    """Convert a document tree and return only the Markdown text.

    See :func:`convert_document` for the parameters.
    """
    return convert_document(document, options, link_resolver, **kwargs).markdown


def _merge_options(options: Optional[ConversionOptions], overrides: dict[str, Any]) -> ConversionOptions:
    options = options if options is not None else ConversionOptions()
    if not overrides:
        return options
    try:
        return options.create_updated(**overrides)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid conversion options: {e}", original_error=e) from e


__all__ = ["ConvertedDocument", "load_document", "convert_document", "to_markdown"]
