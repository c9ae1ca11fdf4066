#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/converters/annotation.py
"""Converter for annotation nodes.

Three node flavours share the ``annotation`` type, selected by the
``annotationType`` attribute:

``reference``
    An inline marker, emitted as ``(localId)``.
``definition``
    The text behind a marker. Emits nothing; the content travels to the
    enclosing block through side context.
``block`` (default)
    An annotated block. Its markers are renumbered to document-wide ids,
    its definitions are stored in the annotation state and the block is
    emitted after a ``{ .annotate }`` sentinel line.

"""

from __future__ import annotations

import logging
from typing import Sequence

from adf2md.constants import ANNOTATE_SENTINEL
from adf2md.context import EMPTY_RESULT, ConversionContext, ConversionResult
from adf2md.converters.lists import iter_blocks
from adf2md.nodes import DocumentNode

logger = logging.getLogger(__name__)


def _local_id(node: DocumentNode, default: str) -> str:
    value = node.attr("localId")
    if value is None or not str(value).strip():
        return default
    return str(value).strip()


def convert_annotation_reference(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    local_id = _local_id(node, "1")
    return ConversionResult(f"({local_id})", {"annotation_reference": local_id})


def convert_annotation_definition(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    content = " ".join(child.markdown.strip() for child in children if child.markdown.strip())
    return ConversionResult("", {"annotation_definition": content, "local_id": node.attr("localId")})


def convert_annotation_block(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Renumber the markers of an annotated block and collect its definitions."""
    state = context.annotations
    state.close_block()

    body_parts: list[str] = []
    definitions: list[tuple[str, str]] = []
    for child in children:
        if "annotation_definition" in child.side_context:
            local_id = child.get("local_id")
            local_id = str(local_id).strip() if local_id is not None and str(local_id).strip() else None
            definitions.append((local_id or str(len(definitions) + 1), child.get("annotation_definition")))
    for index, block in iter_blocks(children):
        child = children[index]
        # nested annotated blocks are already renumbered
        body_parts.append(block if child.get("annotation_block") else state.rewrite_references(block))

    defined: list[tuple[str, str]] = []
    for local_id, content in definitions:
        if not state.is_known(local_id):
            logger.debug("Annotation definition %s has no reference in its block", local_id)
        defined.append((state.define(local_id, content), content))
    state.close_block()

    body = "\n\n".join(body_parts)
    if not body and not defined:
        return EMPTY_RESULT

    sections = [ANNOTATE_SENTINEL]
    if body:
        sections.append(body)
    if context.options.emit_annotation_definitions and defined:
        sections.append("\n".join(f"{global_id}. {content}" for global_id, content in defined))
    return ConversionResult("\n\n".join(sections), {"annotation_block": True})


def convert_annotation(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Dispatch on the ``annotationType`` attribute."""
    annotation_type = node.attr("annotationType")
    if annotation_type == "reference":
        return convert_annotation_reference(node, children, level, context)
    if annotation_type == "definition":
        return convert_annotation_definition(node, children, level, context)
    return convert_annotation_block(node, children, level, context)


__all__ = [
    "convert_annotation",
    "convert_annotation_block",
    "convert_annotation_reference",
    "convert_annotation_definition",
]
