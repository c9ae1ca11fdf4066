"""adf2md - convert structured rich-document trees to Markdown.

adf2md walks a JSON document tree in the Atlassian Document Format style
(paragraphs, lists, tables, panels, code blocks, annotations, footnotes,
mentions and so on) and renders it as CommonMark/GFM Markdown with a few
Material for MkDocs extensions: ``!!!`` admonitions, ``{ .annotate }``
blocks and ``[^N]`` footnotes.

The optional :mod:`adf2md.preview` subpackage renders the produced Markdown
to HTML through mistune, including the admonition syntax.

Examples
--------
    >>> from adf2md import to_markdown
    >>> to_markdown({"type": "doc", "content": [{"type": "rule"}]})
    '---'

Keep the annotation and footnote maps:

    >>> from adf2md import convert_document, load_document
    >>> converted = convert_document(load_document("page.json"), base_url="https://example.atlassian.net/wiki/")
    >>> converted.footnotes
    {'1': 'The footnote text'}

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "adf2md requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from typing import Any

from adf2md.api import ConvertedDocument, convert_document, load_document, to_markdown
from adf2md.exceptions import (
    Adf2MdError,
    ConversionError,
    InputError,
    NestingDepthError,
    RenderingError,
    ValidationError,
)
from adf2md.nodes import DocumentNode, MarkType, NodeType
from adf2md.options import ConversionOptions, PreviewOptions
from adf2md.registry import ConverterRegistry, default_registry

# Preview pulls in mistune; load it on first access
_lazy_modules = {
    "preview": "adf2md.preview",
}

__all__ = [
    "__version__",
    "to_markdown",
    "convert_document",
    "load_document",
    "ConvertedDocument",
    "DocumentNode",
    "NodeType",
    "MarkType",
    "ConversionOptions",
    "PreviewOptions",
    "ConverterRegistry",
    "default_registry",
    # Exceptions
    "Adf2MdError",
    "ValidationError",
    "InputError",
    "ConversionError",
    "NestingDepthError",
    "RenderingError",
    "preview",
]


def __getattr__(name: str) -> Any:
    """Lazy load the preview subpackage on first access.

    Raises
    ------
    AttributeError
        If the attribute is not a lazy-loadable module

    """
    import importlib

    if name in _lazy_modules:
        module = importlib.import_module(_lazy_modules[name])
        globals()[name] = module
        return module

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
