#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Option classes for conversion and preview rendering."""

from adf2md.options.base import CloneFrozenMixin
from adf2md.options.conversion import ConversionOptions
from adf2md.options.preview import PreviewOptions

__all__ = ["CloneFrozenMixin", "ConversionOptions", "PreviewOptions"]
