#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/registry.py
"""Converter registry mapping node types to converter functions.

A converter is a plain function with the signature::

    def convert_x(node, children, level, context) -> ConversionResult

where ``children`` holds the already converted child results in document
order. The built-in converters are registered lazily the first time a
registry is queried, so importing this module stays cheap and hosts can
override single node types before the first conversion.

Examples
--------
Override the rule converter:

    >>> from adf2md.context import ConversionResult
    >>> from adf2md.nodes import NodeType
    >>> from adf2md.registry import ConverterRegistry
    >>> registry = ConverterRegistry()
    >>> registry.register(NodeType.RULE, lambda node, children, level, context: ConversionResult("***"))

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional, Sequence, Union

from adf2md.exceptions import ValidationError
from adf2md.nodes import NodeType

if TYPE_CHECKING:
    from adf2md.context import ConversionContext, ConversionResult
    from adf2md.nodes import DocumentNode

logger = logging.getLogger(__name__)

Converter = Callable[["DocumentNode", Sequence["ConversionResult"], int, "ConversionContext"], "ConversionResult"]


class ConverterRegistry:
    """Registry of node converters.

    Parameters
    ----------
    include_builtins : bool, default True
        Register the built-in converters on first use

    """

    def __init__(self, include_builtins: bool = True):
        """Create an empty registry."""
        self._converters: dict[NodeType, Converter] = {}
        self._initialized = not include_builtins

    def _ensure_initialized(self) -> None:
        """Register the built-in converters once."""
        if not self._initialized:
            self._initialized = True
            from adf2md.converters import register_builtin_converters

            overrides = dict(self._converters)
            register_builtin_converters(self)
            self._converters.update(overrides)

    def register(
        self, node_type: Union[NodeType, str], converter: Optional[Converter] = None
    ) -> Union[Converter, Callable[[Converter], Converter]]:
        """Register a converter for a node type.

        Can be used directly or as a decorator.

        Parameters
        ----------
        node_type : NodeType or str
            Node type (or raw tag) handled by the converter
        converter : callable, optional
            Converter function; when omitted a decorator is returned

        Raises
        ------
        ValidationError
            If ``node_type`` is not a known node type

        """
        kind = NodeType.from_tag(node_type.value if isinstance(node_type, NodeType) else node_type)
        if kind is NodeType.UNKNOWN:
            raise ValidationError(
                f"Cannot register a converter for unknown node type {node_type!r}",
                parameter_name="node_type",
                parameter_value=node_type,
            )

        def decorator(func: Converter) -> Converter:
            if kind in self._converters:
                logger.debug(f"Converter for '{kind.value}' already registered, overwriting")
            self._converters[kind] = func
            return func

        if converter is None:
            return decorator
        return decorator(converter)

    def get(self, node_type: NodeType) -> Optional[Converter]:
        """Return the converter for ``node_type`` or None when unregistered."""
        self._ensure_initialized()
        return self._converters.get(node_type)

    def is_registered(self, node_type: NodeType) -> bool:
        """Check whether a converter exists for ``node_type``."""
        return self.get(node_type) is not None

    def registered_types(self) -> list[NodeType]:
        """List node types with a registered converter."""
        self._ensure_initialized()
        return sorted(self._converters, key=lambda kind: kind.value)


default_registry = ConverterRegistry()


__all__ = ["Converter", "ConverterRegistry", "default_registry"]
