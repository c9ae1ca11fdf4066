#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the adf2md library.

This module defines the exception classes raised by the converter and the
preview pipeline. Malformed *input data* never raises: unknown constructs
degrade and orphaned references are reported as findings. Exceptions are
reserved for contract violations and resource limits.

Exception Hierarchy
-------------------
- Adf2MdError (base exception)

  - ValidationError (invalid arguments or options)

  - InputError (input document cannot be loaded)

  - ConversionError (tree conversion failures)
    - NestingDepthError (document nested beyond the configured ceiling)

  - RenderingError (preview output generation failures)

"""

from typing import Any


class Adf2MdError(Exception):
    """Base exception class for all adf2md-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Adf2MdError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InputError(Adf2MdError):
    """Exception raised when an input document cannot be loaded.

    Parameters
    ----------
    message : str
        Description of the input problem
    source : str, optional
        File path or description of the input source
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, source: str | None = None, original_error: Exception | None = None):
        """Initialize the input error."""
        super().__init__(message, original_error=original_error)
        self.source = source


class ConversionError(Adf2MdError):
    """Exception raised when a document tree cannot be converted."""


class NestingDepthError(ConversionError):
    """Exception raised when a document is nested deeper than allowed.

    The tree walker enforces an explicit recursion ceiling so that
    pathological input fails closed instead of exhausting the stack.

    Parameters
    ----------
    max_depth : int
        The configured nesting ceiling
    node_type : str, optional
        Type tag of the node at which the ceiling was hit

    """

    def __init__(self, max_depth: int, node_type: str | None = None):
        """Initialize the nesting depth error."""
        where = f" at '{node_type}' node" if node_type else ""
        super().__init__(f"Document too deeply nested{where}: maximum depth is {max_depth}")
        self.max_depth = max_depth
        self.node_type = node_type


class RenderingError(Adf2MdError):
    """Exception raised when preview output cannot be produced or written.

    Parameters
    ----------
    message : str
        Description of the rendering error
    output_path : str, optional
        Destination that could not be written
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, output_path: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error=original_error)
        self.output_path = output_path


__all__ = [
    "Adf2MdError",
    "ValidationError",
    "InputError",
    "ConversionError",
    "NestingDepthError",
    "RenderingError",
]
