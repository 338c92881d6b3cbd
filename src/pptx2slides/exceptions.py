#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the pptx2slides library.

This module defines specialized exception classes for the error conditions
that can occur while importing a presentation package into slide records.

Exception Hierarchy
-------------------
- Pptx2SlidesError (base exception)

  - ValidationError (option/config validation)

  - PackageReadError (not a ZIP archive, unreadable, no slide parts)
    - PackageSecurityError (zip bombs, path traversal)

  - SlideExtractionError (one slide's XML walk failed; absorbed by the pipeline)

  - PersistenceError (document store write failures)
    - RecordNotFoundError (unknown slide or presentation id)

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pptx2slides.models import TextFragment


class Pptx2SlidesError(Exception):
    """Base exception class for all pptx2slides-specific errors.

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


class ValidationError(Pptx2SlidesError):
    """Exception raised for invalid options or configuration values.

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


class PackageReadError(Pptx2SlidesError):
    """Exception raised when the presentation package cannot be read.

    Raised when the input bytes are not a valid ZIP archive, cannot be
    read, or contain no slide parts. Nothing has been written to the
    store when this is raised.

    Parameters
    ----------
    message : str
        Description of the failure
    filename : str, optional
        Name of the package being read
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, filename: str | None = None, original_error: Exception | None = None):
        """Initialize the package read error."""
        super().__init__(message, original_error=original_error)
        self.filename = filename


class PackageSecurityError(PackageReadError):
    """Exception raised when a package fails ZIP safety validation.

    This includes zip bombs, path traversal attempts and excessive entry counts.

    """


class SlideExtractionError(Pptx2SlidesError):
    """Exception raised when walking a single slide's XML fails.

    The pipeline never lets this escape; it logs the failure and keeps
    whatever fragments were collected before the error.

    Parameters
    ----------
    message : str
        Description of the failure
    part_name : str, optional
        Archive name of the slide part
    fragments : list of TextFragment, optional
        Fragments recovered before the failure
    original_error : Exception, optional
        The underlying parse or walk error

    """

    def __init__(
        self,
        message: str,
        part_name: str | None = None,
        fragments: list[TextFragment] | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the extraction error with the partial result."""
        super().__init__(message, original_error=original_error)
        self.part_name = part_name
        self.fragments = list(fragments or [])


class PersistenceError(Pptx2SlidesError):
    """Exception raised when a document store operation fails.

    Parameters
    ----------
    message : str
        Description of the failure
    operation : str, optional
        Store operation that failed (e.g. ``"create_slide"``)
    original_error : Exception, optional
        The underlying store error

    """

    def __init__(self, message: str, operation: str | None = None, original_error: Exception | None = None):
        """Initialize the persistence error."""
        super().__init__(message, original_error=original_error)
        self.operation = operation


class RecordNotFoundError(PersistenceError):
    """Exception raised when a slide or presentation id is unknown to the store."""

    def __init__(self, kind: str, record_id: str):
        """Initialize with the record kind and the missing id."""
        super().__init__(f"{kind.capitalize()} not found: {record_id}", operation=f"get_{kind}")
        self.kind = kind
        self.record_id = record_id
