"""
Centralized Exception Hierarchy for indexify-cli.

All exceptions raised by the client inherit from IndexifyError so the CLI
boundary can render them uniformly.

Exception Hierarchy
-------------------
    IndexifyError (base)
    ├── ValidationError          argument, label and file validation
    ├── TransportError           non-success HTTP status or connection failure
    ├── DeserializationError     response or file body does not match its model
    ├── NotFoundError            a named resource is missing from a listing
    └── CommandDefinitionError   a command class cannot be resolved at import

Context sections
----------------
Errors accumulate annotations as they propagate instead of being converted
into other kinds. A section is a header plus free text, e.g. the body that a
failing request returned:

    raise TransportError(...).with_section("Body:", response.text)

Sections are rendered beneath the error chain by the CLI error renderer.
"""

from __future__ import annotations

from typing import List, Optional, Tuple


def error_chain(exc: BaseException) -> List[BaseException]:
    """Return the exception followed by each of its causes, outermost first."""
    chain: List[BaseException] = []
    seen = set()
    current: Optional[BaseException] = exc

    while current is not None and id(current) not in seen:
        seen.add(id(current))
        chain.append(current)
        current = current.__cause__ or current.__context__

    return chain


class IndexifyError(Exception):
    """
    Base exception for all indexify-cli errors.

    Attributes
    ----------
    error_code : str
        Short identifier shown in the error panel title
    sections : list of (header, body)
        Context attached while the error propagated
    """

    error_code: str = "IDX-ERR-000"

    def __init__(self, message: str, *, error_code: Optional[str] = None) -> None:
        super().__init__(message)
        if error_code is not None:
            self.error_code = error_code
        self.sections: List[Tuple[str, str]] = []

    def with_section(self, header: str, body: str) -> "IndexifyError":
        """Attach a context section and return self so it can be raised inline."""
        self.sections.append((header, body))
        return self


class ValidationError(IndexifyError):
    """
    Raised when user supplied input is invalid.

    This can occur when:
    - A label filter is malformed
    - A required argument or file is missing
    - A selector is built with no or several alternatives
    """

    error_code = "IDX-VAL-000"


class TransportError(IndexifyError):
    """
    Raised when a request fails or the service answers with a non-success status.

    Attributes
    ----------
    url : str
        The requested URL
    status_code : int or None
        HTTP status, None when the connection itself failed
    body : str or None
        Response body as returned by the service
    """

    error_code = "IDX-NET-000"

    def __init__(
        self,
        message: str,
        *,
        url: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.body = body
        if body is not None:
            self.with_section("Body:", body)


class DeserializationError(IndexifyError):
    """
    Raised when a response or file body cannot be decoded into its model.

    Attributes
    ----------
    path : str
        Dotted path to the offending field ("." when the document itself is bad)
    """

    error_code = "IDX-SER-000"

    def __init__(self, message: str, *, path: str = ".") -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class NotFoundError(IndexifyError):
    """Raised when a resource looked up by name is not in the service listing."""

    error_code = "IDX-NF-000"


class CommandDefinitionError(IndexifyError, TypeError):
    """
    Raised at import time when a command class cannot be resolved.

    Container resolution only supports composites (at most one subcommand
    field) and closed selectors (every alternative a single Command type).
    """

    error_code = "IDX-DEF-000"

    def __init__(self, name: str, detail: str) -> None:
        super().__init__(
            f"{name}: this capability can only be derived for composites or "
            f"closed choice types - {detail}"
        )
        self.name = name
        self.detail = detail
