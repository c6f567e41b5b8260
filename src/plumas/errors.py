"""Exception classes for Plumas.

Every failure aborts the whole render call; there is no partial output.
The user-facing taxonomy is small and closed:

- MalformedExpression: the captured tree breaks a structural rule
- StructuralError: a leaf renderer (or fixed-arity operator) got the wrong children
- InvalidAttributeValue: a named argument cannot be serialized as one attribute

ScopeInvariantError signals a bug in scope construction rather than bad input.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plumas.location import SourceLocation


class PlumasError(Exception):
    """Base exception for all Plumas errors.

    Carries an optional source location. The location may be attached after
    construction (renderers do not know where their node came from, the
    interpreter does), so the message is formatted lazily.
    """

    def __init__(self, message: str, location: SourceLocation | None = None) -> None:
        """Initialize error.

        Args:
            message: Error description
            location: Where the offending node was captured (optional)
        """
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self) -> str:
        if self.location is not None and self.location.lineno:
            return f"{self.location} {self.message}"
        return self.message


class MalformedExpression(PlumasError):
    """The captured expression violates the tree's structural rules.

    Raised for call heads that are not plain identifiers, named arguments
    with non-identifier names, unsupported host syntax and excessive nesting.
    """

    pass


class StructuralError(PlumasError):
    """A renderer received children it cannot accept.

    Raised when a leaf (void) tag gets positional children, or when a
    fixed-arity operator is called with the wrong number of arguments.
    """

    def __init__(
        self,
        name: str,
        message: str,
        location: SourceLocation | None = None,
    ) -> None:
        """Initialize structural error.

        Args:
            name: Name of the renderer that rejected its input (e.g., "br")
            message: Description of the violation
            location: Where the offending call was captured (optional)
        """
        self.name = name
        super().__init__(message, location)


class InvalidAttributeValue(PlumasError):
    """A named argument does not reduce to exactly one attribute value."""

    def __init__(
        self,
        name: str,
        message: str,
        location: SourceLocation | None = None,
    ) -> None:
        """Initialize attribute error.

        Args:
            name: Attribute name
            message: Description of the violation
            location: Where the offending call was captured (optional)
        """
        self.name = name
        super().__init__(message, location)


class ScopeInvariantError(PlumasError):
    """A symbol of the expression is missing from its own scope chain.

    Every symbol is placed in the ambient layer when the scope is built, so
    this is unreachable unless a scope is paired with the wrong tree.
    """

    pass
