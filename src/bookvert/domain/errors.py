"""Error hierarchy for catalogue resolution.

Parsing errors are raised immediately. Per-catalogue problems are collected
and raised together once every catalogue has been resolved.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .resolution import FailedResolution, UnresolvedResolution


class BookvertError(Exception):
    """Base class for all bookvert errors."""


class PolicySyntaxError(BookvertError, ValueError):
    """Raised when a pick selector string does not follow ``[from=]to``."""

    def __init__(self, *, entry: str, token: str, reason: str) -> None:
        self.entry = entry
        self.token = token
        self.reason = reason
        super().__init__(f"Invalid pick rule {entry!r}: {reason} ({token!r})")


class ResolutionError(BookvertError):
    """Base class for errors surfaced after catalogue resolution."""


class UnresolvedCataloguesError(ResolutionError):
    """Raised when catalogues end without a selected candidate."""

    def __init__(self, issues: Sequence[UnresolvedResolution | FailedResolution]) -> None:
        self.issues = tuple(issues)
        labels = ", ".join(issue.catalogue.label for issue in self.issues)
        super().__init__(f"{len(self.issues)} catalogue(s) could not be resolved: {labels}")


class NamingCollisionError(ResolutionError):
    """Raised when several catalogues map to the same output archive name."""

    def __init__(self, collisions: dict[str, tuple[str, ...]]) -> None:
        self.collisions = dict(collisions)
        details = "; ".join(
            f"{name} <- {', '.join(labels)}" for name, labels in self.collisions.items()
        )
        super().__init__(f"Output name collision: {details}")


class ResolutionFailedError(ResolutionError):
    """Raised when more than one kind of resolution problem was found."""

    def __init__(self, errors: Sequence[ResolutionError]) -> None:
        self.errors = tuple(errors)
        super().__init__("; ".join(str(error) for error in self.errors))


class ResolutionCancelledError(ResolutionError):
    """Raised when the operator aborts interactive resolution."""

    def __init__(self, pending: Sequence[UnresolvedResolution]) -> None:
        self.pending = tuple(pending)
        super().__init__(
            f"Aborting due to user cancellation ({len(self.pending)} catalogue(s) pending)"
        )


class MissingTitleError(ResolutionError):
    """Raised when no base title could be determined for output archives."""

    def __init__(self, suggestions: Sequence[str]) -> None:
        self.suggestions = tuple(suggestions)
        super().__init__("No name specified for the series, use --name <name>")


__all__ = [
    "BookvertError",
    "MissingTitleError",
    "NamingCollisionError",
    "PolicySyntaxError",
    "ResolutionCancelledError",
    "ResolutionError",
    "ResolutionFailedError",
    "UnresolvedCataloguesError",
]
