from __future__ import annotations


class ResolutionError(RuntimeError):
    """Raised when the container cannot produce an instance for an identifier."""


class NotFoundError(ResolutionError):
    """Raised when the identifier does not name any loadable type.

    Subclasses :class:`ResolutionError`, so catching the base class still covers it.
    """
