"""Small inversion of control container.

This package resolves identifiers (classes, protocols, abstract base classes or
plain string keys) to fully constructed objects, auto-wiring constructor
dependencies from their type annotations and caching shared instances.

Exports:
- `Container`: bind/singleton/instance registration, `make` resolution and a
  process-wide instance through `Container.get_instance()`.
- `ResolutionError`: raised when an identifier cannot be resolved.
- `NotFoundError`: `ResolutionError` subclass for identifiers that name no loadable type.
- `ServiceLocator`: runtime-checkable `has`/`get` protocol the container satisfies.
"""

from ._container import Container
from ._errors import NotFoundError, ResolutionError
from ._locator import ServiceLocator


__all__ = ["Container", "NotFoundError", "ResolutionError", "ServiceLocator"]
