from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ServiceLocator(Protocol):
    """Minimal ``has``/``get`` surface for generic consumers of a container.

    ``get`` raises NotFoundError when the identifier names nothing loadable,
    and ResolutionError when it is known but cannot be built.
    """

    def has(self, id: Any) -> bool: ...  # noqa: A002

    def get(self, id: Any) -> Any: ...  # noqa: A002
