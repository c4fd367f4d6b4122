from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Binding:
    abstract: Any
    concrete: Callable[..., object] | type | str
    shared: bool = False

    @property
    def is_factory(self) -> bool:
        return is_factory(self.concrete)


def is_factory(concrete: object) -> bool:
    """A factory is any callable that is not itself a class."""
    return callable(concrete) and not isinstance(concrete, type)


class BindingRegistry:
    """One binding per abstract identifier; registering again overwrites."""

    def __init__(self) -> None:
        self._bindings: dict[Any, Binding] = {}

    def register(self, binding: Binding) -> None:
        if binding.abstract in self._bindings:
            logger.debug("Overwriting binding for %r", binding.abstract)
        self._bindings[binding.abstract] = binding

    def lookup(self, abstract: Any) -> Binding | None:
        return self._bindings.get(abstract)

    def remove(self, abstract: Any) -> None:
        self._bindings.pop(abstract, None)

    def clear(self) -> None:
        self._bindings.clear()

    def __contains__(self, abstract: object) -> bool:
        return abstract in self._bindings

    def __iter__(self) -> Iterator[Any]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)


class InstanceCache:
    """Instances produced by shared bindings, keyed by abstract identifier.

    ``None`` is a valid cached value, so test membership with ``in`` before calling ``get``.
    """

    def __init__(self) -> None:
        self._instances: dict[Any, object] = {}

    def get(self, abstract: Any) -> object:
        return self._instances[abstract]

    def put(self, abstract: Any, instance: object) -> None:
        self._instances[abstract] = instance

    def evict(self, abstract: Any) -> None:
        self._instances.pop(abstract, None)

    def clear(self) -> None:
        self._instances.clear()

    def __contains__(self, abstract: object) -> bool:
        return abstract in self._instances

    def __len__(self) -> int:
        return len(self._instances)
