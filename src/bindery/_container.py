from __future__ import annotations

import inspect
import logging
import threading
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    TypeVar,
    overload,
)

from ._bindings import Binding, BindingRegistry, InstanceCache
from ._errors import ResolutionError
from ._introspection import get_init_type_hints, is_instantiable, load_type, unwrap_optional


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable

    T = TypeVar("T")

    Token = type[T] | str
    Concrete = Callable[["Container"], object] | type | str

_instance_lock = threading.Lock()


class Container:
    """Inversion of control container.

    - bind identifiers to factories, concrete classes or dotted type names
    - resolve with constructor injection (zero configuration for unbound classes)
    - shared bindings and pre-built instances are cached until removed or flushed
    - one process-wide container through ``Container.get_instance()``.

    Example:
      container = Container.get_instance()
      container.bind(MailerInterface, SmtpMailer)
      container.singleton("mailer", lambda c: SmtpMailer("mail.example.com"))
      mailer = container.make(MailerInterface)

    """

    _instance: ClassVar[Container | None] = None

    def __init__(self) -> None:
        self._bindings = BindingRegistry()
        self._instances = InstanceCache()
        self._lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> Container:
        """Return the process-wide container, creating it on first access."""
        if cls._instance is None:
            with _instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def bind(
        self,
        abstract: Token[T],
        concrete: Concrete | None = None,
        *,
        shared: bool = False,
    ) -> None:
        """Register how to build ``abstract``, replacing any previous binding.

        ``concrete`` is a factory receiving the container, a class, or a dotted
        type name. When omitted, ``abstract`` is built by itself.

        Example:
          container.bind(MailerInterface, ArrayMailer)
          container.bind("mailer", lambda c: SmtpMailer("mail.example.com"))

        """
        if concrete is None:
            concrete = abstract
        elif not _is_valid_concrete(concrete):
            msg = (
                f"Concrete for {abstract!r} must be a class, a type name or a factory, "
                f"got {type(concrete).__name__}."
            )
            raise TypeError(msg)

        with self._lock:
            self._bindings.register(Binding(abstract, concrete, shared))
            self._instances.evict(abstract)

        logger.debug("Bound %r to %r (shared=%s)", abstract, concrete, shared)

    def singleton(self, abstract: Token[T], concrete: Concrete | None = None) -> None:
        """Register a shared binding: the first resolved instance is reused."""
        self.bind(abstract, concrete, shared=True)

    def instance(self, abstract: Token[T], value: T) -> T:
        """Register a pre-built instance (always shared)."""
        with self._lock:
            self._bindings.register(Binding(abstract, abstract, shared=True))
            self._instances.put(abstract, value)

        logger.debug("Registered instance of %s for %r", type(value).__name__, abstract)
        return value

    @overload
    def make(self, abstract: type[T]) -> T: ...

    @overload
    def make(self, abstract: str) -> Any: ...

    def make(self, abstract: Token[T]) -> object:
        """Resolve ``abstract`` to an instance.

        - cached instance (shared bindings, registered instances) is returned as is
        - a factory binding is called with the container
        - an alias binding resolves its concrete recursively
        - otherwise the class is built by auto-wiring its constructor parameters.

        Raise ResolutionError (or NotFoundError) when nothing can be built.
        """
        with self._lock:
            return self._resolve(abstract)

    def contains(self, abstract: object) -> bool:
        return abstract in self._bindings

    def remove(self, abstract: object) -> None:
        """Forget the binding and any cached instance of ``abstract``."""
        with self._lock:
            self._bindings.remove(abstract)
            self._instances.evict(abstract)

    def flush(self) -> None:
        """Clear every binding and cached instance."""
        with self._lock:
            self._bindings.clear()
            self._instances.clear()

        logger.debug("Flushed container")

    def has(self, id: object) -> bool:  # noqa: A002
        return self.contains(id)

    def get(self, id: Any) -> Any:  # noqa: A002
        return self.make(id)

    def __contains__(self, abstract: object) -> bool:
        return self.contains(abstract)

    def __getitem__(self, abstract: Any) -> Any:
        return self.make(abstract)

    def __setitem__(self, abstract: Any, value: object) -> None:
        if not _is_valid_concrete(value):
            value = _constant(value)
        self.bind(abstract, value)

    def __delitem__(self, abstract: object) -> None:
        self.remove(abstract)

    def _resolve(self, abstract: Any) -> object:
        if abstract in self._instances:
            logger.debug("Returning cached instance for %r", abstract)
            return self._instances.get(abstract)

        binding = self._bindings.lookup(abstract)

        if binding is not None and binding.is_factory:
            instance = self._call_factory(abstract, binding.concrete)
        elif binding is not None and binding.concrete != abstract:
            # alias: interface -> implementation, key -> class
            instance = self._resolve(binding.concrete)
        else:
            instance = self._build(abstract)

        if binding is not None and binding.shared:
            self._instances.put(abstract, instance)

        return instance

    def _call_factory(self, abstract: Any, factory: Callable[[Container], object]) -> object:
        try:
            return factory(self)
        except ResolutionError:
            raise
        except Exception as exc:
            msg = f"Factory for {abstract!r} raised {type(exc).__name__}: {exc}"
            raise ResolutionError(msg) from exc

    def _build(self, target: Any) -> object:
        cls = load_type(target)

        if not is_instantiable(cls):
            msg = f"Target [{cls.__qualname__}] is not instantiable."
            raise ResolutionError(msg)

        logger.debug("Auto-wiring %s", cls.__qualname__)
        return Constructor(self).construct(cls)

    def _is_resolvable(self, annotation: Any) -> bool:
        """Whether a constructor parameter annotation names something the container can make."""
        try:
            if annotation in self._bindings or annotation in self._instances:
                return True
        except TypeError:
            # unhashable annotation objects cannot be identifiers
            return False

        return getattr(annotation, "__module__", "") != "builtins" and is_instantiable(annotation)


class Constructor:
    def __init__(self, container: Container) -> None:
        self._container = container

    def construct(self, cls: type[T]) -> T:
        try:
            sig = inspect.signature(cls)
        except (TypeError, ValueError):
            # some builtin and extension types expose no signature
            return self._invoke(cls, [], {})

        hints = get_init_type_hints(cls)
        args: list[Any] = []
        kwargs: dict[str, Any] = {}

        for name, p in sig.parameters.items():
            if p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD):
                continue

            value = self._resolve_param(cls, name, p, hints)
            if p.kind is p.POSITIONAL_ONLY:
                args.append(value)
            else:
                kwargs[name] = value

        return self._invoke(cls, args, kwargs)

    def _resolve_param(
        self,
        cls: type,
        name: str,
        p: inspect.Parameter,
        hints: dict[str, Any],
    ) -> Any:
        """Resolving param.

        Resolution precedence:
        1. annotated class or bound identifier
        2. default
        3. error.
        """
        ann = unwrap_optional(hints.get(name, p.annotation))

        if ann is not inspect.Parameter.empty and self._container._is_resolvable(ann):  # noqa: SLF001
            return self._container.make(ann)

        if p.default is not inspect.Parameter.empty:
            return p.default

        ann_repr = getattr(ann, "__name__", repr(ann)) if ann is not inspect.Parameter.empty else "no-annotation"
        msg = (
            f"Unresolvable dependency: parameter '{name}' of {cls.__qualname__} "
            f"has no default and its annotation ({ann_repr}) cannot be built."
        )
        raise ResolutionError(msg)

    def _invoke(self, cls: type[T], args: list[Any], kwargs: dict[str, Any]) -> T:
        try:
            return cls(*args, **kwargs)
        except ResolutionError:
            raise
        except Exception as exc:
            msg = f"Constructing {cls.__qualname__} raised {type(exc).__name__}: {exc}"
            raise ResolutionError(msg) from exc


def _is_valid_concrete(concrete: object) -> bool:
    return isinstance(concrete, (str, type)) or callable(concrete)


def _constant(value: object) -> Callable[[Container], object]:
    def factory(_container: Container) -> object:
        return value

    return factory
