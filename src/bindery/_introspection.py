from __future__ import annotations

import builtins
import importlib
import inspect
import logging
import types
import typing
from typing import Any, Generic, Union, get_args, get_origin, get_type_hints

from ._errors import NotFoundError


logger = logging.getLogger(__name__)

_MISSING = object()


def load_type(target: object) -> type:
    """Return the class denoted by ``target``.

    A class denotes itself. A string is read as a dotted import path
    (``"package.module.QualName"``); a bare name is looked up in ``builtins``.

    Raise NotFoundError when no class can be loaded.
    """
    if inspect.isclass(target):
        return target

    if isinstance(target, str) and target:
        try:
            found = _import_by_path(target)
        except Exception as exc:
            msg = f"Target type [{target}] could not be imported: {type(exc).__name__}: {exc}"
            raise NotFoundError(msg) from exc

        if found is not None:
            return found

    msg = f"Target type [{target!r}] does not exist."
    raise NotFoundError(msg)


def _import_by_path(path: str) -> type | None:
    parts = path.split(".")

    # longest importable module prefix wins, the rest is an attribute chain
    for index in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:index])
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            # only the requested module (or a parent package) missing means "try a shorter prefix"
            if exc.name is not None and (exc.name == module_name or module_name.startswith(exc.name + ".")):
                continue
            raise

        return _walk_attributes(module, parts[index:])

    return _walk_attributes(builtins, parts)


def _walk_attributes(obj: object, names: list[str]) -> type | None:
    for name in names:
        obj = getattr(obj, name, _MISSING)
        if obj is _MISSING:
            return None

    return obj if inspect.isclass(obj) else None


def is_instantiable(tp: object) -> bool:
    """Check whether ``tp`` is a class that can be constructed directly."""
    if not inspect.isclass(tp):
        return False

    if inspect.isabstract(tp):
        return False

    return not is_protocol(tp)


if hasattr(typing, "is_protocol"):
    # https://docs.python.org/3/library/typing.html#typing.is_protocol
    def is_protocol(tp: object) -> bool:
        return inspect.isclass(tp) and typing.is_protocol(tp)

else:

    def is_protocol(tp: object) -> bool:
        """Detect a protocol class itself, not a class that explicitly implements one."""
        return inspect.isclass(tp) and issubclass(tp, Generic) and getattr(tp, "_is_protocol", False)  # type: ignore[arg-type]


def unwrap_optional(annotation: Any) -> Any:
    """Turn ``X | None`` and ``Optional[X]`` into ``X``; leave anything else as is."""
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]

    return annotation


def get_init_type_hints(cls: type) -> dict[str, Any]:
    try:
        init = inspect.getattr_static(cls, "__init__")
        hints = get_type_hints(init)
    except TypeError:
        hints = {}
    except NameError as exc:
        logger.warning("'%s' name error retrieving %s (%s) type hints", exc.name, cls.__name__, cls.__qualname__)
        hints = {}

    return hints
