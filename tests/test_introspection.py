from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Optional, Protocol, Union

import pytest
from mailers import ArrayMailer, MailerInterface, dotted

from bindery import NotFoundError
from bindery._introspection import is_instantiable, is_protocol, load_type, unwrap_optional


def test_load_type_returns_class_unchanged():
    assert load_type(ArrayMailer) is ArrayMailer


def test_load_type_imports_dotted_path():
    assert load_type("collections.OrderedDict") is OrderedDict
    assert load_type(dotted(ArrayMailer)) is ArrayMailer


def test_load_type_bare_builtin_name():
    assert load_type("dict") is dict


@pytest.mark.parametrize(
    "target",
    [
        "NoSuchType",
        "no_such_module.Thing",
        "collections.NoSuchThing",
        "collections.abc",
        "",
        42,
    ],
)
def test_load_type_raises_not_found(target):
    with pytest.raises(NotFoundError):
        load_type(target)


def test_is_instantiable():
    class Greeter(Protocol):
        def greet(self) -> str: ...

    class Partial(ABC):
        @abstractmethod
        def run(self) -> None: ...

    assert is_instantiable(ArrayMailer)
    assert not is_instantiable(MailerInterface)
    assert not is_instantiable(Greeter)
    assert not is_instantiable(Partial)
    assert not is_instantiable(Optional[int])
    assert not is_instantiable("ArrayMailer")


def test_is_protocol_only_for_protocol_classes():
    class Greeter(Protocol):
        def greet(self) -> str: ...

    class English(Greeter):
        def greet(self) -> str:
            return "hello"

    assert is_protocol(Greeter)
    assert not is_protocol(English)
    assert not is_protocol(ArrayMailer)


def test_unwrap_optional():
    assert unwrap_optional(Optional[ArrayMailer]) is ArrayMailer
    assert unwrap_optional(ArrayMailer | None) is ArrayMailer
    assert unwrap_optional(Union[int, str]) == Union[int, str]
    assert unwrap_optional(ArrayMailer) is ArrayMailer
