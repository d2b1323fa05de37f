"""Runtime values of the monkey language.

Booleans and null only ever exist as the TRUE, FALSE and NULL singletons below, so they can be compared by identity.
Integers are created per value and compare by payload. None of these objects change after creation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

from monkey.lang.nodes import BlockStatement, Identifier


INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


def wrap_int64(value):
    """Wraps value into the signed 64-bit range, two's complement style."""
    return (value - INT64_MIN) % 2 ** 64 + INT64_MIN


class MonkeyObject(ABC):
    """Superclass of every runtime value."""
    type_name = None

    @abstractmethod
    def inspect(self):
        """Text form of the value, as displayed by the shell."""

    def __str__(self):
        return self.inspect()


@dataclass(frozen=True)
class Integer(MonkeyObject):
    value: int
    type_name = "INTEGER"

    def __post_init__(self):
        assert INT64_MIN <= self.value <= INT64_MAX, f"{self.value} does not fit in 64 bits"

    def inspect(self):
        return str(self.value)


@dataclass(frozen=True, eq=False)
class Boolean(MonkeyObject):
    """Only TRUE and FALSE exist, so booleans compare by identity."""
    value: bool
    type_name = "BOOLEAN"

    def inspect(self):
        return "true" if self.value else "false"


@dataclass(frozen=True, eq=False)
class Null(MonkeyObject):
    type_name = "NULL"

    def inspect(self):
        return "null"


@dataclass(frozen=True, eq=False)
class Function(MonkeyObject):
    """Value of a function literal. Only held and compared (by identity): calling it is not supported."""
    parameters: Tuple[Identifier, ...]
    body: BlockStatement
    type_name = "FUNCTION"

    def inspect(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"fn({params}) {{\n{self.body}\n}}"


@dataclass(frozen=True)
class ReturnValue(MonkeyObject):
    """Wraps the value of a return statement while it unwinds enclosing blocks up to the program."""
    value: MonkeyObject
    type_name = "RETURN_VALUE"

    def inspect(self):
        return self.value.inspect()


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value):
    """Returns the boolean singleton for a Python bool."""
    return TRUE if value else FALSE
