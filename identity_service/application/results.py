"""
Explicit outcomes of the account and role use cases.

Use cases return ``Ok(value)`` or ``Err(kind, message)`` instead of raising,
so every caller has to look at the error kind before using the value.
"""
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..domain.errors import ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    ok: bool = True


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str = ""
    ok: bool = False

    @property
    def value(self) -> Any:
        raise AttributeError(f"Err({self.kind.value}) has no value")


Result = Ok[T] | Err
