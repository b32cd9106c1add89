"""Function table entries: native builtins and user-defined functions."""

from dataclasses import dataclass
from typing import Any, Callable, List

from fnlang.ast import Node


@dataclass
class BuiltinFunction:
    name: str
    arity: int
    fn: Callable[[List[Any]], Any]
    native = True

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"


@dataclass
class UserFunction:
    name: str
    params: List[str]
    body: List[Node]
    native = False

    @property
    def arity(self) -> int:
        return len(self.params)

    def __repr__(self) -> str:
        return f"<function {self.name}>"
