"""Runtime values and helpers for fnlang.

fnlang values map directly onto Python objects: integers are `int`,
strings are `str`, booleans are `bool`, and the result of a call that does
not return anything is the `UNIT` singleton. Because `bool` is a subclass
of `int` in Python, every kind check in the interpreter goes through
`type_name` rather than `isinstance`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class UnitVal:
    """Marker object for the fnlang unit value."""
    _instance: Optional['UnitVal'] = None

    def __new__(cls) -> 'UnitVal':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'Unit'


UNIT = UnitVal()


@dataclass
class ErrorVal:
    """Describes a fatal fnlang error.

    `name` is the error kind (e.g. 'DivisionByZero'), `stage` names the
    pipeline stage that detected it ('lexing', 'parsing' or 'evaluating').
    `line` and `column` are 1-based and zero when no position is known.
    """
    name: str
    message: str
    stage: str = 'evaluating'
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        text = f"[{self.stage}] {self.name}: {self.message}"
        if self.line and self.column:
            text += f" (line {self.line}, column {self.column})"
        elif self.line:
            text += f" (line {self.line})"
        return text


def type_name(value: Any) -> str:
    """Return the fnlang kind name of a runtime value."""
    if isinstance(value, bool):
        return 'Bool'
    if isinstance(value, int):
        return 'Int'
    if isinstance(value, str):
        return 'Str'
    if isinstance(value, UnitVal):
        return 'Unit'
    return type(value).__name__


def to_string(value: Any) -> str:
    """Convert a value to the text written by `print`."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, UnitVal):
        return '()'
    return repr(value)
