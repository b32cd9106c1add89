from typing import Any, Iterable, Optional
from fnlang.types import ErrorVal


class FnError(Exception):
    """Base exception for every fatal fnlang error."""
    stage = 'evaluating'

    def __init__(self, err: ErrorVal):
        super().__init__(str(err))
        self.err = err

    @classmethod
    def make(cls, name: str, message: str, line: int = 0, column: int = 0) -> 'FnError':
        return cls(ErrorVal(name, message, cls.stage, line, column))

    @property
    def kind(self) -> str:
        return self.err.name


class LexError(FnError):
    stage = 'lexing'


class ParseError(FnError):
    """Raised on the first grammar violation.

    Carries the set of token kinds that would have been accepted, the kind
    actually found and its lexeme.
    """
    stage = 'parsing'

    def __init__(self, err: ErrorVal, expected: Iterable[str] = (), actual: Optional[str] = None,
                 lexeme: Optional[str] = None):
        super().__init__(err)
        self.expected = tuple(expected)
        self.actual = actual
        self.lexeme = lexeme


class EvalError(FnError):
    stage = 'evaluating'


class ReturnSignal(Exception):
    """Internal exception to handle return statements in functions."""
    def __init__(self, value: Any):
        super().__init__('return')
        self.value = value


class BreakSignal(Exception):
    """Internal exception to unwind to the innermost enclosing loop."""
    def __init__(self):
        super().__init__('break')
