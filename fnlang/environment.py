"""Function table and per-call variable frames."""

from typing import Any, Dict, Union
from fnlang.builtin_function import BuiltinFunction, UserFunction
from fnlang.errors import EvalError

FunctionEntry = Union[BuiltinFunction, UserFunction]


class FunctionTable:
    """Maps function names to user-defined or builtin entries for one run."""
    def __init__(self):
        self.entries: Dict[str, FunctionEntry] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.entries

    def register(self, entry: FunctionEntry) -> bool:
        """Add `entry`, replacing any earlier one; return True if it replaced."""
        replaced = entry.name in self.entries
        self.entries[entry.name] = entry
        return replaced

    def lookup(self, name: str, line: int = 0) -> FunctionEntry:
        if name in self.entries:
            return self.entries[name]
        raise EvalError.make('UndefinedFunction', f'undefined function {name}', line)


class CallFrame:
    """Variable bindings local to one active function invocation.

    Frames never see each other: there is no parent scope. `loop_depth`
    counts the `while` loops currently executing in this invocation so a
    `break` can be checked against it.
    """
    def __init__(self, function_name: str):
        self.function_name = function_name
        self.values: Dict[str, Any] = {}
        self.loop_depth = 0

    def get(self, name: str, line: int = 0) -> Any:
        if name in self.values:
            return self.values[name]
        raise EvalError.make('UndefinedVariable', f'undefined variable {name} in {self.function_name}', line)

    def set(self, name: str, value: Any):
        self.values[name] = value
