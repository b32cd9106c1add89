"""Tree-walking interpreter for fnlang.

The interpreter registers the builtin `print` and every function of a
parsed `Program` in a `FunctionTable`, then calls `main` with no arguments.
Each call runs in a fresh `CallFrame`; there are no globals and no
closures, so data only moves between functions through arguments and
return values. `return` and `break` unwind through the Python stack as
`ReturnSignal` and `BreakSignal`. Every error is an `EvalError` and ends
the run.
"""

from __future__ import annotations

import sys
from typing import Any, List

from .ast import (
    Program, FunctionDef, ExprStmt, Assign, IfStmt, WhileStmt, BreakStmt,
    ReturnStmt, IntLiteral, StrLiteral, BoolLiteral, Ident, BinaryOp, Call, Node,
)
from .builtin_function import BuiltinFunction, UserFunction
from .environment import CallFrame, FunctionTable, FunctionEntry
from .errors import EvalError, ReturnSignal, BreakSignal
from .parser import parse_program
from .types import UNIT, to_string, type_name

# Python frames used per fnlang call in the worst common case; used to size
# the host recursion limit for `max_call_depth`
PY_FRAMES_PER_CALL = 20


def truncated_divmod(a: int, b: int):
    """Integer division rounding toward zero, remainder takes the dividend's sign."""
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q, a - b * q


class Interpreter:
    """Core interpreter that executes an fnlang Program."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt', max_call_depth: int = 500):
        self.functions = FunctionTable()
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = None
        self.max_call_depth = max_call_depth
        self.call_depth = 0
        self.load_builtins()

    def debug(self, msg: str):
        if self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def load_builtins(self):
        def std_print(args: List[Any]) -> Any:
            print(to_string(args[0]))
            return UNIT

        self.functions.register(BuiltinFunction('print', 1, std_print))

    # Public API
    def run(self, program: Program) -> Any:
        """Register the program's functions and call `main`; return its result."""
        if self.debug_level > 0:
            self.debug_fp = open(self.debug_file, 'w', encoding='utf-8')
        old_limit = sys.getrecursionlimit()
        needed = self.max_call_depth * PY_FRAMES_PER_CALL + 1000
        if needed > old_limit:
            sys.setrecursionlimit(needed)
        try:
            for func in program.functions:
                self.define(func)
            if 'main' not in self.functions:
                raise EvalError.make('EntryPointMissing', 'no main function defined')
            self.debug("run main")
            result = self.call_function('main', [])
            self.debug(f"main finished with {to_string(result)}")
            return result
        except RecursionError:
            raise EvalError.make('StackOverflow', 'host recursion limit exceeded') from None
        finally:
            sys.setrecursionlimit(old_limit)
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def define(self, func: FunctionDef):
        replaced = self.functions.register(UserFunction(func.name, list(func.params), func.body))
        if self.debug_level >= 1:
            verb = 'redefine' if replaced else 'define'
            self.debug(f"{verb} function {func.name}({', '.join(func.params)})")

    # Statements

    def execute_block(self, statements: List[Node], frame: CallFrame):
        for stmt in statements:
            self.execute(stmt, frame)

    def execute(self, node: Node, frame: CallFrame):
        if self.debug_level >= 4:
            self.debug(f"{frame.function_name}:{node.line} {type(node).__name__}")
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr, frame)
            return
        if isinstance(node, Assign):
            value = self.evaluate(node.value, frame)
            frame.set(node.name, value)
            if self.debug_level >= 3:
                self.debug(f"assign {node.name} = {to_string(value)}")
            return
        if isinstance(node, IfStmt):
            cond = self.check_condition(node.condition, frame, 'if')
            if self.debug_level >= 3:
                self.debug(f"if condition -> {to_string(cond)}")
            if cond:
                self.execute_block(node.then_body, frame)
            elif node.else_body is not None:
                self.execute_block(node.else_body, frame)
            return
        if isinstance(node, WhileStmt):
            frame.loop_depth += 1
            try:
                while True:
                    cond = self.check_condition(node.condition, frame, 'while')
                    if self.debug_level >= 3:
                        self.debug(f"while condition -> {to_string(cond)}")
                    if not cond:
                        break
                    try:
                        self.execute_block(node.body, frame)
                    except BreakSignal:
                        break
            finally:
                frame.loop_depth -= 1
            return
        if isinstance(node, BreakStmt):
            if frame.loop_depth == 0:
                raise EvalError.make('LoopControlError', 'break outside of a loop', node.line)
            raise BreakSignal()
        if isinstance(node, ReturnStmt):
            value = self.evaluate(node.value, frame) if node.value is not None else UNIT
            raise ReturnSignal(value)
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def check_condition(self, expr: Node, frame: CallFrame, keyword: str) -> bool:
        cond = self.evaluate(expr, frame)
        if not isinstance(cond, bool):
            raise EvalError.make('TypeMismatch', f'{keyword} condition must be Bool, got {type_name(cond)}',
                                 expr.line)
        return cond

    # Expressions

    def evaluate(self, node: Node, frame: CallFrame) -> Any:
        if isinstance(node, (IntLiteral, StrLiteral, BoolLiteral)):
            return node.value
        if isinstance(node, Ident):
            return frame.get(node.name, node.line)
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left, frame)
            right = self.evaluate(node.right, frame)
            return self.apply_binary_op(node.op, left, right, node.line)
        if isinstance(node, Call):
            func = self.functions.lookup(node.name, node.line)
            args = [self.evaluate(arg, frame) for arg in node.args]
            return self.invoke(func, args, node.line)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def call_function(self, name: str, args: List[Any]) -> Any:
        """Call the function registered under `name` with already evaluated args."""
        return self.invoke(self.functions.lookup(name), args)

    def invoke(self, func: FunctionEntry, args: List[Any], line: int = 0) -> Any:
        if len(args) != func.arity:
            raise EvalError.make('ArityMismatch',
                                 f"{func.name} expects {func.arity} arguments, got {len(args)}", line)
        if isinstance(func, BuiltinFunction):
            return func.fn(args)
        if self.call_depth >= self.max_call_depth:
            raise EvalError.make('StackOverflow',
                                 f'call depth exceeded {self.max_call_depth} in {func.name}', line)
        frame = CallFrame(func.name)
        for param, arg in zip(func.params, args):
            frame.set(param, arg)
        if self.debug_level >= 2:
            self.debug(f"call {func.name}({', '.join(to_string(a) for a in args)})")
        self.call_depth += 1
        try:
            self.execute_block(func.body, frame)
            ret_val = UNIT
        except ReturnSignal as r:
            ret_val = r.value
        finally:
            self.call_depth -= 1
        if self.debug_level >= 2:
            self.debug(f"return {func.name} -> {to_string(ret_val)}")
        return ret_val

    def apply_binary_op(self, op: str, a: Any, b: Any, line: int = 0) -> Any:
        ka, kb = type_name(a), type_name(b)
        if op in ('+', '-', '*', '/', '%'):
            if op == '+' and ka == kb == 'Str':
                return a + b
            if not ka == kb == 'Int':
                raise EvalError.make('TypeMismatch', f'unsupported {op} for {ka} and {kb}', line)
            if op == '+':
                return a + b
            if op == '-':
                return a - b
            if op == '*':
                return a * b
            if b == 0:
                what = 'division' if op == '/' else 'modulo'
                raise EvalError.make('DivisionByZero', f'{what} by zero', line)
            q, r = truncated_divmod(a, b)
            return q if op == '/' else r
        if op in ('==', '!='):
            if ka != kb:
                raise EvalError.make('TypeMismatch', f'cannot compare {ka} and {kb}', line)
            eq = a == b
            return eq if op == '==' else not eq
        if op in ('<', '>', '<=', '>='):
            if ka != kb or ka not in ('Int', 'Str'):
                raise EvalError.make('TypeMismatch', f'ordering not supported for {ka} and {kb}', line)
            if op == '<':
                return a < b
            if op == '>':
                return a > b
            if op == '<=':
                return a <= b
            return a >= b
        raise EvalError.make('TypeMismatch', f'unknown operator {op}', line)


def run_program(source: str, debug_level: int = 0, debug_file: str = 'debug.txt',
                max_call_depth: int = 500) -> Any:
    """Convenience function to parse and run an fnlang program from source."""
    ast_program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level, debug_file=debug_file, max_call_depth=max_call_depth)
    return interpreter.run(ast_program)


def run_file(file_path: str, debug_level: int = 0, debug_file: str = 'debug.txt',
             max_call_depth: int = 500) -> Any:
    """Parse and run an fnlang source file."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, debug_level=debug_level, debug_file=debug_file, max_call_depth=max_call_depth)
