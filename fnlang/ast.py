"""Abstract Syntax Tree (AST) definitions for fnlang.

A `Program` is an ordered list of function definitions; each function owns
its statement list, which owns its expressions. Nodes compare structurally.
The `line` attribute records where a node started in the source for
diagnostics and takes no part in equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


# Expressions

@dataclass
class IntLiteral(Node):
    value: int
    line: int = field(default=0, compare=False, repr=False)


@dataclass
class StrLiteral(Node):
    value: str  # without the surrounding quotes
    line: int = field(default=0, compare=False, repr=False)


@dataclass
class BoolLiteral(Node):
    value: bool
    line: int = field(default=0, compare=False, repr=False)


@dataclass
class Ident(Node):
    name: str
    line: int = field(default=0, compare=False, repr=False)


@dataclass
class BinaryOp(Node):
    op: str
    left: Node
    right: Node
    line: int = field(default=0, compare=False, repr=False)


@dataclass
class Call(Node):
    name: str
    args: List[Node]
    line: int = field(default=0, compare=False, repr=False)


# Statements

@dataclass
class ExprStmt(Node):
    expr: Node
    line: int = field(default=0, compare=False, repr=False)


@dataclass
class Assign(Node):
    name: str
    value: Node
    line: int = field(default=0, compare=False, repr=False)


@dataclass
class IfStmt(Node):
    condition: Node
    then_body: List[Node]
    else_body: Optional[List[Node]]  # `else if` is a single nested IfStmt
    line: int = field(default=0, compare=False, repr=False)


@dataclass
class WhileStmt(Node):
    condition: Node
    body: List[Node]
    line: int = field(default=0, compare=False, repr=False)


@dataclass
class BreakStmt(Node):
    line: int = field(default=0, compare=False, repr=False)


@dataclass
class ReturnStmt(Node):
    value: Optional[Node]
    line: int = field(default=0, compare=False, repr=False)


# Top level

@dataclass
class FunctionDef(Node):
    name: str
    params: List[str]
    body: List[Node]
    line: int = field(default=0, compare=False, repr=False)


@dataclass
class Program(Node):
    functions: List[FunctionDef]
