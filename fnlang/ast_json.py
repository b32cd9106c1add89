"""JSON serialization/deserialization for the fnlang AST.

This module converts between fnlang AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node records its
source line so diagnostics stay useful when a stored AST is executed.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Program,
    FunctionDef,
    ExprStmt,
    Assign,
    IfStmt,
    WhileStmt,
    BreakStmt,
    ReturnStmt,
    IntLiteral,
    StrLiteral,
    BoolLiteral,
    Ident,
    BinaryOp,
    Call,
)


def body_to_obj(body):
    return None if body is None else [ast_to_obj(s) for s in body]


def body_from_obj(obj):
    return None if obj is None else [ast_from_obj(s) for s in obj]


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, Program):
        return {"type": "Program", "functions": [ast_to_obj(f) for f in node.functions]}

    obj: Dict[str, Any]
    if isinstance(node, FunctionDef):
        obj = {"type": "FunctionDef", "name": node.name, "params": list(node.params), "body": body_to_obj(node.body)}
    elif isinstance(node, ExprStmt):
        obj = {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    elif isinstance(node, Assign):
        obj = {"type": "Assign", "name": node.name, "value": ast_to_obj(node.value)}
    elif isinstance(node, IfStmt):
        obj = {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_body": body_to_obj(node.then_body),
            "else_body": body_to_obj(node.else_body),
        }
    elif isinstance(node, WhileStmt):
        obj = {"type": "WhileStmt", "condition": ast_to_obj(node.condition), "body": body_to_obj(node.body)}
    elif isinstance(node, BreakStmt):
        obj = {"type": "BreakStmt"}
    elif isinstance(node, ReturnStmt):
        obj = {"type": "ReturnStmt", "value": ast_to_obj(node.value)}
    elif isinstance(node, IntLiteral):
        obj = {"type": "IntLiteral", "value": node.value}
    elif isinstance(node, StrLiteral):
        obj = {"type": "StrLiteral", "value": node.value}
    elif isinstance(node, BoolLiteral):
        obj = {"type": "BoolLiteral", "value": node.value}
    elif isinstance(node, Ident):
        obj = {"type": "Ident", "name": node.name}
    elif isinstance(node, BinaryOp):
        obj = {"type": "BinaryOp", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    elif isinstance(node, Call):
        obj = {"type": "Call", "name": node.name, "args": [ast_to_obj(a) for a in node.args]}
    else:
        raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")
    obj["line"] = node.line
    return obj


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    line = obj.get("line", 0)
    if t == "Program":
        return Program(functions=[ast_from_obj(f) for f in obj["functions"]])
    if t == "FunctionDef":
        return FunctionDef(name=obj["name"], params=list(obj["params"]), body=body_from_obj(obj["body"]), line=line)
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]), line=line)
    if t == "Assign":
        return Assign(name=obj["name"], value=ast_from_obj(obj["value"]), line=line)
    if t == "IfStmt":
        return IfStmt(
            condition=ast_from_obj(obj["condition"]),
            then_body=body_from_obj(obj["then_body"]),
            else_body=body_from_obj(obj.get("else_body")),
            line=line,
        )
    if t == "WhileStmt":
        return WhileStmt(condition=ast_from_obj(obj["condition"]), body=body_from_obj(obj["body"]), line=line)
    if t == "BreakStmt":
        return BreakStmt(line=line)
    if t == "ReturnStmt":
        return ReturnStmt(value=ast_from_obj(obj.get("value")), line=line)
    if t == "IntLiteral":
        return IntLiteral(value=int(obj["value"]), line=line)
    if t == "StrLiteral":
        return StrLiteral(value=obj["value"], line=line)
    if t == "BoolLiteral":
        return BoolLiteral(value=bool(obj["value"]), line=line)
    if t == "Ident":
        return Ident(name=obj["name"], line=line)
    if t == "BinaryOp":
        return BinaryOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]), line=line)
    if t == "Call":
        return Call(name=obj["name"], args=[ast_from_obj(a) for a in obj["args"]], line=line)

    raise ValueError(f"Unknown AST node type: {t}")
