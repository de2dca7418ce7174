"""
Defines the abstract syntax tree (AST) node types for the basic2c BASIC dialect.

The tree is built from two closed unions of frozen dataclasses:

Expression:
    Number, Float, Variable, BinaryOp, FunctionCall

StatementNode:
    Let, Print, For, If, Goto, Input, Rem, End

A `Statement` pairs a StatementNode with an optional integer label (the BASIC
line number). Nodes are immutable and own their children exclusively; the
parser builds the tree once and the emitter walks it once.

Each node carries a class-level `kind` string used by the emitters for
`emit_<kind>` dispatch, and `to_dict()` for JSON output or debugging.

Example:
    Statement(Let("X", BinaryOp(Number(1), BinOp.ADD, Variable("Y"))), label=10)
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Union


class BinOp(str, Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


class Comparison(str, Enum):
    EQ = "="
    NE = "<>"
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="


# Token type -> AST operator
BINOP_TOKENS: dict[str, BinOp] = {
    "PLUS": BinOp.ADD,
    "SUB": BinOp.SUB,
    "MULT": BinOp.MUL,
    "DIV": BinOp.DIV,
    "POW": BinOp.POW,
}

COMPARISON_TOKENS: dict[str, Comparison] = {
    "EQ": Comparison.EQ,
    "NE": Comparison.NE,
    "LT": Comparison.LT,
    "LE": Comparison.LE,
    "GT": Comparison.GT,
    "GE": Comparison.GE,
}


def _dump(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_dump(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    return value


@dataclass(frozen=True)
class Node:
    """Base class for every AST node."""

    kind: ClassVar[str] = "node"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"kind": self.kind}
        for f in fields(self):
            payload[f.name] = _dump(getattr(self, f.name))
        return payload


# Expressions


@dataclass(frozen=True)
class Number(Node):
    kind: ClassVar[str] = "number"
    value: int


@dataclass(frozen=True)
class Float(Node):
    kind: ClassVar[str] = "float"
    value: float


@dataclass(frozen=True)
class Variable(Node):
    kind: ClassVar[str] = "variable"
    name: str


@dataclass(frozen=True)
class BinaryOp(Node):
    kind: ClassVar[str] = "binary"
    left: Expression
    op: BinOp
    right: Expression


@dataclass(frozen=True)
class FunctionCall(Node):
    kind: ClassVar[str] = "call"
    name: str
    args: tuple[Expression, ...] = ()


Expression = Union[Number, Float, Variable, BinaryOp, FunctionCall]


# Statements


@dataclass(frozen=True)
class PrintString(Node):
    """A literal string item inside a PRINT statement."""

    kind: ClassVar[str] = "print_string"
    text: str


PrintItem = Union[PrintString, Expression]


@dataclass(frozen=True)
class Let(Node):
    kind: ClassVar[str] = "let"
    var: str
    value: Expression


@dataclass(frozen=True)
class Print(Node):
    """PRINT item list; `newline` is False when a trailing separator suppressed it."""

    kind: ClassVar[str] = "print"
    items: tuple[PrintItem, ...] = ()
    newline: bool = True


@dataclass(frozen=True)
class For(Node):
    """FOR var = start TO end [STEP step] ... NEXT. `step` is None for the default of 1."""

    kind: ClassVar[str] = "for"
    var: str
    start: Expression
    end: Expression
    step: Expression | None = None
    body: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class If(Node):
    kind: ClassVar[str] = "if"
    left: Expression
    op: Comparison
    right: Expression
    then: Statement


@dataclass(frozen=True)
class Goto(Node):
    """Unconditional jump. `implicit` marks the jump written as `IF ... THEN <line>`."""

    kind: ClassVar[str] = "goto"
    target: int
    implicit: bool = False


@dataclass(frozen=True)
class Input(Node):
    kind: ClassVar[str] = "input"
    var: str


@dataclass(frozen=True)
class Rem(Node):
    kind: ClassVar[str] = "rem"


@dataclass(frozen=True)
class End(Node):
    kind: ClassVar[str] = "end"


StatementNode = Union[Let, Print, For, If, Goto, Input, Rem, End]


@dataclass(frozen=True)
class Statement(Node):
    """A statement with its optional BASIC line number."""

    kind: ClassVar[str] = "statement"
    node: StatementNode
    label: int | None = None


EXPRESSION_KINDS: tuple[str, ...] = tuple(
    cls.kind for cls in (Number, Float, Variable, BinaryOp, FunctionCall)
)

STATEMENT_KINDS: tuple[str, ...] = tuple(
    cls.kind for cls in (Let, Print, For, If, Goto, Input, Rem, End)
)

__all__ = [
    "BINOP_TOKENS",
    "COMPARISON_TOKENS",
    "EXPRESSION_KINDS",
    "STATEMENT_KINDS",
    "BinOp",
    "BinaryOp",
    "Comparison",
    "End",
    "Expression",
    "Float",
    "For",
    "FunctionCall",
    "Goto",
    "If",
    "Input",
    "Let",
    "Node",
    "Number",
    "Print",
    "PrintItem",
    "PrintString",
    "Rem",
    "Statement",
    "StatementNode",
    "Variable",
]
