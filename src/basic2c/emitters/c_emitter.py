"""
Translates basic2c AST nodes into a C translation unit.

This module defines the `CEmitter` class, the code generator used by the
`Transpiler`. Generation runs in two phases:

1. `collect_variables()` walks every statement (FOR bodies and IF branches
   included) and records each variable that is written by LET, FOR or INPUT.
   All of them become one flat declaration at the top of `main()`.
2. `emit_statement()` renders each statement into an indented line buffer,
   which `get_output()` wraps in the fixed preamble and epilogue.

Rendering rules:
    - Every binary operation is fully parenthesized; `^` becomes `pow(a, b)`.
    - Known intrinsics (INT, SQR, EXP, ABS, RND, SIN, COS, TAN, ATN, LOG) map to
      math-library calls, case-insensitively. Unknown names pass through as-is.
    - A statement with a line number is preceded by a `line<N>:` label; a
      numbered empty line renders as the null statement `line<N>: ;`.

Dialects:
    "float" declares variables as `double` (the default), "integer" as
    `long long`. See `Dialect`.

The emitter never validates: any tree the parser builds renders to text,
even when the resulting C program would not compile (e.g. a GOTO to a
missing line).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from basic2c.basic_ast import (
    BinaryOp,
    BinOp,
    Comparison,
    End,
    Expression,
    Float,
    For,
    FunctionCall,
    Goto,
    If,
    Input,
    Let,
    Node,
    Number,
    Print,
    PrintString,
    Rem,
    Statement,
    Variable,
)
from basic2c.basic_constants import intrinsic_functions

logger = logging.getLogger(__name__)

C_PREAMBLE: tuple[str, ...] = (
    "#include <stdio.h>",
    "#include <stdlib.h>",
    "#include <math.h>",
    "#include <time.h>",
    "",
    "int main() {",
    "    srand(time(NULL));",
)

C_COMPARISONS: dict[Comparison, str] = {
    Comparison.EQ: "==",
    Comparison.NE: "!=",
    Comparison.LT: "<",
    Comparison.LE: "<=",
    Comparison.GT: ">",
    Comparison.GE: ">=",
}


@dataclass(frozen=True)
class Dialect:
    """Numeric model of the generated program.

    Attributes:
        name (str): Dialect name used on the command line.
        c_type (str): Declared type of every BASIC variable.
        print_format (str): printf conversion for numeric PRINT items.
        scan_format (str): scanf conversion for INPUT.
        default_step (str): FOR step used when STEP is omitted.
        print_cast (str): Cast applied to numeric PRINT items, "" for none.
    """

    name: str
    c_type: str
    print_format: str
    scan_format: str
    default_step: str
    print_cast: str = ""

    @property
    def is_integer(self) -> bool:
        return self.name == "integer"

    def number_literal(self, value: int) -> str:
        return str(value) if self.is_integer else f"{value}.0"

    def float_literal(self, value: float) -> str:
        if math.isnan(value):
            return "NAN"
        if math.isinf(value):
            return "INFINITY" if value > 0 else "-INFINITY"
        return repr(value)


FLOAT_DIALECT = Dialect("float", "double", "%g ", "%lf", "1.0")
INTEGER_DIALECT = Dialect(
    "integer", "long long", "%lld ", "%lld", "1", print_cast="(long long)"
)

DIALECTS: dict[str, Dialect] = {d.name: d for d in (FLOAT_DIALECT, INTEGER_DIALECT)}


class CEmitter:
    """Emits C code from basic2c AST nodes.

    Attributes:
        dialect (Dialect): Numeric model of the output.
        lines (list[str]): Accumulated lines of the body of `main()`.
        indent (int): Current indentation level; 1 is the body of `main()`.
        variables (set[str]): Names collected by `collect_variables()`.
    """

    def __init__(self, dialect: str | Dialect = FLOAT_DIALECT) -> None:
        if isinstance(dialect, str):
            if dialect.lower() not in DIALECTS:
                raise ValueError(f"Unknown dialect: {dialect!r}")
            dialect = DIALECTS[dialect.lower()]
        self.dialect: Dialect = dialect
        self.lines: list[str] = []
        self.indent = 1
        self.variables: set[str] = set()

    def indent_str(self) -> str:
        return "    " * self.indent

    def get_output(self) -> str:
        """
        Returns the complete translation unit.

        Returns
        -------
        str
            Preamble, variable declaration (when any variable was collected),
            the emitted statements and the closing `return 0;`.
        """
        out = list(C_PREAMBLE)
        if self.variables:
            names = ", ".join(sorted(self.variables))
            out.append(f"    {self.dialect.c_type} {names};")
            out.append("")
        out.extend(self.lines)
        out.extend(["", "    return 0;", "}"])
        return "\n".join(out) + "\n"

    # Phase 1: variable collection

    def collect_variables(self, statements: list[Statement]) -> set[str]:
        for stmt in statements:
            self._collect(stmt.node)
        logger.debug("Collected variables: %s", sorted(self.variables))
        return self.variables

    def _collect(self, node: Node) -> None:
        if isinstance(node, (Let, Input)):
            self.variables.add(node.var)
        elif isinstance(node, For):
            self.variables.add(node.var)
            for stmt in node.body:
                self._collect(stmt.node)
        elif isinstance(node, If):
            self._collect(node.then.node)

    # Expressions

    def emit_expr(self, node: Expression) -> str:
        """Renders an expression by dispatching on its kind."""
        method = getattr(self, f"emit_expr_{node.kind}")
        return method(node)

    def emit_expr_number(self, node: Number) -> str:
        return self.dialect.number_literal(node.value)

    def emit_expr_float(self, node: Float) -> str:
        return self.dialect.float_literal(node.value)

    def emit_expr_variable(self, node: Variable) -> str:
        return node.name

    def emit_expr_binary(self, node: BinaryOp) -> str:
        # Walk the left spine iteratively; the parser builds long sums and
        # products as left-nested chains.
        chain: list[BinaryOp] = []
        expr: Expression = node
        while isinstance(expr, BinaryOp):
            chain.append(expr)
            expr = expr.left
        openers: list[str] = []
        closers: list[str] = []
        for link in chain:
            right = self.emit_expr(link.right)
            if link.op is not BinOp.POW:
                openers.append("(")
                closers.append(f" {link.op.value} {right})")
            elif self.dialect.is_integer:
                openers.append("((long long)pow(")
                closers.append(f", {right}))")
            else:
                openers.append("pow(")
                closers.append(f", {right})")
        return "".join(openers) + self.emit_expr(expr) + "".join(reversed(closers))

    def emit_expr_call(self, node: FunctionCall) -> str:
        args = ", ".join(self.emit_expr(a) for a in node.args)
        template = intrinsic_functions.get(node.name.upper())
        if template is None:
            return f"{node.name}({args})"
        return template.format(args=args)

    # Statements

    def emit_statement(self, stmt: Statement) -> None:
        """Emits the statement's label, if any, followed by its code."""
        if stmt.label is not None:
            if isinstance(stmt.node, Rem):
                # C labels must precede a statement
                self.lines.append(f"line{stmt.label}: ;")
                return
            self.lines.append(f"line{stmt.label}:")
        self._visit(stmt.node)

    def _visit(self, node: Node) -> None:
        method = getattr(self, f"emit_{node.kind}")
        method(node)

    def emit_let(self, node: Let) -> None:
        value = self.emit_expr(node.value)
        self.lines.append(f"{self.indent_str()}{node.var} = {value};")

    def emit_print(self, node: Print) -> None:
        for item in node.items:
            if isinstance(item, PrintString):
                self.lines.append(f'{self.indent_str()}printf("%s", "{item.text}");')
            else:
                value = f"{self.dialect.print_cast}{self.emit_expr(item)}"
                self.lines.append(
                    f'{self.indent_str()}printf("{self.dialect.print_format}", {value});'
                )
        if node.newline:
            self.lines.append(f'{self.indent_str()}printf("\\n");')

    def emit_for(self, node: For) -> None:
        var = node.var
        start = self.emit_expr(node.start)
        end = self.emit_expr(node.end)
        step = (
            self.emit_expr(node.step)
            if node.step is not None
            else self.dialect.default_step
        )
        self.lines.append(
            f"{self.indent_str()}for ({var} = {start}; {var} <= {end}; {var} += {step}) {{"
        )
        self.indent += 1
        for stmt in node.body:
            self.emit_statement(stmt)
        self.indent -= 1
        self.lines.append(f"{self.indent_str()}}}")

    def emit_if(self, node: If) -> None:
        left = self.emit_expr(node.left)
        right = self.emit_expr(node.right)
        op = C_COMPARISONS[node.op]
        self.lines.append(f"{self.indent_str()}if ({left} {op} {right}) {{")
        self.indent += 1
        self.emit_statement(node.then)
        self.indent -= 1
        self.lines.append(f"{self.indent_str()}}}")

    def emit_goto(self, node: Goto) -> None:
        self.lines.append(f"{self.indent_str()}goto line{node.target};")

    def emit_input(self, node: Input) -> None:
        self.lines.append(
            f'{self.indent_str()}printf("? "); scanf("{self.dialect.scan_format}", &{node.var});'
        )

    def emit_rem(self, node: Rem) -> None:
        pass

    def emit_end(self, node: End) -> None:
        self.lines.append(f"{self.indent_str()}return 0;")


__all__ = ["DIALECTS", "FLOAT_DIALECT", "INTEGER_DIALECT", "CEmitter", "Dialect"]
