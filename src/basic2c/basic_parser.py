"""
basic2c Parser

Parses the BASIC token list into a list of labelled `Statement` nodes.

The parser is a single-pass recursive descent parser with one token of
lookahead (two to spot a numbered NEXT line) and no backtracking.
Expressions use precedence climbing.

Expression Grammar (lowest to highest precedence)
-------------------------------------------------
- additive:       multiplicative (("+" | "-") multiplicative)*      left-assoc
- multiplicative: power (("*" | "/") power)*                        left-assoc
- power:          primary ("^" power)?                              right-assoc
- primary:        NUMBER | FLOAT | IDENT | IDENT "(" args ")" | "(" additive ")"

Statement Grammar
-----------------
Every statement may start with an integer label (its BASIC line number).

- `LET X = expr`                    (`SET` is accepted as `LET`)
- `PRINT item ((","|";") item)* [","|";"]`
- `FOR I = expr TO expr [STEP expr] ... NEXT [I]`   (`ENDFOR` is accepted as `NEXT`)
- `IF expr <cmp> expr THEN (line | statement)`
- `GOTO line`
- `INPUT X`
- `REM ...`, `END`

Entry Points
------------
- `parse()`: Parse a full program into a list of top-level statements.
- `parse_statement()`: Parse a single (optionally labelled) statement.
- `parse_expression()`: Parse a single expression.

Raises
------
BasicSyntaxError
    On the first token that does not fit the grammar. There is no recovery.
"""

from __future__ import annotations

import logging

from basic2c.basic_ast import (
    BINOP_TOKENS,
    COMPARISON_TOKENS,
    BinaryOp,
    End,
    Expression,
    Float,
    For,
    FunctionCall,
    Goto,
    If,
    Input,
    Let,
    Number,
    Print,
    PrintItem,
    PrintString,
    Rem,
    Statement,
    StatementNode,
    Variable,
)
from basic2c.basic_constants import (
    comparison_tokens,
    line_end_tokens,
    separator_tokens,
)
from basic2c.basic_errors import BasicSyntaxError
from basic2c.basic_lexer import Token

logger = logging.getLogger(__name__)


class Parser:
    """
    basic2c Parser Class

    Transforms a list of tokens, terminated by EOF, into the statement tree
    consumed by the emitters.

    Attributes
    ----------
    tokens : list[Token]
        The input token stream to be parsed.
    position : int
        Current index into the token stream.
    """

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens: list[Token] = tokens
        self.position: int = 0

        self.statement_parsers = {
            "LET": self.parse_let,
            "PRINT": self.parse_print,
            "FOR": self.parse_for,
            "IF": self.parse_if,
            "GOTO": self.parse_goto,
            "INPUT": self.parse_input,
            "REM": self.parse_rem,
            "END": self.parse_end,
        }

    def current(self) -> Token:
        return (
            self.tokens[self.position]
            if self.position < len(self.tokens)
            else Token("EOF", "EOF")
        )

    def peek(self, offset: int = 1) -> Token:
        index = self.position + offset
        return self.tokens[index] if index < len(self.tokens) else Token("EOF", "EOF")

    def advance(self) -> Token:
        tok = self.current()
        self.position += 1
        return tok

    def at_line_end(self) -> bool:
        return self.current().type in line_end_tokens

    def expect(self, *types: str) -> Token:
        """Consume the current token if its type is one of `types`, else fail."""
        tok = self.current()
        if tok.type in types:
            return self.advance()
        expected = " or ".join(types)
        raise BasicSyntaxError(
            f"Expected {expected}, got {tok.type} {tok.value!r}", tok, types
        )

    def skip_newlines(self) -> None:
        while self.current().type == "NEWLINE":
            self.advance()

    def parse(self) -> list[Statement]:
        """Parse a full program and return its top-level statements."""
        statements: list[Statement] = []
        self.skip_newlines()
        while self.current().type != "EOF":
            statements.append(self.parse_statement())
            self.skip_newlines()
        logger.debug("Parsed %d top-level statements", len(statements))
        return statements

    # Statements

    def parse_statement(self) -> Statement:
        """Parse one statement, with its optional leading line number."""
        self.skip_newlines()

        label: int | None = None
        if self.current().type == "NUMBER":
            label = int(self.advance().value)

        tok = self.current()
        parse_fn = self.statement_parsers.get(tok.type)
        if parse_fn is not None:
            node = parse_fn()
        elif tok.type in line_end_tokens:
            # A line number on its own, or an empty line
            node = Rem()
        else:
            raise BasicSyntaxError(
                f"Unexpected token at start of statement: {tok.type} {tok.value!r}",
                tok,
            )
        return Statement(node, label)

    def parse_identifier(self, context: str) -> str:
        tok = self.current()
        if tok.type != "IDENT":
            raise BasicSyntaxError(
                f"Expected identifier after {context}, got {tok.type} {tok.value!r}",
                tok,
                ("IDENT",),
            )
        self.advance()
        return str(tok.value)

    def parse_let(self) -> StatementNode:
        """`LET X = expr`"""
        self.expect("LET")
        var = self.parse_identifier("LET")
        self.expect("EQ")
        return Let(var, self.parse_expression())

    def parse_print(self) -> StatementNode:
        """
        Print statement can be:
        PRINT
        PRINT X
        PRINT "A", X; "B"
        PRINT "A";          (trailing separator: no newline)
        """
        self.expect("PRINT")

        items: list[PrintItem] = []
        newline = True

        while not self.at_line_end():
            tok = self.current()
            if tok.type == "STRING":
                self.advance()
                items.append(PrintString(str(tok.value)))
            elif tok.type not in separator_tokens:
                items.append(self.parse_expression())

            if self.current().type not in separator_tokens:
                break
            self.advance()
            if self.at_line_end():
                newline = False
                break

        return Print(tuple(items), newline)

    def parse_for(self) -> StatementNode:
        """`FOR I = start TO end [STEP step]` then a body closed by `NEXT [I]`."""
        self.expect("FOR")
        var = self.parse_identifier("FOR")
        self.expect("EQ")
        start = self.parse_expression()
        self.expect("TO")
        end = self.parse_expression()

        step: Expression | None = None
        if self.current().type == "STEP":
            self.advance()
            step = self.parse_expression()

        body: list[Statement] = []
        while True:
            self.skip_newlines()
            if self.current().type == "NUMBER" and self.peek().type == "NEXT":
                # A numbered NEXT line stays a jump target at the end of the body
                body.append(Statement(Rem(), int(self.advance().value)))
            if self.current().type in ("NEXT", "EOF"):
                break
            body.append(self.parse_statement())

        self.expect("NEXT")
        # Optional NEXT <var>; the name is not checked against the loop variable
        if self.current().type == "IDENT":
            self.advance()

        return For(var, start, end, step, tuple(body))

    def parse_if(self) -> StatementNode:
        """`IF left <cmp> right THEN (line | statement)`"""
        self.expect("IF")
        left = self.parse_expression()

        tok = self.current()
        if tok.type not in comparison_tokens:
            raise BasicSyntaxError(
                f"Expected comparison operator in IF, got {tok.type} {tok.value!r}",
                tok,
                comparison_tokens,
            )
        self.advance()
        op = COMPARISON_TOKENS[tok.type]

        right = self.parse_expression()
        self.expect("THEN")

        if self.current().type == "NUMBER":
            then = Statement(Goto(int(self.advance().value), implicit=True))
        else:
            then = self.parse_statement()

        return If(left, op, right, then)

    def parse_goto(self) -> StatementNode:
        self.expect("GOTO")
        target = self.expect("NUMBER")
        return Goto(int(target.value))

    def parse_input(self) -> StatementNode:
        self.expect("INPUT")
        return Input(self.parse_identifier("INPUT"))

    def parse_rem(self) -> StatementNode:
        self.expect("REM")
        return Rem()

    def parse_end(self) -> StatementNode:
        self.expect("END")
        return End()

    # Expressions

    def parse_expression(self) -> Expression:
        """Additive level: left-associative `+` and `-`."""
        left = self.parse_term()
        while self.current().type in ("PLUS", "SUB"):
            op = BINOP_TOKENS[self.advance().type]
            left = BinaryOp(left, op, self.parse_term())
        return left

    def parse_term(self) -> Expression:
        """Multiplicative level: left-associative `*` and `/`."""
        left = self.parse_power()
        while self.current().type in ("MULT", "DIV"):
            op = BINOP_TOKENS[self.advance().type]
            left = BinaryOp(left, op, self.parse_power())
        return left

    def parse_power(self) -> Expression:
        """Power level: `^` is right-associative."""
        base = self.parse_primary()
        if self.current().type == "POW":
            op = BINOP_TOKENS[self.advance().type]
            return BinaryOp(base, op, self.parse_power())
        return base

    def parse_primary(self) -> Expression:
        tok = self.current()

        if tok.type == "NUMBER":
            self.advance()
            return Number(int(tok.value))

        if tok.type == "FLOAT":
            self.advance()
            return Float(float(tok.value))

        if tok.type == "IDENT":
            self.advance()
            if self.current().type == "LPAREN":
                return FunctionCall(str(tok.value), self.parse_arguments())
            return Variable(str(tok.value))

        if tok.type == "LPAREN":
            self.advance()
            expr = self.parse_expression()
            self.expect("RPAREN")
            return expr

        raise BasicSyntaxError(
            f"Unexpected token in expression: {tok.type} {tok.value!r}", tok
        )

    def parse_arguments(self) -> tuple[Expression, ...]:
        """Parse `( [expr ("," expr)*] )` after a function name."""
        self.expect("LPAREN")
        args: list[Expression] = []
        if self.current().type != "RPAREN":
            args.append(self.parse_expression())
            while self.current().type == "COMMA":
                self.advance()
                args.append(self.parse_expression())
        self.expect("RPAREN")
        return tuple(args)


__all__ = ["Parser"]
