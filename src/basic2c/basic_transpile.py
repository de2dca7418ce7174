"""
Provides the `Transpiler` class and emitter interface for converting basic2c ASTs into code.

Classes and Features:
    - Emitter (Protocol): Interface for all backend emitters.
    - CEmitter: Concrete emitter that translates the AST to a C translation unit.
    - Transpiler: Selects an emitter for the requested target, runs its
      variable-collection pass, then dispatches each statement to `emit_statement`.
    - translate(): Convenience function running lexer, parser and transpiler.

Example:
    >>> print(translate('10 PRINT "HI"'))

Raises:
    ValueError: If the target language or dialect is not supported.
    TypeError: If the AST contains something other than `Statement` nodes.
    TranslationError: From `translate()`, on the first lexical or syntax error.
"""

import logging
from typing import Protocol

from basic2c.basic_ast import Statement
from basic2c.basic_lexer import tokenize
from basic2c.basic_parser import Parser
from basic2c.emitters.c_emitter import CEmitter

logger = logging.getLogger(__name__)


class Emitter(Protocol):  # pragma: no cover
    """Protocol for all basic2c emitters.

    Methods:
        collect_variables(statements): First pass over the whole program.
        emit_statement(stmt): Emits one top-level statement.
        get_output(): Returns the complete emitted code as a string.
    """

    def collect_variables(self, statements: list[Statement]) -> set[str]: ...

    def emit_statement(self, stmt: Statement) -> None: ...

    def get_output(self) -> str: ...


class Transpiler:
    """Dispatches basic2c statements to the emitter of the selected target.

    Each call to `transpile()` runs on a fresh emitter, so one Transpiler can
    translate any number of programs.

    Attributes:
        emitter_class (type): Emitter class for the output target.
        dialect (str): Numeric dialect passed to every new emitter.
        emitter (Emitter): The emitter used by the most recent translation.
    """

    def __init__(self, target: str = "c", dialect: str = "float") -> None:
        """Initializes the transpiler with the desired output target.

        Args:
            target: The desired output language (only "c").
            dialect: Numeric dialect passed to the emitter ("float" or "integer").

        Raises:
            ValueError: If the target or dialect is not supported.
        """
        emitters = {
            "c": CEmitter,
        }
        target = target.lower()
        if target not in emitters:
            raise ValueError(f"Unknown transpilation target: {target!r}")
        self.emitter_class = emitters[target]
        self.dialect = dialect
        self.emitter: Emitter = self.emitter_class(dialect)

    def transpile(self, ast: list[Statement]) -> str:
        """Transpiles a list of statements into source code for the selected target.

        Raises:
            TypeError: If any element in the AST list is not a Statement.
        """
        if not all(isinstance(stmt, Statement) for stmt in ast):
            raise TypeError("All items in AST must be Statement instances.")
        self.emitter = self.emitter_class(self.dialect)
        self.emitter.collect_variables(ast)
        for stmt in ast:
            self.emitter.emit_statement(stmt)
        return self.emitter.get_output()


def translate(source: str, dialect: str = "float", target: str = "c") -> str:
    """Runs the full pipeline (lex, parse, transpile) over a source string."""
    tokens = tokenize(source)
    ast = Parser(tokens).parse()
    code = Transpiler(target, dialect).transpile(ast)
    logger.debug("Generated %d lines of %s", code.count("\n"), target)
    return code


__all__ = ["Emitter", "Transpiler", "translate"]
