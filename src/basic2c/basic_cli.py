"""
basic2c CLI Entrypoint.

This module provides the command-line driver around the translation pipeline.

Features:
    - Read source from a file or, with `-s`, from an inline string.
    - Lex, parse, and translate to C in the selected numeric dialect.
    - Print the C code to stdout, or write it to an output file.
    - Dump the token list (`--tokens`) or the AST as JSON (`--ast`) instead.

Example usage:
    basic2c program.bas
    basic2c program.bas program.c
    basic2c -s "10 PRINT 1 + 2"
    basic2c program.bas --dialect integer --ast

Functions:
    run_basic2c(...) -> str:
        Executes the pipeline and writes or prints the result.

    main(argv) -> int:
        Parses CLI arguments, runs the pipeline, and maps failures to exit status 1.
"""

import argparse
import json
import logging
import sys

from basic2c.basic_errors import TranslationError
from basic2c.basic_lexer import tokenize
from basic2c.basic_parser import Parser
from basic2c.basic_transpile import Transpiler
from basic2c.emitters.c_emitter import DIALECTS

logger = logging.getLogger(__name__)


def run_basic2c(
    source: str,
    out: str | None = None,
    is_string: bool = False,
    dialect: str = "float",
    dump: str | None = None,
) -> str:
    """
    Run the basic2c pipeline: lex, parse, translate, then print or write output.

    Args:
        source (str): Path to a BASIC source file, or raw code when `is_string` is set.
        out (str | None): Path to write the result to. If None, prints to stdout.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        dialect (str): Numeric dialect of the generated C ("float" or "integer").
        dump (str | None): "tokens" or "ast" to output that phase instead of C.

    Returns:
        str: The text that was printed or written.

    Raises:
        OSError: If the source cannot be read or the output cannot be written.
        UnicodeDecodeError: If the source file is not valid UTF-8.
        TranslationError: On the first lexical or syntax error.
    """
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    tokens = tokenize(source)
    if dump == "tokens":
        result = "\n".join(repr(tok) for tok in tokens) + "\n"
    else:
        ast = Parser(tokens).parse()
        if dump == "ast":
            result = json.dumps([stmt.to_dict() for stmt in ast], indent=2) + "\n"
        else:
            result = Transpiler("c", dialect).transpile(ast)

    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(result)
        print(f"Compiled successfully! Output written to '{out}'")
    else:
        sys.stdout.write(result)
    return result


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="basic2c", description="Translate a BASIC program into C."
    )
    parser.add_argument("source", help="Input file, or raw source with -s")
    parser.add_argument(
        "output", nargs="?", help="Output file (default: standard output)"
    )
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-d",
        "--dialect",
        choices=sorted(DIALECTS),
        default="float",
        help="Numeric dialect of the generated C (default: float)",
    )
    dump = parser.add_mutually_exclusive_group()
    dump.add_argument(
        "--tokens",
        dest="dump",
        action="store_const",
        const="tokens",
        help="Print the token list instead of C",
    )
    dump.add_argument(
        "--ast",
        dest="dump",
        action="store_const",
        const="ast",
        help="Print the AST as JSON instead of C",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log pipeline progress to stderr"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the basic2c CLI.

    Returns 0 on success. I/O failures, undecodable input and translation
    errors print a message to stderr and return 1. Usage errors exit with
    argparse's status 2.
    """
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        run_basic2c(
            source=args.source,
            out=args.output,
            is_string=args.string,
            dialect=args.dialect,
            dump=args.dump,
        )
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except TranslationError as e:
        logger.debug("Translation failed: %s", e.to_dict())
        print(f"{e.kind.capitalize()} error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
