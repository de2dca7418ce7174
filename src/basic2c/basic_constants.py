"""
Token vocabulary and lookup tables shared by the basic2c lexer, parser and emitters.

Tables:
    keyword_hashmap: Upper-cased keyword spelling -> canonical token type.
    symbol_hashmap: Operator/punctuation spelling -> canonical token type.
    comparison_tokens: Token types accepted as the comparison in an IF statement.
    separator_tokens: Token types that separate PRINT items.
    intrinsic_functions: Upper-cased BASIC intrinsic name -> C template.
"""

literal_tokens: tuple[str, ...] = ("NUMBER", "FLOAT", "IDENT", "STRING")

arith_tokens: tuple[str, ...] = ("PLUS", "SUB", "MULT", "DIV", "POW")

comparison_tokens: tuple[str, ...] = ("EQ", "NE", "LT", "LE", "GT", "GE")

punctuation_tokens: tuple[str, ...] = (
    "COMMA",
    "SEMICOLON",
    "LPAREN",
    "RPAREN",
    "NEWLINE",
    "EOF",
)

keyword_tokens: tuple[str, ...] = (
    "LET",
    "PRINT",
    "FOR",
    "TO",
    "STEP",
    "NEXT",
    "IF",
    "THEN",
    "ELSE",
    "GOTO",
    "INPUT",
    "REM",
    "END",
)

TOKEN_TYPES: frozenset[str] = frozenset(
    literal_tokens
    + arith_tokens
    + comparison_tokens
    + punctuation_tokens
    + keyword_tokens
)

keyword_hashmap: dict[str, str] = {
    "LET": "LET",
    "SET": "LET",
    "PRINT": "PRINT",
    "FOR": "FOR",
    "TO": "TO",
    "STEP": "STEP",
    "NEXT": "NEXT",
    "ENDFOR": "NEXT",
    "IF": "IF",
    "THEN": "THEN",
    "ELSE": "ELSE",
    "GOTO": "GOTO",
    "INPUT": "INPUT",
    "REM": "REM",
    "END": "END",
}

# Two-character spellings must be tried before their one-character prefixes.
symbol_hashmap: dict[str, str] = {
    "<=": "LE",
    "<>": "NE",
    ">=": "GE",
    "<": "LT",
    ">": "GT",
    "=": "EQ",
    "+": "PLUS",
    "-": "SUB",
    "*": "MULT",
    "/": "DIV",
    "^": "POW",
    ",": "COMMA",
    ";": "SEMICOLON",
    "(": "LPAREN",
    ")": "RPAREN",
}

separator_tokens: tuple[str, ...] = ("COMMA", "SEMICOLON")

line_end_tokens: tuple[str, ...] = ("NEWLINE", "EOF")

# "{args}" is replaced by the comma-joined rendered arguments.
intrinsic_functions: dict[str, str] = {
    "INT": "floor({args})",
    "SQR": "sqrt({args})",
    "EXP": "exp({args})",
    "ABS": "fabs({args})",
    "RND": "((double)rand() / (double)RAND_MAX)",
    "SIN": "sin({args})",
    "COS": "cos({args})",
    "TAN": "tan({args})",
    "ATN": "atan({args})",
    "LOG": "log({args})",
}

__all__ = [
    "TOKEN_TYPES",
    "arith_tokens",
    "comparison_tokens",
    "intrinsic_functions",
    "keyword_hashmap",
    "keyword_tokens",
    "line_end_tokens",
    "literal_tokens",
    "punctuation_tokens",
    "separator_tokens",
    "symbol_hashmap",
]
