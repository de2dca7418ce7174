from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from basic2c.basic_ast import End, Let, Number, Statement
from basic2c.basic_errors import BasicSyntaxError, LexicalError
from basic2c.basic_lexer import tokenize
from basic2c.basic_parser import Parser
from basic2c.basic_transpile import Emitter, Transpiler, translate
from basic2c.emitters.c_emitter import CEmitter


class DummyEmitter:
    def __init__(self, dialect: str = "float") -> None:
        self.dialect = dialect
        self.calls: list[tuple[str, Any]] = []

    def collect_variables(self, statements: list[Statement]) -> set[str]:
        self.calls.append(("collect", list(statements)))
        return set()

    def emit_statement(self, stmt: Statement) -> None:
        self.calls.append(("emit", stmt))

    def get_output(self) -> str:
        return "result"


def test_transpiler_selects_c() -> None:
    transpiler = Transpiler("C")
    assert isinstance(transpiler.emitter, CEmitter)


def test_transpiler_passes_dialect() -> None:
    transpiler = Transpiler("c", "integer")
    assert isinstance(transpiler.emitter, CEmitter)
    assert transpiler.emitter.dialect.c_type == "long long"


def test_transpiler_invalid_target_raises() -> None:
    with pytest.raises(ValueError, match="Unknown transpilation target"):
        Transpiler("py")


def test_transpiler_invalid_dialect_raises() -> None:
    with pytest.raises(ValueError, match="Unknown dialect"):
        Transpiler("c", "bcd")


def test_transpiler_rejects_non_statements() -> None:
    with pytest.raises(TypeError, match="Statement"):
        Transpiler().transpile([Let("X", Number(1))])  # type: ignore[list-item]


def test_transpiler_collects_before_emitting(monkeypatch: pytest.MonkeyPatch) -> None:
    dummy = DummyEmitter()
    monkeypatch.setattr("basic2c.basic_transpile.CEmitter", lambda dialect: dummy)
    program = [Statement(Let("X", Number(1)), 10), Statement(End())]
    assert Transpiler().transpile(program) == "result"
    assert dummy.calls == [
        ("collect", program),
        ("emit", program[0]),
        ("emit", program[1]),
    ]


def test_emitter_protocol_conformance() -> None:
    def accepts_emitter(e: Emitter) -> str:
        return e.get_output()

    assert accepts_emitter(DummyEmitter()) == "result"


# Full pipeline


def test_translate_label_and_jump() -> None:
    assert translate("10 LET X = 1\n20 GOTO 10") == (
        "#include <stdio.h>\n"
        "#include <stdlib.h>\n"
        "#include <math.h>\n"
        "#include <time.h>\n"
        "\n"
        "int main() {\n"
        "    srand(time(NULL));\n"
        "    double X;\n"
        "\n"
        "line10:\n"
        "    X = 1.0;\n"
        "line20:\n"
        "    goto line10;\n"
        "\n"
        "    return 0;\n"
        "}\n"
    )


def test_translate_precedence() -> None:
    code = translate("LET Y = 2 + 3 * 4 ^ 2")
    assert "    Y = (2.0 + (3.0 * pow(4.0, 2.0)));\n" in code


def test_translate_print_separators() -> None:
    suppressed = translate('PRINT "A", "B";')
    assert 'printf("%s", "B");\n' in suppressed
    assert 'printf("\\n")' not in suppressed

    default = translate('PRINT "A", "B"')
    assert 'printf("%s", "B");\n    printf("\\n");\n' in default


def test_translate_reversed_for_bounds_is_not_special_cased() -> None:
    code = translate("FOR I = 5 TO 1\nPRINT I\nNEXT I")
    assert "    for (I = 5.0; I <= 1.0; I += 1.0) {\n" in code


def test_translate_conditional_goto() -> None:
    code = translate("10 INPUT N\n20 IF N >= 10 THEN 50\n30 PRINT N\n50 END")
    assert "    double N;\n" in code
    assert (
        "line20:\n"
        "    if (N >= 10.0) {\n"
        "        goto line50;\n"
        "    }\n"
    ) in code
    assert "line50:\n    return 0;\n" in code


def test_translate_duplicate_labels_are_kept() -> None:
    code = translate("10 PRINT 1\n10 PRINT 2")
    assert code.count("line10:\n") == 2


def test_translate_rnd_renders_as_call() -> None:
    code = translate("LET R = RND(1) * 10")
    assert "    R = (((double)rand() / (double)RAND_MAX) * 10.0);\n" in code


def test_translate_integer_dialect() -> None:
    code = translate("LET X = 7 / 2\nPRINT X", dialect="integer")
    assert "    long long X;\n" in code
    assert "    X = (7 / 2);\n" in code
    assert '    printf("%lld ", (long long)X);\n' in code


def test_translate_comment_only_program() -> None:
    code = translate("10 REM nothing to see\n")
    assert "line10: ;\n" in code
    assert "double" not in code


def test_translate_propagates_lexical_error() -> None:
    with pytest.raises(LexicalError):
        translate("10 PRINT ~")


def test_translate_propagates_syntax_error() -> None:
    with pytest.raises(BasicSyntaxError):
        translate("10 GOTO")


def test_translate_unterminated_string_boundaries() -> None:
    code = translate('10 PRINT "open')
    assert 'printf("%s", "open");' in code

    with pytest.raises(BasicSyntaxError):
        translate('10 FOR I = 1 TO 3\n20 PRINT "open\n30 NEXT I')


SAMPLE_PROGRAM = """\
10 REM Sum of squares
20 LET S = 0
30 FOR I = 1 TO 10 STEP 1
40 LET S = S + I ^ 2
50 NEXT I
60 IF S <> 385 THEN 90
70 PRINT "sum:"; S
80 GOTO 100
90 PRINT "wrong"
100 END
"""


def test_translate_sample_program() -> None:
    code = translate(SAMPLE_PROGRAM)
    assert "    double I, S;\n" in code
    assert (
        "line30:\n"
        "    for (I = 1.0; I <= 10.0; I += 1.0) {\n"
        "line40:\n"
        "        S = (S + pow(I, 2.0));\n"
        "line50: ;\n"
        "    }\n"
    ) in code
    assert '    printf("%s", "sum:");\n    printf("%g ", S);\n' in code


@given(
    st.lists(
        st.sampled_from(
            [
                "LET A = 1 + 2 * 3",
                'PRINT "X"; A,',
                "INPUT B",
                "FOR I = 1 TO A STEP 2\nPRINT I\nNEXT",
                "IF A < B THEN 10",
                "GOTO 10",
                "REM hi",
                "LET C = SQR(A) ^ 2 ^ 0.5",
                "END",
            ]
        ),
        max_size=8,
    )
)  # type: ignore[misc]
def test_translate_is_deterministic(lines: list[str]) -> None:
    source = "\n".join(f"{10 * (n + 1)} {line}" for n, line in enumerate(lines))
    assert translate(source) == translate(source)


def test_transpiler_reuse_starts_fresh() -> None:
    program = Parser(tokenize("10 LET X = 1\n20 PRINT X")).parse()
    transpiler = Transpiler()
    first = transpiler.transpile(program)
    assert transpiler.transpile(program) == first
    assert first.count("    X = 1.0;\n") == 1


def test_translate_long_sum() -> None:
    code = translate("LET X = " + " + ".join(["1"] * 5000))
    assert f"    X = {'(' * 4999}1.0{' + 1.0)' * 4999};\n" in code
