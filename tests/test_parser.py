import io

import pytest

from translator import (
    Emitter, ParseError, Parser, Scanner, TokenOverflowError, compile_source, translate,
)

ASSIGN_X = "LOAD 10\nADD 5\nSTORE x\n----------------\n"
PRINT_X = "PUSH x\nCALL PRINT\n----------------\n"
PRINT_A = "PUSH a\nCALL PRINT\n----------------\n"


def run(source, **kw):
    out = io.StringIO()
    translate(source, out=out, **kw)
    return out.getvalue()


def test_assignment():
    assert run("x = 10 + 5;\n") == ASSIGN_X


def test_print():
    assert run("print x;\n") == PRINT_X


def test_statements_in_source_order():
    assert run("y = 1 + 1; print y;\n") == (
        "LOAD 1\nADD 1\nSTORE y\n----------------\n"
        "PUSH y\nCALL PRINT\n----------------\n"
    )


def test_missing_operand_is_fatal():
    out = io.StringIO()
    with pytest.raises(ParseError) as exc:
        translate("x = ;\n", out=out)
    assert exc.value.token.value == ';'
    assert exc.value.msg == "Unexpected token ';'"
    assert out.getvalue() == ""


def test_unknown_tokens_are_skipped():
    assert run("$\n") == ""
    assert run("$ x = 10 + 5; 42 print x;") == ASSIGN_X + PRINT_X


def test_strict_mode_rejects_stray_tokens():
    with pytest.raises(ParseError) as exc:
        run("$\n", strict=True)
    assert exc.value.token.type == 'UNKNOWN'


def test_earlier_output_is_not_retracted():
    out = io.StringIO()
    with pytest.raises(ParseError):
        translate("print x; print 5;", out=out)
    assert out.getvalue() == PRINT_X


def test_no_further_statements_after_error():
    out = io.StringIO()
    with pytest.raises(ParseError):
        translate("x = 1 2; print x;", out=out)
    assert out.getvalue() == ""


def test_truncated_statement_fails_at_eof():
    with pytest.raises(ParseError) as exc:
        run("x = 1 +")
    assert exc.value.token.type == 'EOF'


def test_rerun_is_deterministic():
    src = "a = 2 + 3; print a; b = 4 + 4;"
    assert run(src) == run(src)


def test_compile_source_success():
    result = compile_source("x = 10 + 5; print x;")
    assert result['success']
    assert result['errors'] == []
    assert result['asm'] == ASSIGN_X.splitlines() + PRINT_X.splitlines()
    assert result['tokens'][-1].type == 'EOF'


def test_compile_source_reports_syntax_error():
    result = compile_source("print x;\nx = ;")
    assert not result['success']
    assert result['errors'] == ["Syntax error (line 2): Unexpected token ';'"]
    assert result['asm'] == PRINT_X.splitlines()
    assert result['tokens'][-1].value == ';'


def test_compile_source_reports_overflow():
    result = compile_source("abcdef = 1 + 1;", max_len=4)
    assert not result['success']
    assert len(result['errors']) == 1
    assert result['errors'][0].startswith("Lexical error (line 1):")
    assert 'abcdef' in result['errors'][0]


def test_translate_overflow_propagates():
    with pytest.raises(TokenOverflowError):
        run("x = 100000 + 1;", max_len=5)


def test_reset_scanner_reproduces_output():
    scanner = Scanner("a = 2 + 3; $ print a;")
    first, second = io.StringIO(), io.StringIO()

    parser = Parser(scanner, Emitter(first))
    parser.parse()
    first_tokens = list(parser.seen)

    scanner.reset()
    parser.emitter = Emitter(second)
    parser.parse()

    assert second.getvalue() == first.getvalue()
    assert first.getvalue() == "LOAD 2\nADD 3\nSTORE a\n----------------\n" + PRINT_A
    assert parser.seen == first_tokens
    assert len(parser.seen) == 11
