#!/usr/bin/env python3
"""
translator.py
Single-pass translator for a tiny assignment/print language
(scanner → LL(1) recognizer → instruction emitter), no AST in between.

    x = 10 + 5;     ->  LOAD 10 / ADD 5 / STORE x
    print x;        ->  PUSH x / CALL PRINT
"""

import io
import logging
import re
import sys
from collections import namedtuple

LOG = logging.getLogger("mini_translator")

MAX_TOKEN_LEN = 99
SEPARATOR = "-" * 16

# =====================================================
# ERRORS
# =====================================================
class TokenOverflowError(OverflowError):
    def __init__(self, run, lineno=None, max_len=MAX_TOKEN_LEN):
        self.run = run
        self.lineno = lineno
        self.max_len = max_len
        super().__init__(f"token '{run}' is {len(run)} characters long (limit {max_len})")


class ParseError(SyntaxError):
    def __init__(self, token, msg=None):
        self.token = token
        super().__init__(msg or f"Unexpected token '{token.value}'")
        self.lineno = token.lineno


def format_error(phase, msg, lineno=None):
    if lineno is not None:
        return f"{phase} error (line {lineno}): {msg}"
    return f"{phase} error: {msg}"

# =====================================================
# SCANNER
# =====================================================
Token = namedtuple('Token', ['type', 'value', 'lineno'])

class Scanner:
    """Lazy tokenizer over one immutable source buffer.

    Unrecognized characters come back as UNKNOWN tokens; the only thing
    that raises is a run longer than ``max_len``.
    """
    SYMBOLS = {'=': 'EQUALS', '+': 'PLUS', ';': 'SEMI'}
    KEYWORDS = {'print': 'PRINT'}

    ws_re = re.compile(r'[ \t\n\r\v\f]+')
    word_re = re.compile(r'[A-Za-z][A-Za-z0-9]*')
    int_re = re.compile(r'[0-9]+')

    def __init__(self, source, max_len=MAX_TOKEN_LEN):
        self.max_len = max_len
        self.reset(source)

    def reset(self, source=None):
        if source is not None:
            self.source = source
        self.pos = 0
        self.lineno = 1

    def __iter__(self):
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == 'EOF':
                return

    def _capture(self, mo):
        run = mo.group()
        if len(run) > self.max_len:
            raise TokenOverflowError(run, self.lineno, self.max_len)
        self.pos = mo.end()
        return run

    def next_token(self):
        ws = self.ws_re.match(self.source, self.pos)
        if ws:
            self.lineno += ws.group().count('\n')
            self.pos = ws.end()

        if self.pos >= len(self.source):
            return Token('EOF', '', self.lineno)

        mo = self.word_re.match(self.source, self.pos)
        if mo:
            val = self._capture(mo)
            return Token(self.KEYWORDS.get(val, 'ID'), val, self.lineno)

        mo = self.int_re.match(self.source, self.pos)
        if mo:
            return Token('INT', self._capture(mo), self.lineno)

        # always consume exactly one character here so garbage can't stall us
        ch = self.source[self.pos]
        self.pos += 1
        return Token(self.SYMBOLS.get(ch, 'UNKNOWN'), ch, self.lineno)


def tokenize(source, max_len=MAX_TOKEN_LEN):
    return list(Scanner(source, max_len))

# =====================================================
# EMITTER
# =====================================================
class Emitter:
    def __init__(self, out=None):
        self.out = out if out is not None else sys.stdout

    def _write(self, *lines):
        for line in lines:
            self.out.write(line + "\n")

    def emit_assignment(self, var, op1, op2):
        self._write(f"LOAD {op1}", f"ADD {op2}", f"STORE {var}", SEPARATOR)

    def emit_print(self, var):
        self._write(f"PUSH {var}", "CALL PRINT", SEPARATOR)

# =====================================================
# PARSER (fused with code generation)
# =====================================================
class Parser:
    """
    Program         := Statement* EOF
    Statement       := Assign | Print | <skip one token>
    Assign          := ID '=' INT '+' INT ';'
    Print           := 'print' ID ';'

    With ``strict=True`` a token that can't start a statement is a
    ParseError instead of being skipped.
    """

    def __init__(self, scanner, emitter, strict=False):
        self.scanner = scanner
        self.emitter = emitter
        self.strict = strict
        self.current = None
        self.seen = []

    def advance(self):
        self.current = self.scanner.next_token()
        self.seen.append(self.current)
        return self.current

    def expect(self, ttype):
        tok = self.current
        if tok.type != ttype:
            raise ParseError(tok)
        self.advance()
        return tok

    def parse(self):
        self.seen = []
        self.advance()
        while self.current.type != 'EOF':
            if self.current.type == 'ID':
                self.assignment()
            elif self.current.type == 'PRINT':
                self.print_statement()
            elif self.strict:
                raise ParseError(self.current)
            else:
                LOG.debug("skipping %s %r on line %s", self.current.type,
                          self.current.value, self.current.lineno)
                self.advance()

    def assignment(self):
        var = self.expect('ID').value
        self.expect('EQUALS')
        op1 = self.expect('INT').value
        self.expect('PLUS')
        op2 = self.expect('INT').value
        self.expect('SEMI')
        LOG.debug("assign %s = %s + %s", var, op1, op2)
        self.emitter.emit_assignment(var, op1, op2)

    def print_statement(self):
        self.advance()
        var = self.expect('ID').value
        self.expect('SEMI')
        LOG.debug("print %s", var)
        self.emitter.emit_print(var)

# =====================================================
# DRIVER
# =====================================================
def translate(source, out=None, strict=False, max_len=MAX_TOKEN_LEN):
    """Run one session, writing instructions to ``out`` as statements complete.

    Raises ParseError or TokenOverflowError; anything already written stays.
    """
    parser = Parser(Scanner(source, max_len), Emitter(out), strict=strict)
    parser.parse()
    return parser


def compile_source(code, strict=False, max_len=MAX_TOKEN_LEN):
    result = {
        'tokens': [],
        'asm': [],
        'errors': [],
        'success': False,
    }

    buf = io.StringIO()
    parser = Parser(Scanner(code, max_len), Emitter(buf), strict=strict)
    try:
        parser.parse()
    except ParseError as e:
        LOG.warning("syntax error: %s", e.msg)
        result['errors'].append(format_error("Syntax", e.msg, e.lineno))
    except TokenOverflowError as e:
        LOG.warning("token overflow: %s", e)
        result['errors'].append(format_error("Lexical", str(e), e.lineno))
    else:
        result['success'] = True

    result['tokens'] = parser.seen
    result['asm'] = buf.getvalue().splitlines()
    return result
