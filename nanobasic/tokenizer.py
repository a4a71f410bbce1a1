# -*- coding: utf-8 -*-
"""
NanoBASIC 토크나이저
lark 의 basic lexer 로 소스 텍스트를 토큰 시퀀스로 바꾼다.
파싱은 하지 않는다 (parser.py 의 재귀 하강 파서가 담당).
"""

import logging
from typing import List, NamedTuple, Union

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import TokenizeError

logger = logging.getLogger(__name__)

# -----------------------------
# 1) 렉서 문법 (터미널만 사용)
# -----------------------------
# start 규칙은 모든 터미널을 "사용"하게 만들기 위한 것. lark 는 안 쓰인 터미널을 버린다.
GRAMMAR = r"""
start: (NUMBER | STRING | IDENT
       | PRINT | LET | IF | THEN | GOTO | GOSUB | RETURN
       | PLUS | MINUS | STAR | SLASH
       | NOTEQUAL | LESSEQUAL | GREATEREQUAL | EQUAL | LESS | GREATER
       | LPAR | RPAR | COMMA)*

// ----- keywords (IDENT 와 겹치면 lark 가 통째로 일치할 때만 키워드로 바꿈) -----
PRINT: "PRINT"
LET: "LET"
IF: "IF"
THEN: "THEN"
GOTO: "GOTO"
GOSUB: "GOSUB"
RETURN: "RETURN"

// ----- literals -----
NUMBER: /[0-9]+/
STRING: /"[^"\n]*"/
IDENT: /[A-Za-z_][A-Za-z0-9_]*/

// ----- operators: 두 글자 비교연산자가 먼저 -----
NOTEQUAL: "<>" | "><"
LESSEQUAL: "<="
GREATEREQUAL: ">="
EQUAL: "="
LESS: "<"
GREATER: ">"
PLUS: "+"
MINUS: "-"
STAR: "*"
SLASH: "/"

LPAR: "("
RPAR: ")"
COMMA: ","

// REM 은 줄 끝까지 주석, 토큰 없음 (REMAINDER 같은 변수명은 IDENT)
COMMENT.2: /REM\b[^\n]*/

%import common.WS
%ignore WS
%ignore COMMENT
"""

EOF = "EOF"

_lark = Lark(GRAMMAR, parser="lalr", start="start", lexer="basic")


class Token(NamedTuple):
    kind: str
    text: str
    start: int      # half-open [start, end) 문자 오프셋
    end: int
    line: int = 0
    column: int = 0

    @property
    def value(self) -> Union[int, str]:
        if self.kind == "NUMBER":
            return int(self.text)
        if self.kind == "STRING":
            return self.text[1:-1]
        return self.text

    @property
    def span(self):
        return (self.start, self.end)

    def __repr__(self):
        if self.kind in ("NUMBER", "STRING", "IDENT"):
            return f"{self.kind}({self.text}) @{self.line}:{self.column}"
        return f"{self.kind} @{self.line}:{self.column}"


def _eof_token(source: str) -> Token:
    line = source.count("\n") + 1
    column = len(source) - (source.rfind("\n") + 1) + 1
    return Token(EOF, "", len(source), len(source), line, column)


def tokenize(source: str) -> List[Token]:
    """Turn BASIC source text into a token list ending with an EOF sentinel."""
    tokens: List[Token] = []
    try:
        for tok in _lark.lex(source):
            tokens.append(Token(tok.type, tok.value, tok.start_pos, tok.end_pos,
                                tok.line, tok.column))
    except UnexpectedCharacters as e:
        raise TokenizeError(e.char, e.pos_in_stream, e.line, e.column) from None
    tokens.append(_eof_token(source))
    logger.debug("tokenized %d characters into %d tokens", len(source), len(tokens))
    return tokens
