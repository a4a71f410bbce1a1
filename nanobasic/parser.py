# -*- coding: utf-8 -*-
"""
NanoBASIC 재귀 하강 파서

문법 규칙 하나 = 메서드 하나. 토큰 하나 lookahead, 백트래킹 없음.
첫 번째 에러에서 ParseError 로 전체 파싱 중단 (복구 없음).

    line       := NUMBER statement?
    statement  := PRINT printable (',' printable)*
                | LET IDENT '=' expression
                | IF booleanExpression THEN statement
                | GOTO NUMBER | GOSUB NUMBER
                | RETURN
    expression := term (('+'|'-') term)*
    term       := factor (('*'|'/') factor)*
    factor     := NUMBER | IDENT | '(' expression ')' | '-' factor
    booleanExpression := expression relop expression

소스의 줄바꿈은 토큰으로 남지 않으므로, 각 토큰의 line 값으로 문장의 끝을 판단한다.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional

from .errors import ParseError
from .nodes import (
    BinaryOperation,
    BooleanExpression,
    Expression,
    GoSubCall,
    GoToCall,
    IfStatement,
    NumberLiteral,
    PrintStatement,
    ReturnStatement,
    Statement,
    UnaryOperation,
    VarName,
    VarSet,
)
from .tokenizer import EOF, Token

logger = logging.getLogger(__name__)

ADD_OPS = {"PLUS": "+", "MINUS": "-"}
MUL_OPS = {"STAR": "*", "SLASH": "/"}
REL_OPS = {
    "EQUAL": "=",
    "NOTEQUAL": "<>",
    "LESS": "<",
    "LESSEQUAL": "<=",
    "GREATER": ">",
    "GREATEREQUAL": ">=",
}
FACTOR_START = ("NUMBER", "IDENT", "LPAR", "MINUS")


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.index = 0
        self._line: Optional[int] = None   # 지금 파싱 중인 문장의 소스 줄

    # -----------------------------
    # cursor
    # -----------------------------
    def _at(self, i: int) -> Token:
        if i < len(self.tokens):
            return self.tokens[i]
        if self.tokens:
            last = self.tokens[-1]
            return Token(EOF, "", last.end, last.end, last.line, last.column)
        return Token(EOF, "", 0, 0, 1, 1)

    @property
    def current(self) -> Token:
        return self._at(self.index)

    @property
    def lookahead(self) -> Token:
        return self._at(self.index + 1)

    def _advance(self) -> Token:
        tok = self.current
        self.index += 1
        return tok

    @property
    def at_end_of_line(self) -> bool:
        tok = self.current
        if tok.kind == EOF:
            return True
        return self._line is not None and tok.line != self._line

    def _check(self, *kinds: str) -> bool:
        return not self.at_end_of_line and self.current.kind in kinds

    def _expect(self, kind: str, explanation: str) -> Token:
        if not self._check(kind):
            raise ParseError(explanation, self.current)
        return self._advance()

    # -----------------------------
    # 산술식
    # -----------------------------
    def parse_factor(self) -> Expression:
        if self.at_end_of_line:
            raise ParseError("Unexpected end of line in expression", self.current)
        tok = self.current
        if tok.kind == "NUMBER":
            self._advance()
            return NumberLiteral(tok.value, tok.span)
        if tok.kind == "IDENT":
            self._advance()
            return VarName(tok.text, tok.span)
        if tok.kind == "LPAR":
            self._advance()
            expr = self.parse_expression()
            rpar = self._expect("RPAR", "Closing parenthesis ) missing")
            # 괄호까지 범위에 포함
            return replace(expr, span=(tok.start, rpar.end))
        if tok.kind == "MINUS":
            self._advance()
            operand = self.parse_factor()
            return UnaryOperation("-", operand, (tok.start, operand.span[1]))
        raise ParseError("Invalid factor for parsing", tok)

    def parse_term(self) -> Expression:
        left = self.parse_factor()
        while self._check(*MUL_OPS):
            op = MUL_OPS[self._advance().kind]
            right = self.parse_factor()
            left = BinaryOperation(op, left, right, (left.span[0], right.span[1]))
        return left

    def parse_expression(self) -> Expression:
        left = self.parse_term()
        while self._check(*ADD_OPS):
            op = ADD_OPS[self._advance().kind]
            right = self.parse_term()
            left = BinaryOperation(op, left, right, (left.span[0], right.span[1]))
        return left

    def parse_boolean_expression(self) -> BooleanExpression:
        left = self.parse_expression()
        if not self._check(*REL_OPS):
            raise ParseError("Expected a comparison operator (=, <>, <, <=, >, >=)", self.current)
        op = REL_OPS[self._advance().kind]
        right = self.parse_expression()
        return BooleanExpression(op, left, right, (left.span[0], right.span[1]))

    # -----------------------------
    # 문장
    # -----------------------------
    def parse_print(self, line: int) -> PrintStatement:
        start = self._advance()   # PRINT
        printables = []
        end = start.end
        while True:
            if self._check("STRING"):
                tok = self._advance()
                printables.append(tok.value)
                end = tok.end
            elif self._check(*FACTOR_START):
                expr = self.parse_expression()
                printables.append(expr)
                end = expr.span[1]
            elif printables:
                raise ParseError("Expected a string or expression after ','", self.current)
            else:
                break
            if not self._check("COMMA"):
                break
            self._advance()
        if not printables:
            raise ParseError(
                "Expect at least one expression or string to follow a PRINT statement",
                self.current,
            )
        return PrintStatement(tuple(printables), line, (start.start, end))

    def parse_let(self, line: int) -> VarSet:
        start = self._advance()   # LET
        name = self._expect("IDENT", "Expect a variable to follow a LET statement")
        self._expect("EQUAL", "Expect '=' after the variable in a LET statement")
        expr = self.parse_expression()
        return VarSet(name.text, expr, line, (start.start, expr.span[1]))

    def parse_if(self, line: int) -> IfStatement:
        start = self._advance()   # IF
        condition = self.parse_boolean_expression()
        self._expect("THEN", "Missing THEN in IF statement")
        then = self.parse_statement(line)
        if then is None:
            raise ParseError("Expect a statement to follow THEN", self.current)
        return IfStatement(condition, then, line, (start.start, then.span[1]))

    def _parse_jump_target(self, keyword: str) -> Token:
        return self._expect("NUMBER", f"Expect a line number to follow a {keyword} statement")

    def parse_goto(self, line: int) -> GoToCall:
        start = self._advance()
        target = self._parse_jump_target("GOTO")
        return GoToCall(target.value, line, (start.start, target.end))

    def parse_gosub(self, line: int) -> GoSubCall:
        start = self._advance()
        target = self._parse_jump_target("GOSUB")
        return GoSubCall(target.value, line, (start.start, target.end))

    def parse_statement(self, line: int) -> Optional[Statement]:
        if self.at_end_of_line:
            return None   # 라인번호만 있는 줄
        kind = self.current.kind
        if kind == "PRINT":
            return self.parse_print(line)
        if kind == "LET":
            return self.parse_let(line)
        if kind == "IF":
            return self.parse_if(line)
        if kind == "GOTO":
            return self.parse_goto(line)
        if kind == "GOSUB":
            return self.parse_gosub(line)
        if kind == "RETURN":
            tok = self._advance()
            return ReturnStatement(line, tok.span)
        raise ParseError("Unrecognized token at beginning of statement", self.current)

    def parse_line(self) -> Optional[Statement]:
        self._line = None
        number = self.current
        if number.kind != "NUMBER":
            raise ParseError("Expect every statement to be preceded by a line number", number)
        self._advance()
        self._line = number.line
        statement = self.parse_statement(number.value)
        if not self.at_end_of_line:
            raise ParseError("Expected end of line after statement", self.current)
        self._line = None
        return statement

    def parse_statement_list(self) -> List[Statement]:
        statements: List[Statement] = []
        declared: Dict[int, Token] = {}
        while self.current.kind != EOF:
            number = self.current
            statement = self.parse_line()
            if statement is None:
                continue
            if statement.line in declared:
                raise ParseError(f"Duplicate line number {statement.line}", number)
            declared[statement.line] = number
            statements.append(statement)
        logger.debug("parsed %d statements from %d tokens", len(statements), len(self.tokens))
        return statements


def parse(tokens: List[Token]) -> List[Statement]:
    """Parse a token list (from ``tokenize``) into the program's statement list."""
    parser = Parser(tokens)
    try:
        return parser.parse_statement_list()
    except RecursionError:
        raise ParseError("Expression nested too deeply", parser.current) from None
