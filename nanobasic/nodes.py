# -*- coding: utf-8 -*-
"""
AST 노드 정의 (데이터만, 동작 없음)

Expression  : NumberLiteral | VarName | UnaryOperation | BinaryOperation
Statement   : PrintStatement | VarSet | IfStatement | GoToCall | GoSubCall | ReturnStatement
BooleanExpression 는 둘 중 어디에도 속하지 않는다.

span 은 노드가 덮는 소스 문자 범위 [start, end). 진단용.
"""

from dataclasses import dataclass
from typing import Tuple, Union

Span = Tuple[int, int]


# -----------------------------
# 1) 산술식
# -----------------------------
@dataclass(frozen=True)
class NumberLiteral:
    value: int
    span: Span


@dataclass(frozen=True)
class VarName:
    name: str
    span: Span


@dataclass(frozen=True)
class UnaryOperation:
    op: str                 # 현재는 '-' 만
    operand: "Expression"
    span: Span


@dataclass(frozen=True)
class BinaryOperation:
    op: str                 # '+', '-', '*', '/'
    left: "Expression"
    right: "Expression"
    span: Span


Expression = Union[NumberLiteral, VarName, UnaryOperation, BinaryOperation]


# -----------------------------
# 2) 비교식 (IF 조건 전용)
# -----------------------------
@dataclass(frozen=True)
class BooleanExpression:
    op: str                 # '=', '<>', '<', '<=', '>', '>='
    left: Expression
    right: Expression
    span: Span


# -----------------------------
# 3) 문장 (모두 선언된 BASIC 라인번호를 가짐)
# -----------------------------
Printable = Union[str, Expression]


@dataclass(frozen=True)
class PrintStatement:
    printables: Tuple[Printable, ...]
    line: int
    span: Span


@dataclass(frozen=True)
class VarSet:
    name: str
    value: Expression
    line: int
    span: Span


@dataclass(frozen=True)
class IfStatement:
    condition: BooleanExpression
    then: "Statement"
    line: int
    span: Span


@dataclass(frozen=True)
class GoToCall:
    target: int
    line: int
    span: Span


@dataclass(frozen=True)
class GoSubCall:
    target: int
    line: int
    span: Span


@dataclass(frozen=True)
class ReturnStatement:
    line: int
    span: Span


Statement = Union[PrintStatement, VarSet, IfStatement, GoToCall, GoSubCall, ReturnStatement]
