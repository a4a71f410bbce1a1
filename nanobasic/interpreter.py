# -*- coding: utf-8 -*-
"""
NanoBASIC 인터프리터 (트리 워킹)

pc 는 문장 리스트의 인덱스 (BASIC 라인번호 아님).
GOTO/GOSUB 는 실행 전에 한 번 만들어 둔 라인번호 → 인덱스 표로 점프한다.
"""

import logging
from typing import Callable, Dict, List, Optional

from .errors import BasicRuntimeError
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

logger = logging.getLogger(__name__)

Sink = Callable[[str], object]


def build_line_index(statements: List[Statement]) -> Dict[int, int]:
    """Map each declared BASIC line number to its statement index."""
    index: Dict[int, int] = {}
    for i, stmt in enumerate(statements):
        if stmt.line in index:
            raise BasicRuntimeError(f"Duplicate line number {stmt.line}", stmt.line)
        index[stmt.line] = i
    return index


def _truncating_div(a: int, b: int) -> int:
    # 파이썬 // 는 내림이라 0 방향 절삭으로 맞춘다
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


class Interpreter:
    def __init__(self, statements: List[Statement], sink: Optional[Sink] = None,
                 trace: bool = False):
        self.statements = list(statements)
        self.sink = sink
        self.trace = trace
        self.line_index = build_line_index(self.statements)
        self._reset()

    def _reset(self):
        self.pc = 0
        self.variables: Dict[str, int] = {}
        self.call_stack: List[int] = []
        self.output: List[str] = []

    # -----------------------------
    # 평가
    # -----------------------------
    def evaluate(self, expr: Expression, line: int) -> int:
        if isinstance(expr, NumberLiteral):
            return expr.value
        if isinstance(expr, VarName):
            return self.variables.get(expr.name, 0)
        if isinstance(expr, UnaryOperation):
            if expr.op == "-":
                return -self.evaluate(expr.operand, line)
            raise BasicRuntimeError(f"Unknown unary operator {expr.op!r}", line)
        if isinstance(expr, BinaryOperation):
            left = self.evaluate(expr.left, line)
            right = self.evaluate(expr.right, line)
            if expr.op == "+":
                return left + right
            if expr.op == "-":
                return left - right
            if expr.op == "*":
                return left * right
            if expr.op == "/":
                if right == 0:
                    raise BasicRuntimeError("Division by zero", line)
                return _truncating_div(left, right)
            raise BasicRuntimeError(f"Unknown binary operator {expr.op!r}", line)
        raise TypeError(f"not an expression node: {expr!r}")

    def evaluate_boolean(self, cond: BooleanExpression, line: int) -> bool:
        left = self.evaluate(cond.left, line)
        right = self.evaluate(cond.right, line)
        op = cond.op
        if op == "=":
            return left == right
        if op == "<>":
            return left != right
        if op == "<":
            return left < right
        if op == "<=":
            return left <= right
        if op == ">":
            return left > right
        if op == ">=":
            return left >= right
        raise BasicRuntimeError(f"Unknown comparison operator {op!r}", line)

    # -----------------------------
    # 실행
    # -----------------------------
    def _emit(self, text: str):
        self.output.append(text)
        if self.sink is not None:
            self.sink(text)

    def _jump(self, target: int, line: int) -> int:
        if target not in self.line_index:
            raise BasicRuntimeError(f"No statement at line {target} to jump to", line)
        return self.line_index[target]

    def execute(self, stmt: Statement) -> int:
        """Run one statement at the current pc and return the next pc."""
        if isinstance(stmt, PrintStatement):
            parts = []
            for item in stmt.printables:
                if isinstance(item, str):
                    parts.append(item)
                else:
                    parts.append(str(self.evaluate(item, stmt.line)))
            self._emit("".join(parts) + "\n")
            return self.pc + 1
        if isinstance(stmt, VarSet):
            self.variables[stmt.name] = self.evaluate(stmt.value, stmt.line)
            return self.pc + 1
        if isinstance(stmt, GoToCall):
            return self._jump(stmt.target, stmt.line)
        if isinstance(stmt, GoSubCall):
            nxt = self._jump(stmt.target, stmt.line)
            self.call_stack.append(self.pc + 1)
            logger.debug("GOSUB %d from line %d", stmt.target, stmt.line)
            return nxt
        if isinstance(stmt, ReturnStatement):
            if not self.call_stack:
                raise BasicRuntimeError("RETURN without GOSUB", stmt.line)
            return self.call_stack.pop()
        if isinstance(stmt, IfStatement):
            if self.evaluate_boolean(stmt.condition, stmt.line):
                return self.execute(stmt.then)
            return self.pc + 1
        raise TypeError(f"not a statement node: {stmt!r}")

    def run(self) -> List[str]:
        self._reset()
        while 0 <= self.pc < len(self.statements):
            stmt = self.statements[self.pc]
            if self.trace:
                logger.debug("pc=%d line=%d %s", self.pc, stmt.line, type(stmt).__name__)
            try:
                self.pc = self.execute(stmt)
            except RecursionError:
                raise BasicRuntimeError("Expression nested too deeply", stmt.line) from None
        return self.output


def run(statements: List[Statement], sink: Optional[Sink] = None) -> List[str]:
    """Execute a parsed program and return its output lines."""
    return Interpreter(statements, sink=sink).run()
