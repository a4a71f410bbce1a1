# -*- coding: utf-8 -*-
"""
NanoBASIC 에러 타입
각 단계(토크나이즈 / 파싱 / 실행)마다 치명적 에러 하나씩. 복구 없음.
"""

from typing import Optional


class BasicError(Exception):
    """Base class of every error raised by the interpreter pipeline."""


class TokenizeError(BasicError):
    def __init__(self, char: str, position: int, line: int = 0, column: int = 0):
        self.char = char
        self.position = position
        self.line = line
        self.column = column
        super().__init__(
            f"Unexpected character {char!r} at position {position} "
            f"(line {line}, column {column})"
        )


class ParseError(BasicError):
    def __init__(self, explanation: str, token=None):
        self.explanation = explanation
        self.token = token
        if token is None:
            super().__init__(explanation)
        else:
            super().__init__(f"{explanation} at token: {token!r}")

    @property
    def position(self) -> Optional[int]:
        return self.token.start if self.token is not None else None


class BasicRuntimeError(BasicError, RuntimeError):
    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


def source_window(text: str, pos: int, width: int = 120) -> str:
    """Show the source around ``pos`` with a caret under the offending character."""
    # 해당 위치가 속한 줄만 잘라서 보여줌
    line_start = text.rfind("\n", 0, pos) + 1
    line_end = text.find("\n", pos)
    if line_end == -1:
        line_end = len(text)
    a = max(line_start, pos - width // 2)
    b = min(line_end, pos + width // 2)
    caret = " " * (pos - a) + "^"
    return text[a:b] + "\n" + caret
