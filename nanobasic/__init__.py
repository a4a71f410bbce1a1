# -*- coding: utf-8 -*-
"""NanoBASIC: tokenize → parse → run."""

from typing import List, Optional

from .errors import BasicError, BasicRuntimeError, ParseError, TokenizeError, source_window
from .interpreter import Interpreter, run
from .nodes import Statement
from .parser import Parser, parse
from .tokenizer import Token, tokenize

__version__ = "0.1.0"


def load(source: str) -> List[Statement]:
    """Tokenize and parse BASIC source text."""
    return parse(tokenize(source))


def execute(source: str, sink=None) -> List[str]:
    return run(load(source), sink=sink)


__all__ = [
    "BasicError",
    "BasicRuntimeError",
    "Interpreter",
    "ParseError",
    "Parser",
    "Token",
    "TokenizeError",
    "execute",
    "load",
    "parse",
    "run",
    "source_window",
    "tokenize",
]
