# -*- coding: utf-8 -*-
"""
NanoBASIC 실행기
사용법: python -m nanobasic program.bas [--tokens] [--ast] [--trace] [-v]
"""

import argparse
import logging
import sys
from collections import Counter
from typing import List, Optional

from .errors import BasicError, BasicRuntimeError, ParseError, TokenizeError, source_window
from .interpreter import Interpreter
from .nodes import IfStatement, PrintStatement, Statement
from .parser import parse
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="nanobasic", description="Run a NanoBASIC program.")
    ap.add_argument("file", help="BASIC source file")
    ap.add_argument("--tokens", action="store_true", help="print the token stream and exit")
    ap.add_argument("--ast", action="store_true", help="print a statement summary and exit")
    ap.add_argument("--trace", action="store_true", help="log every executed statement")
    ap.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return ap


# -----------------------------
# 요약 출력 헬퍼
# -----------------------------
def _describe(stmt: Statement) -> str:
    name = type(stmt).__name__
    if isinstance(stmt, IfStatement):
        return f"{name} -> {_describe(stmt.then)}"
    if isinstance(stmt, PrintStatement):
        return f"{name} ({len(stmt.printables)} items)"
    return name


def summarize(statements: List[Statement], out=None):
    out = out if out is not None else sys.stdout
    for stmt in statements:
        print(f"Line {stmt.line:5d}: {_describe(stmt)}", file=out)

    cnt = Counter(type(s).__name__ for s in statements)
    print("\n---- Statement counts ----", file=out)
    for k, v in cnt.most_common():
        print(f"  {k:16s} {v}", file=out)
    print("--------------------------", file=out)


def _error_position(err: BasicError) -> Optional[int]:
    if isinstance(err, TokenizeError):
        return err.position
    if isinstance(err, ParseError):
        return err.position
    return None


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if (args.verbose or args.trace) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        with open(args.file, encoding="utf-8") as f:
            source = f.read()
    except OSError as e:
        print(f"nanobasic: cannot read {args.file}: {e.strerror}", file=sys.stderr)
        return 2
    except UnicodeDecodeError as e:
        print(f"nanobasic: cannot read {args.file}: not UTF-8 text ({e.reason})", file=sys.stderr)
        return 2

    try:
        tokens = tokenize(source)
        if args.tokens:
            for tok in tokens:
                print(repr(tok))
            return 0
        statements = parse(tokens)
        if args.ast:
            summarize(statements)
            return 0
        Interpreter(statements, sink=sys.stdout.write, trace=args.trace).run()
    except BasicError as e:
        kind = "runtime error" if isinstance(e, BasicRuntimeError) else type(e).__name__
        print(f"❌ {kind}: {e}", file=sys.stderr)
        pos = _error_position(e)
        if pos is not None:
            print(source_window(source, pos), file=sys.stderr)
        return 1
    finally:
        sys.stdout.flush()

    logger.debug("program finished")
    return 0


if __name__ == "__main__":
    sys.exit(main())
