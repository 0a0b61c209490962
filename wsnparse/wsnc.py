# wsnparse/wsnc.py
"""wsnc – wsnparse CLI

사용 예)
    $ python -m wsnparse.wsnc check tests/data/sample.wsn -D
    $ python -m wsnparse.wsnc lex tests/data/sample.wsn
    $ python -m wsnparse.wsnc lex --text "12 a = 'b' | 'c' ."
    $ python -m wsnparse.wsnc dump tests/data/sample.wsn

기능
----
- check : 문법 파일을 파싱해 규칙 수/비단말 수/중복 lhs 수를 요약 출력
- lex   : 토큰 스트림을 한 줄에 하나씩 출력
- dump  : AST를 들여쓰기 트리로 출력

디버그 모드(-D/--debug)를 켜면 단계별 진행 상황을 stderr로 출력합니다.
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Optional

from .errors import GrammarError
from .grammar.ast import (
    Choice, Sequence, Optional as OptionalExpr, Repeat, Group,
    Terminal, NonTerminal, Expr, Grammar,
)
from .grammar.loader import load_grammar_text
from .grammar.parser import DEFAULT_MAX_DEPTH, parse_grammar
from .lex import Lexer

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


# GrammarError.kind → 머리말
_HEADERS = {
    "lexical": "[LEX ERROR]",
    "syntax":  "[SYNTAX ERROR]",
}


def _report(e: Exception) -> int:
    """오류 종류별 머리말 + 메시지(캐럿 포함)를 stderr로, 종료 코드 2"""
    header = _HEADERS.get(getattr(e, "kind", None))
    if header is None:
        _eprint("[ERROR]", type(e).__name__, str(e))
    else:
        _eprint(header)
        _eprint(str(e))
    return 2

# ------------------------------
# 파이프라인 로딩
# ------------------------------

def _load(path: str, debug: bool, max_depth: int) -> Grammar:
    src = load_grammar_text(path)
    if debug: _eprint("[DEBUG] source loaded | chars=%d" % len(src))
    g = parse_grammar(src, max_depth=max_depth)
    if debug: _eprint("[DEBUG] AST ready | productions=%d" % len(g))
    return g

# ------------------------------
# AST 출력
# ------------------------------

def _format_expr(e: Expr, depth: int, out: List[str]) -> None:
    pad = "  " * depth
    if isinstance(e, Terminal):
        out.append(f"{pad}Terminal {e.text!r}")
        return
    if isinstance(e, NonTerminal):
        out.append(f"{pad}NonTerminal {e.name}")
        return
    if isinstance(e, (Choice, Sequence, OptionalExpr, Repeat, Group)):
        out.append(f"{pad}{type(e).__name__}")
        for child in e.children:
            _format_expr(child, depth + 1, out)
        return
    raise TypeError(f"not an expression node: {e!r}")


def format_grammar(g: Grammar) -> str:
    out: List[str] = []
    for p in g:
        label = f"{p.index} " if p.index is not None else ""
        out.append(f"{label}{p.lhs} =")
        _format_expr(p.rhs, 1, out)
    return "\n".join(out)

# ------------------------------
# 커맨드 구현
# ------------------------------

def cmd_check(args) -> int:
    try:
        g = _load(args.file, debug=args.debug, max_depth=args.max_depth)
    except (GrammarError, OSError, UnicodeDecodeError) as e:
        return _report(e)

    names = g.nonterminals()
    dups = len(g) - len(names)
    if args.debug and dups:
        for name in names:
            same = g.by_lhs(name)
            if len(same) > 1:
                _eprint(f"[DEBUG] duplicate lhs '{name}' x{len(same)}")

    print(f"[CHECK OK] productions={len(g)} nonterminals={len(names)} duplicates={dups}")
    return 0


def cmd_lex(args) -> int:
    """토큰 스트림을 표준출력으로 보여줍니다."""
    try:
        if args.text is not None:
            text = args.text
        else:
            text = load_grammar_text(args.file)
        lx = Lexer(text)
        for i, (start, tok, _end) in enumerate(lx):
            line, col = lx.line_col(start)
            value = "" if tok.value is None else repr(tok.value)
            print(f"{i:03d}: {tok.kind:<12} {value}  @{line}:{col}")
        return 0
    except (GrammarError, OSError, UnicodeDecodeError) as e:
        return _report(e)


def cmd_dump(args) -> int:
    try:
        g = _load(args.file, debug=args.debug, max_depth=args.max_depth)
    except (GrammarError, OSError, UnicodeDecodeError) as e:
        return _report(e)
    if len(g):
        print(format_grammar(g))
    return 0

# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="wsnc", description="wsnparse grammar notation CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="문법 파일을 파싱해 요약을 출력합니다")
    p_check.add_argument("file", help="문법 표기 파일")
    p_check.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH, help="괄호 중첩 허용 깊이")
    p_check.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_check.set_defaults(func=cmd_check)

    p_lex = sub.add_parser("lex", help="입력을 토크나이즈해 토큰을 출력합니다")
    src_group = p_lex.add_mutually_exclusive_group(required=True)
    src_group.add_argument("file", nargs="?", help="문법 표기 파일")
    src_group.add_argument("--text", help="직접 입력 텍스트")
    p_lex.set_defaults(func=cmd_lex)

    p_dump = sub.add_parser("dump", help="AST를 트리 형태로 출력합니다")
    p_dump.add_argument("file", help="문법 표기 파일")
    p_dump.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH, help="괄호 중첩 허용 깊이")
    p_dump.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_dump.set_defaults(func=cmd_dump)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
