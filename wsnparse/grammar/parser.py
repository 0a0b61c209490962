"""wsnparse 문법 표기 파서
- 규칙: [LineNumber] Ident = expr .
- expr     := seq ("|" seq)*            - 대안 1개면 그대로, 2개 이상이면 Choice
- seq      := factor factor*            - 원소 1개면 그대로, 2개 이상이면 Sequence
- factor   := atom | "[" expr "]" | "{" expr "}" | "(" expr ")"
- atom     := STRING | ESCAPE | IDENT
- 병치(sequence)가 "|"보다 강하게 결합: `a b | c` → Choice[Sequence[a, b], c]
- 마침표(.)는 모든 규칙 종료에 **반드시 필요**
- 토큰 1개 선읽기, 백트래킹 없음. 첫 오류에서 즉시 중단(부분 AST 없음)
"""

from __future__ import annotations
from typing import List, Tuple
from .ast import (
    Grammar, Production, Ident, Expr,
    Choice, Sequence, Optional, Repeat, Group, Terminal, NonTerminal,
)
from ..errors import ParseError
from ..lex import DISPLAY, Kind, Lexer, Token

DEFAULT_MAX_DEPTH = 200

# factor를 시작할 수 있는 토큰
_FACTOR_START = (Kind.STRING, Kind.ESCAPE, Kind.IDENTIFIER,
                 Kind.LBRACKET, Kind.LBRACE, Kind.LPAREN)

# 여는 괄호 → (닫는 괄호, 래퍼 노드)
_BRACKETS = {
    Kind.LBRACKET: (Kind.RBRACKET, Optional),
    Kind.LBRACE:   (Kind.RBRACE, Repeat),
    Kind.LPAREN:   (Kind.RPAREN, Group),
}

_EOF = "EOF"


def _expected(*kinds: str) -> Tuple[str, ...]:
    return tuple(DISPLAY[k] for k in kinds)

# --- 토큰 스트림 ---
class _TS:
    """Lexer 위에 1토큰 선읽기 + 중첩 깊이 카운터"""

    def __init__(self, lexer: Lexer, max_depth: int):
        self.lexer = lexer
        self.src = lexer.src
        self.max_depth = max_depth
        self.depth = 0
        self.eof_offset = len(self.src.encode("utf-8"))
        self._la = self._pull()

    def _pull(self) -> Tuple[int, Token | None, int]:
        try:
            return next(self.lexer)
        except StopIteration:
            n = self.eof_offset
            return (n, None, n)

    def la(self) -> Tuple[int, Token | None, int]:
        return self._la

    def kind(self) -> str:
        tok = self._la[1]
        return _EOF if tok is None else tok.kind

    def advance(self) -> Tuple[int, Token | None, int]:
        t = self._la
        self._la = self._pull()
        return t

    def error(self, message: str, expected: Tuple[str, ...] = ()) -> ParseError:
        start, tok, end = self._la
        found = "end of input" if tok is None else tok.describe()
        return ParseError(f"{message}, found {found}", self.src, start, end, tok, expected)

    def eat(self, kind: str, context: str) -> Tuple[int, Token, int]:
        if self.kind() != kind:
            raise self.error(f"Expected {DISPLAY[kind]} {context}", _expected(kind))
        return self.advance()  # type: ignore[return-value]

    def match(self, kind: str) -> bool:
        if self.kind() == kind:
            self.advance()
            return True
        return False

# --- Grammar Parsing ---
def parse_grammar(src: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Grammar:
    """
    원문 → Grammar.
    - 렉서 오류는 LexicalError, 구문 오류는 ParseError(둘 다 SyntaxError 하위)
    - max_depth: [ ], { }, ( ) 중첩 허용 깊이(초과 시 여는 괄호 위치에서 ParseError)
    """
    ts = _TS(Lexer(src), max_depth)
    prods: List[Production] = []
    while ts.kind() != _EOF:
        prods.append(_parse_production(ts))
    return Grammar(tuple(prods))

def _parse_production(ts: _TS) -> Production:
    index = None
    if ts.kind() == Kind.LINENUMBER:
        index = ts.advance()[1].value
    if ts.kind() != Kind.IDENTIFIER:
        exp = _expected(Kind.IDENTIFIER) if index is not None \
            else _expected(Kind.LINENUMBER, Kind.IDENTIFIER)
        raise ts.error("Expected rule name", exp)
    lhs = Ident(ts.advance()[1].value)
    ts.eat(Kind.EQUAL, f"after rule name '{lhs}'")
    rhs = _parse_expr(ts)
    if ts.kind() != Kind.PERIOD:
        raise ts.error(
            f"Missing '.' after rule '{lhs}' (period is mandatory)",
            _expected(Kind.PERIOD, Kind.PIPE) + _expected(*_FACTOR_START),
        )
    ts.advance()
    return Production(index, lhs, rhs)

def _parse_expr(ts: _TS) -> Expr:
    alts = [_parse_seq(ts)]
    while ts.match(Kind.PIPE):
        alts.append(_parse_seq(ts))
    if len(alts) == 1:
        return alts[0]
    return Choice(tuple(alts))

def _parse_seq(ts: _TS) -> Expr:
    """
    시퀀스: factor+ - '|', ')', ']', '}', '.' 또는 factor를 시작할 수 없는 토큰에서 멈춤.
    """
    items = [_parse_factor(ts)]
    while ts.kind() in _FACTOR_START:
        items.append(_parse_factor(ts))
    if len(items) == 1:
        return items[0]
    return Sequence(tuple(items))

def _parse_factor(ts: _TS) -> Expr:
    kind = ts.kind()
    if kind in _BRACKETS:
        close, wrap = _BRACKETS[kind]
        if ts.depth >= ts.max_depth:
            raise ts.error(f"Nesting deeper than {ts.max_depth} levels")
        ts.advance()
        ts.depth += 1
        body = _parse_expr(ts)
        ts.eat(close, f"to close {DISPLAY[kind]}")
        ts.depth -= 1
        return wrap(body)
    return _parse_atom(ts)

def _parse_atom(ts: _TS) -> Expr:
    kind = ts.kind()
    if kind == Kind.STRING or kind == Kind.ESCAPE:
        return Terminal(ts.advance()[1].value)
    if kind == Kind.IDENTIFIER:
        return NonTerminal(Ident(ts.advance()[1].value))
    raise ts.error("Expected a term", _expected(*_FACTOR_START))
