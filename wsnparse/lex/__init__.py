# wsnparse/lex/__init__.py
"""wsnparse 토크나이저 - 문법 표기 원문을 위치 태그가 붙은 토큰 스트림으로.

특징
----
- **지연(lazy)** 이터레이터: 소비자가 당길 때마다 한 토큰씩 스캔
- 산출 항목은 `(start, Token, end)` 튜플(UTF-8 바이트 오프셋, end는 exclusive)
- 공백(space/tab/newline/form-feed)과 `;` 라인 주석은 토큰 미배출
- 어떤 규칙에도 맞지 않으면 그 위치에서 LexicalError, 스트림 중단

토큰 종류
---------
- 구두점: `= . | { } [ ] ( )`
- LINENUMBER : [0-9]+ → int (32bit unsigned 범위)
- STRING     : '...' → 따옴표 제거한 내용(빈 문자열 허용)
- IDENTIFIER : [A-Za-z_][A-Za-z0-9_]*
- ESCAPE     : \\ + 영문자 1개 + (16진수 0~2개), 원문 그대로 보존 (예: \\n, \\xA, \\x1F)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple, Union
import regex as re

from ..errors import LexicalError, line_col


class Kind:
    EQUAL      = "EQUAL"
    PERIOD     = "PERIOD"
    PIPE       = "PIPE"
    LBRACE     = "LBRACE"
    RBRACE     = "RBRACE"
    LBRACKET   = "LBRACKET"
    RBRACKET   = "RBRACKET"
    LPAREN     = "LPAREN"
    RPAREN     = "RPAREN"
    LINENUMBER = "LINENUMBER"
    STRING     = "STRING"
    IDENTIFIER = "IDENTIFIER"
    ESCAPE     = "ESCAPE"


# 진단 메시지용 표기
DISPLAY = {
    Kind.EQUAL:      "'='",
    Kind.PERIOD:     "'.'",
    Kind.PIPE:       "'|'",
    Kind.LBRACE:     "'{'",
    Kind.RBRACE:     "'}'",
    Kind.LBRACKET:   "'['",
    Kind.RBRACKET:   "']'",
    Kind.LPAREN:     "'('",
    Kind.RPAREN:     "')'",
    Kind.LINENUMBER: "line number",
    Kind.STRING:     "string",
    Kind.IDENTIFIER: "identifier",
    Kind.ESCAPE:     "escape sequence",
}

_PUNCT = {
    "=": Kind.EQUAL,
    ".": Kind.PERIOD,
    "|": Kind.PIPE,
    "{": Kind.LBRACE,
    "}": Kind.RBRACE,
    "[": Kind.LBRACKET,
    "]": Kind.RBRACKET,
    "(": Kind.LPAREN,
    ")": Kind.RPAREN,
}

MAX_LINENUMBER = 2**32 - 1

# ---- Lexer 토큰 ----
_TOKEN_SPEC = [
    ("WS",         r"[ \t\n\f]+"),
    ("COMMENT",    r";[^\n]*\n?"),
    ("PUNCT",      r"[=.|{}\[\]()]"),
    ("LINENUMBER", r"[0-9]+"),
    ("STRING",     r"'[^']*'"),
    ("IDENTIFIER", r"[A-Za-z_][A-Za-z0-9_]*"),
    ("ESCAPE",     r"\\[A-Za-z](?:[0-9A-Fa-f]{1,2})?"),
]
MASTER_RE = re.compile("|".join(f"(?P<{n}>{p})" for n, p in _TOKEN_SPEC))


@dataclass(frozen=True)
class Token:
    kind: str
    value: Union[str, int, None] = None

    def describe(self) -> str:
        """오류 메시지용 짧은 설명 (예: identifier 'abc', '|')"""
        label = DISPLAY.get(self.kind, self.kind)
        if self.value is None:
            return label
        return f"{label} {self.value!r}"


Spanned = Tuple[int, Token, int]


class Lexer:
    """
    원문 전체를 받아 `(start, Token, end)`를 하나씩 내놓는 일회성 이터레이터.
    재시작 불가 - 다시 스캔하려면 새 Lexer를 만든다.
    """

    def __init__(self, src: str):
        self.src = src
        self._i = 0        # 문자 커서(매칭용)
        self._b = 0        # 바이트 커서(산출 오프셋)
        self._failed = False

    def __iter__(self) -> "Lexer":
        return self

    def __next__(self) -> Spanned:
        if self._failed:
            raise StopIteration
        tok = self._next_token()
        if tok is None:
            raise StopIteration
        return tok

    def line_col(self, offset: int) -> Tuple[int, int]:
        """바이트 오프셋 → (line, col)"""
        return line_col(self.src, offset)

    # ---- Internals ----
    def _fail(self, message: str, pos: int) -> LexicalError:
        self._failed = True
        return LexicalError(message, self.src, pos)

    def _next_token(self) -> Spanned | None:
        src = self.src
        while self._i < len(src):
            start = self._b
            m = MASTER_RE.match(src, self._i)
            if not m:
                raise self._fail(f"Unexpected character {src[self._i]!r}", start)
            kind = m.lastgroup or ""
            lex = m.group(0)
            self._i = m.end()
            self._b = end = start + len(lex.encode("utf-8"))

            # 공백/주석은 토큰 미배출
            if kind in ("WS", "COMMENT"):
                continue

            if kind == "PUNCT":
                return (start, Token(_PUNCT[lex]), end)
            if kind == "LINENUMBER":
                value = int(lex)
                if value > MAX_LINENUMBER:
                    raise self._fail(f"Line number {lex} out of range", start)
                return (start, Token(Kind.LINENUMBER, value), end)
            if kind == "STRING":
                return (start, Token(Kind.STRING, lex[1:-1]), end)
            if kind == "IDENTIFIER":
                return (start, Token(Kind.IDENTIFIER, lex), end)
            # ESCAPE - 백슬래시 포함 원문 그대로
            return (start, Token(Kind.ESCAPE, lex), end)
        return None


def tokenize(src: str) -> Lexer:
    """원문 → 지연 토큰 스트림"""
    return Lexer(src)
