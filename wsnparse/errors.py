# wsnparse/errors.py
"""오류 타입과 진단 유틸

- GrammarError  : 공통 베이스(SyntaxError 하위) - offset/line/col/snippet 보유
- LexicalError  : 어떤 토큰 규칙에도 맞지 않는 입력 위치
- ParseError    : 토큰 스트림이 문법 진행과 맞지 않는 위치(EOF 포함)

offset은 UTF-8 **바이트** 오프셋, line/col/snippet은 표시용이라 문자 단위.
모든 오류는 종결적이다(복구/재동기화 없음, 부분 AST 없음).
"""

from __future__ import annotations
from typing import Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .lex import Token


# ---------- error handling utils ----------
def char_index(src: str, offset: int) -> int:
    """UTF-8 바이트 오프셋 → src 문자 인덱스"""
    return len(src.encode("utf-8")[:offset].decode("utf-8", errors="ignore"))


def line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """문자 인덱스 pos가 속한 라인의 [시작, 끝) 범위"""
    start = src.rfind("\n", 0, pos)
    if start == -1:
        start = 0
    else:
        start += 1
    end = src.find("\n", pos)
    if end == -1:
        end = len(src)
    return start, end


def line_col(src: str, offset: int) -> Tuple[int, int]:
    """바이트 오프셋 → (line, col), 둘 다 1-based, col은 문자 단위"""
    pos = char_index(src, offset)
    line = src.count("\n", 0, pos) + 1
    start, _ = line_bounds(src, pos)
    return line, (pos - start) + 1


def snippet_at(src: str, offset: int) -> str:
    """바이트 오프셋 위치에 캐럿을 찍은 한 줄 발췌"""
    pos = char_index(src, offset)
    start, end = line_bounds(src, pos)
    line_text = src[start:end]
    caret = " " * (pos - start) + "^"
    return f"{line_text}\n{caret}"


class GrammarError(SyntaxError):
    """wsnparse가 내는 모든 실패의 베이스. kind는 'lexical' | 'syntax'"""

    kind = "error"

    def __init__(self, message: str, src: str, offset: int):
        self.line, self.col = line_col(src, offset)
        self.snippet = snippet_at(src, offset)
        super().__init__(f"{message} at {self.line}:{self.col}\n{self.snippet}")
        # SyntaxError.offset 자리를 절대 바이트 오프셋으로 사용
        self.offset = offset


class LexicalError(GrammarError):
    """offset 위치의 입력이 어떤 토큰 규칙에도 맞지 않음."""

    kind = "lexical"


class ParseError(GrammarError):
    """
    offset 위치의 토큰이 기대한 문법 진행과 맞지 않음.
    - found   : 문제의 Token, 입력 끝이면 None
    - end     : found의 끝 위치(EOF면 offset과 같음)
    - expected: 기대했던 것들의 사람이 읽을 설명
    """

    kind = "syntax"

    def __init__(self, message: str, src: str, offset: int, end: int,
                 found: "Token | None", expected: Tuple[str, ...] = ()):
        self.found = found
        self.end = end
        self.expected = tuple(expected)
        super().__init__(message, src, offset)
