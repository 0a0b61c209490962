# wsnparse/grammar/ast.py
"""Grammar AST
- Grammar    : Production의 순서 있는 나열(원문 순서, 중복 lhs 허용)
- Production : [index] lhs = rhs .
- Expr       : Choice / Sequence / Optional / Repeat / Group / Terminal / NonTerminal

규칙
----
- Choice/Sequence는 항상 자식 2개 이상 - 단일 원소면 그 원소 자체로 표현
- Group/Optional/Repeat는 본문의 크기와 무관하게 **항상** 감싼다
- 모든 노드는 불변(frozen), 자식은 tuple로 보관
"""

from __future__     import annotations
from dataclasses    import dataclass
from typing         import Iterator, List, Tuple, Union
import regex as re

__all__ = [
    "Ident", "Terminal", "NonTerminal", "Choice", "Sequence",
    "Optional", "Repeat", "Group", "Atom", "Expr", "Production", "Grammar",
    "iter_nodes",
]

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass(frozen=True)
class Ident:
    name: str

    def __post_init__(self) -> None:
        if not _IDENT_RE.fullmatch(self.name):
            raise ValueError(f"invalid identifier: {self.name!r}")

    def __str__(self) -> str:
        return self.name

# ---- 잎(leaf) ----

@dataclass(frozen=True)
class Terminal:
    """'abs', '', '\\xA' … (따옴표 제거한 내용 또는 이스케이프 원문)"""
    text: str

    @property
    def children(self) -> Tuple["Expr", ...]:
        return ()

@dataclass(frozen=True)
class NonTerminal:
    ident: Ident

    @property
    def name(self) -> str:
        return self.ident.name

    @property
    def children(self) -> Tuple["Expr", ...]:
        return ()

# ---- 다항 노드 ----

def _check_arity(node, items) -> None:
    if len(items) < 2:
        raise ValueError(f"{type(node).__name__} needs at least 2 children, got {len(items)}")

@dataclass(frozen=True)
class Choice:
    """a | b | c"""
    alts: Tuple["Expr", ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "alts", tuple(self.alts))
        _check_arity(self, self.alts)

    @property
    def children(self) -> Tuple["Expr", ...]:
        return self.alts

@dataclass(frozen=True)
class Sequence:
    """a b c"""
    items: Tuple["Expr", ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))
        _check_arity(self, self.items)

    @property
    def children(self) -> Tuple["Expr", ...]:
        return self.items

# ---- 단항 래퍼 ----

@dataclass(frozen=True)
class Optional:
    """[ a ] - zero-or-one"""
    body: "Expr"

    @property
    def children(self) -> Tuple["Expr", ...]:
        return (self.body,)

@dataclass(frozen=True)
class Repeat:
    """{ a } - zero-or-more"""
    body: "Expr"

    @property
    def children(self) -> Tuple["Expr", ...]:
        return (self.body,)

@dataclass(frozen=True)
class Group:
    """( a ) - 의미상 투명하지만 구조는 보존"""
    body: "Expr"

    @property
    def children(self) -> Tuple["Expr", ...]:
        return (self.body,)


Atom = Union[Terminal, NonTerminal]
Expr = Union[Choice, Sequence, Optional, Repeat, Group, Terminal, NonTerminal]


def iter_nodes(expr: Expr) -> Iterator[Expr]:
    """expr와 모든 하위 노드를 전위(pre-order)로 순회"""
    stack: List[Expr] = [expr]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))

# ---- 규칙/문법 ----

@dataclass(frozen=True)
class Production:
    """
    한 줄 규칙, 예)
        125 digits = digit { digit } .
    - index: 줄 앞의 숫자 라벨(없으면 None). 순서/유일성 제약 없음
    """
    index: "int | None"
    lhs: Ident
    rhs: Expr

@dataclass(frozen=True)
class Grammar:
    productions: Tuple[Production, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "productions", tuple(self.productions))

    def __len__(self) -> int:
        return len(self.productions)

    def __iter__(self) -> Iterator[Production]:
        return iter(self.productions)

    def by_lhs(self, name: str) -> Tuple[Production, ...]:
        """lhs가 name인 규칙 전부(원문 순서). 중복 처리는 호출자 몫."""
        return tuple(p for p in self.productions if p.lhs.name == name)

    def nonterminals(self) -> List[str]:
        """lhs 이름들(첫 등장 순서, 중복 제거)"""
        seen = set()
        out: List[str] = []
        for p in self.productions:
            if p.lhs.name not in seen:
                seen.add(p.lhs.name)
                out.append(p.lhs.name)
        return out
