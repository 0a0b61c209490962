# wsnparse/grammar/__init__.py
"""문법 AST + 재귀 하강 파서 + 파일 로더"""

from .ast import (
    Ident, Terminal, NonTerminal, Choice, Sequence, Optional, Repeat, Group,
    Atom, Expr, Production, Grammar, iter_nodes,
)
from .loader import load_grammar_text
from .parser import DEFAULT_MAX_DEPTH, parse_grammar
