# wsnparse/__init__.py
"""wsnparse - EBNF 계열(Wirth 스타일, 줄 번호 라벨 허용) 문법 표기 파서.

원문 → (lex) 토큰 스트림 → (grammar.parser) Grammar AST.

    >>> from wsnparse import parse_grammar
    >>> g = parse_grammar("12 a = 'b' | 'c' .")
    >>> g.productions[0].rhs
    Choice(alts=(Terminal(text='b'), Terminal(text='c')))
"""

from .errors import GrammarError, LexicalError, ParseError
from .lex import Kind, Lexer, Token, tokenize
from .grammar import (
    Ident, Terminal, NonTerminal, Choice, Sequence, Optional, Repeat, Group,
    Atom, Expr, Production, Grammar, iter_nodes,
    DEFAULT_MAX_DEPTH, load_grammar_text, parse_grammar,
)
