"""문법 표기 파일 로더"""

from __future__ import annotations
import os
from typing import Union

# 선두 BOM은 렉서가 모르는 문자라 여기서 제거
GRAMMAR_ENCODING = "utf-8-sig"


def load_grammar_text(path: Union[str, "os.PathLike[str]"]) -> str:
    """
    문법 파일을 읽어 파서에 넘길 원문으로.
    - UTF-8(BOM 허용)
    - universal newline 모드로 '\\r\\n', '\\r' → '\\n' (렉서는 '\\r'을 공백으로 보지 않음)
    """
    with open(path, "r", encoding=GRAMMAR_ENCODING, newline=None) as f:
        return f.read()
