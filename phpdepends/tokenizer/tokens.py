# phpdepends/tokenizer/tokens.py

from dataclasses import dataclass
from enum import Enum
from typing import Union


class TokenCategory(Enum):
    IDENTIFIER = "identifier"
    WHITESPACE = "whitespace"
    OBJECT_OPERATOR = "object-operator"
    NULLSAFE_OBJECT_OPERATOR = "nullsafe-object-operator"
    DOUBLE_COLON = "double-colon"
    FUNCTION = "function-keyword"
    FN = "fn-keyword"
    NEW = "new-keyword"
    CLASS = "class-keyword"
    KEYWORD = "keyword"
    VARIABLE = "variable"
    STRING = "string"
    NUMBER = "number"
    COMMENT = "comment"
    QUALIFIED_NAME = "qualified-name"
    OPEN_TAG = "open-tag"
    INLINE_HTML = "inline-html"
    OTHER = "other"


@dataclass(frozen=True)
class PlainToken:
    """Punctuation fragment; its text is its identity."""

    text: str


@dataclass(frozen=True)
class TaggedToken:
    category: TokenCategory
    text: str
    line: int = 0


Token = Union[PlainToken, TaggedToken]
