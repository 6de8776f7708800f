# phpdepends/tokenizer/cursor.py

from typing import AbstractSet, Optional, Sequence, Tuple, Union

from phpdepends.tokenizer.tokens import TaggedToken, Token, TokenCategory

DEFAULT_IGNORE = frozenset({TokenCategory.WHITESPACE})

Pattern = Union[str, TokenCategory, Tuple[TokenCategory, str]]


class TokenNotFoundError(LookupError):
    pass


def token_parts(token: Token) -> Tuple[Optional[TokenCategory], str]:
    if isinstance(token, TaggedToken):
        return token.category, token.text
    return None, token.text


def matches(token: Token, pattern: Pattern) -> bool:
    """
    Test a token against a pattern.

    A str pattern compares the token text, a TokenCategory compares the
    category and a (category, text) tuple compares both. Plain tokens carry
    no category, so they never match a category pattern.
    """
    category, text = token_parts(token)
    if isinstance(pattern, tuple):
        want_category, want_text = pattern
        return category is want_category and text == want_text
    if isinstance(pattern, TokenCategory):
        return category is pattern
    return text == pattern


def seek_token(
    tokens: Sequence[Token],
    start: int,
    direction: int = 1,
    ignore: AbstractSet[TokenCategory] = DEFAULT_IGNORE,
) -> Token:
    i = start
    while True:
        if i < 0 or i >= len(tokens):
            raise TokenNotFoundError(f"no significant token from index {start} (step {direction})")
        tok = tokens[i]
        if not (isinstance(tok, TaggedToken) and tok.category in ignore):
            return tok
        i += direction
