# phpdepends/classifier/symbol_classifier.py

from dataclasses import dataclass
from typing import List, Optional, Sequence

from phpdepends.tokenizer.cursor import TokenNotFoundError, matches, seek_token
from phpdepends.tokenizer.tokens import Token, TokenCategory
from phpdepends.utils.dependency_set import DependencySet

# A name right after one of these is a method, a static member or the name
# being declared, never a free-standing reference to a builtin.
NOT_FREE_STANDING = (
    (TokenCategory.OBJECT_OPERATOR, "->"),
    TokenCategory.NULLSAFE_OBJECT_OPERATOR,
    TokenCategory.DOUBLE_COLON,
    TokenCategory.FUNCTION,
)


@dataclass
class Resolution:
    symbol: str
    kind: str
    module: str
    line: int


class SymbolClassifier:
    def __init__(self, resolver):
        self.resolver = resolver
        self.resolutions: List[Resolution] = []

    def classify(self, tokens: Sequence[Token]) -> DependencySet:
        """
        Walk the token stream and collect the modules of every builtin
        function called or class referenced.

        Each identifier is tried as a function call, then a class reference,
        then a constant; the first that succeeds wins.
        """
        deps = DependencySet()
        i = 0
        while i < len(tokens):
            tok = tokens[i]
            if matches(tok, TokenCategory.IDENTIFIER):
                found = (
                    self.try_function(i, tokens)
                    or self.try_class(i, tokens)
                    or self.try_constant(i, tokens)
                )
                if found is not None:
                    deps.add(found.module)
                    self.resolutions.append(found)
            i += 1
        return deps

    def resolve(self, lookup, name: str) -> Optional[str]:
        try:
            return lookup(name)
        except Exception:
            return None

    def is_free_standing(self, i: int, tokens: Sequence[Token]) -> bool:
        prev = seek_token(tokens, i - 1, -1)
        return not any(matches(prev, pattern) for pattern in NOT_FREE_STANDING)

    def try_function(self, i: int, tokens: Sequence[Token]) -> Optional[Resolution]:
        name = tokens[i].text
        try:
            if not matches(seek_token(tokens, i + 1), "("):
                return None
            if not self.is_free_standing(i, tokens):
                return None
        except TokenNotFoundError:
            return None

        module = self.resolve(self.resolver.resolve_function, name)
        if module is None:
            return None
        return Resolution(name, "function", module, tokens[i].line)

    def try_class(self, i: int, tokens: Sequence[Token]) -> Optional[Resolution]:
        name = tokens[i].text
        try:
            if not self.is_free_standing(i, tokens):
                return None
        except TokenNotFoundError:
            return None

        module = self.resolve(self.resolver.resolve_class, name)
        if module is None:
            return None
        return Resolution(name, "class", module, tokens[i].line)

    def try_constant(self, i: int, tokens: Sequence[Token]) -> Optional[Resolution]:
        # TODO: resolve against the constants each extension registers
        # (ReflectionExtension::getConstants), behind the same is_free_standing check.
        return None
