# phpdepends/tokenizer/php_tokenizer.py

from typing import List, Tuple

from tree_sitter_language_pack import get_parser

from phpdepends.tokenizer.tokens import PlainToken, TaggedToken, Token, TokenCategory

# Nodes emitted as one token; their children are never visited.
ATOMIC_NODE_TYPES = {
    "variable_name": TokenCategory.VARIABLE,
    "string": TokenCategory.STRING,
    "nowdoc": TokenCategory.STRING,
    "comment": TokenCategory.COMMENT,
    "integer": TokenCategory.NUMBER,
    "float": TokenCategory.NUMBER,
    "qualified_name": TokenCategory.QUALIFIED_NAME,
    "namespace_name": TokenCategory.QUALIFIED_NAME,
}

NAMED_LEAF_CATEGORIES = {
    "name": TokenCategory.IDENTIFIER,
    "php_tag": TokenCategory.OPEN_TAG,
    "text": TokenCategory.INLINE_HTML,
    "string_content": TokenCategory.STRING,
    "string_value": TokenCategory.STRING,
    "escape_sequence": TokenCategory.STRING,
}

# Anonymous leaves are keyed by node type, which tree-sitter normalises for
# case-insensitive keywords ("FUNCTION" still has type "function").
ANONYMOUS_CATEGORIES = {
    "->": TokenCategory.OBJECT_OPERATOR,
    "?->": TokenCategory.NULLSAFE_OBJECT_OPERATOR,
    "::": TokenCategory.DOUBLE_COLON,
    "function": TokenCategory.FUNCTION,
    "fn": TokenCategory.FN,
    "new": TokenCategory.NEW,
    "class": TokenCategory.CLASS,
}


class PhpTokenizer:
    def __init__(self):
        self.parser = get_parser("php")

    def tokenize(self, source: str) -> Tuple[Token, ...]:
        src = source.encode("utf8")
        tree = self.parser.parse(src)
        tokens: List[Token] = []

        prev_end = 0
        prev_line = 1
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            atomic = ATOMIC_NODE_TYPES.get(node.type)
            if atomic is None and node.child_count > 0:
                stack.extend(reversed(node.children))
                continue
            if node.end_byte <= node.start_byte:
                # zero-width MISSING nodes inserted by error recovery
                continue

            if node.start_byte > prev_end:
                gap = src[prev_end:node.start_byte].decode("utf8", errors="replace")
                category = TokenCategory.WHITESPACE if gap.isspace() else TokenCategory.OTHER
                tokens.append(TaggedToken(category, gap, prev_line))

            text = src[node.start_byte:node.end_byte].decode("utf8", errors="replace")
            tokens.append(self.make_token(node, text, atomic))
            prev_end = node.end_byte
            prev_line = node.end_point[0] + 1

        if prev_end < len(src):
            gap = src[prev_end:].decode("utf8", errors="replace")
            category = TokenCategory.WHITESPACE if gap.isspace() else TokenCategory.OTHER
            tokens.append(TaggedToken(category, gap, prev_line))

        return tuple(tokens)

    def make_token(self, node, text: str, atomic=None) -> Token:
        line = node.start_point[0] + 1
        if atomic is not None:
            return TaggedToken(atomic, text, line)
        if node.is_named:
            return TaggedToken(NAMED_LEAF_CATEGORIES.get(node.type, TokenCategory.OTHER), text, line)
        category = ANONYMOUS_CATEGORIES.get(node.type)
        if category is not None:
            return TaggedToken(category, text, line)
        if node.type.replace("_", "").isalpha():
            return TaggedToken(TokenCategory.KEYWORD, text, line)
        return PlainToken(text)
