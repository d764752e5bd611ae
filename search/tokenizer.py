"""
Tokenizer for boolean applicant search queries.

Splits a query such as

    ("Frontend" OR "Backend") NOT "Intern"

into a flat list of tokens. Operator keywords are recognised only in
upper case; "and", "or" and "not" in any other case are ordinary words.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List

from search.errors import QueryParseError


class TokenType(Enum):
    """Kinds of token a search query can contain."""
    PHRASE = "phrase"    # "quoted text"
    WORD = "word"        # bare word outside quotes
    AND = "and"
    OR = "or"
    NOT = "not"
    LPAREN = "lparen"
    RPAREN = "rparen"


BINARY_OPERATORS = (TokenType.AND, TokenType.OR)

KEYWORDS = {
    'AND': TokenType.AND,
    'OR': TokenType.OR,
    'NOT': TokenType.NOT,
}

WORD_BREAKS = '()"'


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    position: int


def tokenize(expression: str) -> List[Token]:
    """
    Convert a query string into tokens.

    Args:
        expression: Raw query text as typed by the user

    Returns:
        List of Token in source order

    Raises:
        QueryParseError: On an unterminated or empty quoted phrase
    """
    tokens = []
    position = 0
    length = len(expression)

    while position < length:
        char = expression[position]

        if char.isspace():
            position += 1
        elif char == '(':
            tokens.append(Token(TokenType.LPAREN, char, position))
            position += 1
        elif char == ')':
            tokens.append(Token(TokenType.RPAREN, char, position))
            position += 1
        elif char == '"':
            closing = expression.find('"', position + 1)
            if closing == -1:
                raise QueryParseError("Unterminated quoted phrase", position)
            phrase = expression[position + 1:closing]
            if not phrase:
                raise QueryParseError("Empty quoted phrase", position)
            tokens.append(Token(TokenType.PHRASE, phrase, position))
            position = closing + 1
        else:
            start = position
            while (position < length
                   and not expression[position].isspace()
                   and expression[position] not in WORD_BREAKS):
                position += 1
            word = expression[start:position]
            tokens.append(Token(KEYWORDS.get(word, TokenType.WORD), word, start))

    return tokens
