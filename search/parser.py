"""
Recursive-descent parser and evaluator for boolean applicant search.

Grammar (AND and OR share one precedence level and associate to the left,
so "a OR b AND c" reads as "(a OR b) AND c"; two operands with no operator
between them are joined with AND at that same level):

    expression := unary ( (AND | OR)* unary )*
    unary      := NOT unary | primary
    primary    := PHRASE | WORD | "(" expression ")"

A run of binary operators collapses to its first member, so "a AND AND b"
is "a AND b" and "a AND OR b" is "a AND b". Saved queries depend on the
equal-precedence reading; do not switch to standard precedence without
migrating them.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from search.errors import QueryParseError
from search.tokenizer import BINARY_OPERATORS, Token, TokenType, tokenize


# Bounds parenthesis nesting and NOT chains; keeps recursion well below
# the interpreter limit for any input.
MAX_NESTING_DEPTH = 64


@dataclass(frozen=True)
class Term:
    """A phrase or bare word; true when some field contains the text."""
    text: str


@dataclass(frozen=True)
class Not:
    operand: 'Expression'


@dataclass(frozen=True)
class And:
    left: 'Expression'
    right: 'Expression'


@dataclass(frozen=True)
class Or:
    left: 'Expression'
    right: 'Expression'


Expression = Union[Term, Not, And, Or]


class _Parser:

    def __init__(self, tokens: List[Token], source_length: int):
        self.tokens = tokens
        self.index = 0
        self.depth = 0
        self.source_length = source_length

    def peek(self) -> Optional[Token]:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def position(self) -> int:
        token = self.peek()
        return token.position if token is not None else self.source_length

    def descend(self):
        self.depth += 1
        if self.depth > MAX_NESTING_DEPTH:
            raise QueryParseError("Query is nested too deeply", self.position())

    def parse(self) -> Expression:
        if not self.tokens:
            raise QueryParseError("Query has no terms", 0)
        expression = self.parse_expression()
        token = self.peek()
        if token is not None:
            # Only a stray ")" can stop parse_expression early
            raise QueryParseError("Unmatched closing parenthesis", token.position)
        return expression

    def parse_expression(self) -> Expression:
        left = self.parse_unary()

        while True:
            token = self.peek()
            if token is None or token.type == TokenType.RPAREN:
                return left

            operator = TokenType.AND
            if token.type in BINARY_OPERATORS:
                operator = self.advance().type
                while self.peek() is not None and self.peek().type in BINARY_OPERATORS:
                    self.advance()

            right = self.parse_unary()
            left = And(left, right) if operator == TokenType.AND else Or(left, right)

    def parse_unary(self) -> Expression:
        token = self.peek()
        if token is not None and token.type == TokenType.NOT:
            self.advance()
            self.descend()
            operand = self.parse_unary()
            self.depth -= 1
            return Not(operand)
        return self.parse_primary()

    def parse_primary(self) -> Expression:
        token = self.peek()
        if token is None:
            raise QueryParseError("Expected a search term at end of query", self.source_length)

        if token.type in (TokenType.PHRASE, TokenType.WORD):
            self.advance()
            return Term(token.value)

        if token.type == TokenType.LPAREN:
            self.advance()
            if self.peek() is not None and self.peek().type == TokenType.RPAREN:
                raise QueryParseError("Empty parentheses", token.position)
            self.descend()
            inner = self.parse_expression()
            self.depth -= 1
            closing = self.peek()
            if closing is None or closing.type != TokenType.RPAREN:
                raise QueryParseError("Unclosed parenthesis", token.position)
            self.advance()
            return inner

        raise QueryParseError(
            f"Expected a search term but found '{token.value}'", token.position
        )


def parse(query: str) -> Expression:
    """
    Parse a boolean search query into an expression tree.

    Raises:
        QueryParseError: If the query is structurally invalid
    """
    return _Parser(tokenize(query), len(query)).parse()


def evaluate(expression: Expression, contains: Callable[[str], bool]) -> bool:
    """
    Evaluate an expression tree.

    Args:
        expression: Tree returned by parse()
        contains: Predicate deciding whether a term is present

    Returns:
        bool: Result of the expression
    """
    if isinstance(expression, Term):
        return contains(expression.text)
    if isinstance(expression, Not):
        return not evaluate(expression.operand, contains)

    # Long AND/OR chains build a left-leaning spine; walk it with a loop
    chain = []
    node = expression
    while isinstance(node, (And, Or)):
        chain.append(node)
        node = node.left

    result = evaluate(node, contains)
    for binary in reversed(chain):
        if isinstance(binary, And):
            result = result and evaluate(binary.right, contains)
        else:
            result = result or evaluate(binary.right, contains)
    return result
