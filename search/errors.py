"""Exceptions raised while reading a boolean search query."""


class QueryParseError(Exception):
    """Raised when a search query cannot be turned into an expression.

    Never escapes the public predicate: compile_query() catches it and
    turns the query into one that matches nothing.
    """

    def __init__(self, message, position=None):
        self.message = message
        self.position = position
        super().__init__(message)

    def __str__(self):
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"
