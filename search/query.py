"""
Free-text applicant search.

compile_query() decides how a query is interpreted and parses it once;
the resulting CompiledQuery can then be matched against any number of
records. matches() is the one-shot form used when only a single record is
checked.

Interpretation rules, in order:
    1. Empty or whitespace-only query: every record matches.
    2. Fewer than MIN_QUERY_LENGTH characters after trimming: nothing
       matches (the user is still typing).
    3. Query containing " AND ", " OR ", " NOT " or a pair of double
       quotes: boolean expression (see search.parser).
    4. Anything else: the whole trimmed query is a case-insensitive
       substring searched for in every field.

An invalid boolean expression never raises; it matches nothing. That
includes groups or NOT chains nested deeper than
search.parser.MAX_NESTING_DEPTH (64) levels. A record whose searchable
fields are all empty only matches the empty query.

Compiled queries are cached, so an invalid query is logged at DEBUG once
per cache entry, not once per call.
"""

import logging
from enum import Enum
from functools import lru_cache
from typing import Optional

from search.errors import QueryParseError
from search.parser import Expression, evaluate, parse
from search.record import SearchableRecord

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3

BOOLEAN_MARKERS = (' AND ', ' OR ', ' NOT ')


class QueryMode(Enum):
    MATCH_ALL = "match_all"
    TOO_SHORT = "too_short"
    PLAIN = "plain"
    BOOLEAN = "boolean"
    INVALID = "invalid"


def is_boolean_query(query: str) -> bool:
    """True when the query uses boolean operators or a quoted phrase."""
    if any(marker in query for marker in BOOLEAN_MARKERS):
        return True
    return query.count('"') >= 2


class CompiledQuery:
    """A query ready to be matched against records."""

    def __init__(self, text: str, mode: QueryMode,
                 expression: Optional[Expression] = None,
                 error: Optional[QueryParseError] = None):
        self.text = text
        self.mode = mode
        self.expression = expression
        self.error = error

    def __repr__(self):
        return f'<CompiledQuery {self.mode.value} {self.text!r}>'

    @property
    def is_valid(self) -> bool:
        return self.mode != QueryMode.INVALID

    def matches(self, record: SearchableRecord) -> bool:
        if self.mode == QueryMode.MATCH_ALL:
            return True
        if record.is_blank():
            # Otherwise a bare NOT query would match applicants with no data
            return False
        if self.mode == QueryMode.PLAIN:
            return record.contains(self.text)
        if self.mode == QueryMode.BOOLEAN:
            return evaluate(self.expression, record.contains)
        return False

    def describe(self) -> dict:
        """Summary for API responses so the UI can explain an empty result."""
        return {
            'text': self.text,
            'mode': self.mode.value,
            'valid': self.is_valid,
            'error': str(self.error) if self.error else None,
        }


@lru_cache(maxsize=256)
def _compile(text: str) -> CompiledQuery:
    if not text:
        return CompiledQuery(text, QueryMode.MATCH_ALL)
    if len(text) < MIN_QUERY_LENGTH:
        return CompiledQuery(text, QueryMode.TOO_SHORT)
    if not is_boolean_query(text):
        return CompiledQuery(text, QueryMode.PLAIN)

    try:
        expression = parse(text)
    except QueryParseError as e:
        # Cache miss only; repeats of the same query are not logged again
        logger.debug(f"Boolean search query rejected: {e} - query={text!r}")
        return CompiledQuery(text, QueryMode.INVALID, error=e)
    return CompiledQuery(text, QueryMode.BOOLEAN, expression=expression)


def compile_query(query: Optional[str]) -> CompiledQuery:
    """
    Interpret a search query.

    Args:
        query: Raw text from the search box (None is treated as empty)

    Returns:
        CompiledQuery: Never raises, whatever the input
    """
    return _compile((query or '').strip())


def matches(record: SearchableRecord, query: Optional[str]) -> bool:
    """True if record satisfies query."""
    return compile_query(query).matches(record)
