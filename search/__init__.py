# Applicant search for HireDesk
# Free-text boolean query matching plus the table's facet filters

from search.errors import QueryParseError
from search.query import CompiledQuery, QueryMode, compile_query, matches
from search.record import SearchableRecord

__all__ = [
    'CompiledQuery',
    'QueryMode',
    'QueryParseError',
    'SearchableRecord',
    'compile_query',
    'matches',
]
