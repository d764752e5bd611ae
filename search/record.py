"""
Read-only view of an applicant row used by the search box.

Only the fields listed in SEARCHABLE_FIELDS take part in free-text search.
Missing values are treated as empty strings.
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, Tuple


SEARCHABLE_FIELDS = (
    'full_name',
    'education_level',
    'application_status',
    'decision',
    'referral_name',
    'referral_email',
    'referral_position',
    'referral_dept',
)


@dataclass(frozen=True)
class SearchableRecord:
    """The text attributes of one applicant that a query is matched against."""
    full_name: Optional[str] = None
    education_level: Optional[str] = None
    application_status: Optional[str] = None
    decision: Optional[str] = None
    referral_name: Optional[str] = None
    referral_email: Optional[str] = None
    referral_position: Optional[str] = None
    referral_dept: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'SearchableRecord':
        """Build a record from an applicant row, ignoring non-searchable keys."""
        return cls(**{name: data.get(name) for name in SEARCHABLE_FIELDS})

    def searchable_values(self) -> Tuple[str, ...]:
        """Lower-cased field values, with None mapped to ''."""
        return tuple(
            '' if value is None else str(value).lower()
            for value in (getattr(self, f.name) for f in fields(self))
        )

    def is_blank(self) -> bool:
        """True when every searchable field is missing or empty."""
        return not any(self.searchable_values())

    def contains(self, term: str) -> bool:
        """True if any searchable field contains term, ignoring case."""
        needle = term.lower()
        return any(needle in value for value in self.searchable_values())
