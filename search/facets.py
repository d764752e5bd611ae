"""
Facet filters and sort orders for a job's applicant table.

Rows are plain dicts produced by ApplicantService.build_applicant_row().
Facets run before the free-text query: referral, status, score band,
decision, application date range.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Tuple

from models import APPLICATION_STATUSES
from timezone_utils import ensure_utc, local_day_bounds, parse_iso_date


MAX_SCORE = 5
MAX_PER_PAGE = 100

ALL = 'all'

REFERRAL_FILTERS = (ALL, 'with-referral', 'without-referral')

# Minimum percentage per band; '<50' is handled as an upper bound
SCORE_BANDS = {
    '90+': 90,
    '80+': 80,
    '70+': 70,
    '60+': 60,
    '50+': 50,
}
SCORE_BELOW_50 = '<50'
SCORE_FILTERS = (ALL,) + tuple(SCORE_BANDS) + (SCORE_BELOW_50,)

NO_DECISION = 'no-decision'
DECISIONS = ('Accept', 'Reject', 'Consider')
DECISION_FILTERS = (ALL, NO_DECISION) + DECISIONS

SORT_FIELDS = ('overall_score', 'full_name', 'application_date',
               'application_status', 'referral')
DEFAULT_SORT = 'overall_score'


class FacetError(ValueError):
    """Raised for an unknown or malformed filter parameter."""

    def __init__(self, message, field=None):
        self.message = message
        self.field = field
        super().__init__(message)


@dataclass
class ApplicantFilters:
    query: str = ''
    referral: str = ALL
    status: str = ALL
    score: str = ALL
    decision: str = ALL
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    sort: str = DEFAULT_SORT
    descending: bool = True
    page: int = 1
    per_page: int = 20

    def validate(self):
        """Raise FacetError if any value is outside its allowed set."""
        if self.referral not in REFERRAL_FILTERS:
            raise FacetError(f"Invalid referral filter: {self.referral}", 'referral')
        if self.status != ALL and self.status not in APPLICATION_STATUSES:
            raise FacetError(f"Invalid status filter: {self.status}", 'status')
        if self.score not in SCORE_FILTERS:
            raise FacetError(f"Invalid score filter: {self.score}", 'score')
        if self.decision not in DECISION_FILTERS:
            raise FacetError(f"Invalid decision filter: {self.decision}", 'decision')
        if self.sort not in SORT_FIELDS:
            raise FacetError(f"Invalid sort field: {self.sort}", 'sort')
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise FacetError("date_from must not be after date_to", 'date_from')
        if self.page < 1:
            raise FacetError("page must be at least 1", 'page')
        if not 1 <= self.per_page <= MAX_PER_PAGE:
            raise FacetError(f"per_page must be between 1 and {MAX_PER_PAGE}", 'per_page')
        return self


def _int_arg(args, name, default):
    raw = args.get(name)
    if raw is None or str(raw).strip() == '':
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise FacetError(f"{name} must be an integer", name)


def _date_arg(args, name):
    try:
        return parse_iso_date(args.get(name))
    except ValueError:
        raise FacetError(f"{name} must be a date in YYYY-MM-DD format", name)


def parse_filters(args: Mapping[str, Any], default_per_page: int = 20) -> ApplicantFilters:
    """
    Build validated filters from request query parameters.

    Raises:
        FacetError: On any invalid parameter
    """
    order = (args.get('order') or 'desc').lower()
    if order not in ('asc', 'desc'):
        raise FacetError(f"Invalid sort order: {order}", 'order')

    filters = ApplicantFilters(
        query=args.get('q') or '',
        referral=args.get('referral') or ALL,
        status=args.get('status') or ALL,
        score=args.get('score') or ALL,
        decision=args.get('decision') or ALL,
        date_from=_date_arg(args, 'date_from'),
        date_to=_date_arg(args, 'date_to'),
        sort=args.get('sort') or DEFAULT_SORT,
        descending=order == 'desc',
        page=_int_arg(args, 'page', 1),
        per_page=_int_arg(args, 'per_page', min(default_per_page, MAX_PER_PAGE)),
    )
    return filters.validate()


def score_percentage(overall_score: Optional[float]) -> Optional[int]:
    """Score out of MAX_SCORE as a whole percentage, halves rounded up."""
    if overall_score is None:
        return None
    return int(math.floor(overall_score / MAX_SCORE * 100 + 0.5))


def has_referral(row: Mapping[str, Any]) -> bool:
    name = row.get('referral_name')
    return bool(name and name.strip())


def _in_score_band(row, band):
    percentage = score_percentage(row.get('overall_score'))
    if percentage is None:
        return False
    if band == SCORE_BELOW_50:
        return percentage < 50
    return percentage >= SCORE_BANDS[band]


def _has_no_decision(row):
    decision = row.get('decision')
    return not decision or not decision.strip()


def apply_facets(rows: List[Dict[str, Any]], filters: ApplicantFilters, tz) -> List[Dict[str, Any]]:
    """
    Keep the rows that pass every active facet.

    Args:
        rows: Applicant rows with 'application_date' as a naive UTC datetime
        filters: Validated ApplicantFilters
        tz: Time zone the date range is expressed in

    Returns:
        list: Matching rows, original order preserved
    """
    result = list(rows)

    if filters.referral == 'with-referral':
        result = [row for row in result if has_referral(row)]
    elif filters.referral == 'without-referral':
        result = [row for row in result if not has_referral(row)]

    if filters.status != ALL:
        result = [row for row in result if row.get('application_status') == filters.status]

    if filters.score != ALL:
        result = [row for row in result if _in_score_band(row, filters.score)]

    if filters.decision == NO_DECISION:
        result = [row for row in result if _has_no_decision(row)]
    elif filters.decision != ALL:
        result = [row for row in result if row.get('decision') == filters.decision]

    if filters.date_from or filters.date_to:
        start, end = local_day_bounds(filters.date_from, filters.date_to, tz)

        def in_range(row):
            applied = ensure_utc(row.get('application_date'))
            if applied is None:
                return False
            if start is not None and applied < start:
                return False
            if end is not None and applied > end:
                return False
            return True

        result = [row for row in result if in_range(row)]

    return result


def sort_rows(rows: List[Dict[str, Any]], sort: str = DEFAULT_SORT,
              descending: bool = True) -> List[Dict[str, Any]]:
    """
    Sort rows and stamp each with its 1-based 'rank'.

    Rows without a value for the sort key (no score, no date) always go
    last. For 'referral', ascending puts referred applicants first.
    """
    if sort == 'referral':
        ordered = sorted(rows, key=lambda row: 0 if has_referral(row) else 1,
                         reverse=descending)
    elif sort == 'full_name':
        ordered = sorted(rows, key=lambda row: (row.get('full_name') or '').lower(),
                         reverse=descending)
    elif sort == 'application_status':
        ordered = sorted(rows, key=lambda row: row.get('application_status') or '',
                         reverse=descending)
    else:
        key = 'overall_score' if sort == 'overall_score' else 'application_date'
        present = [row for row in rows if row.get(key) is not None]
        missing = [row for row in rows if row.get(key) is None]
        ordered = sorted(present, key=lambda row: row[key], reverse=descending) + missing

    for rank, row in enumerate(ordered, start=1):
        row['rank'] = rank
    return ordered


def paginate(rows: List[Any], page: int, per_page: int) -> Tuple[List[Any], Dict[str, Any]]:
    """Slice one page out of rows; pagination keys mirror Flask-SQLAlchemy's."""
    # Rows are already filtered in Python, so Query.paginate() cannot be used
    total = len(rows)
    pages = max(1, math.ceil(total / per_page))
    start = (page - 1) * per_page
    return rows[start:start + per_page], {
        'page': page,
        'per_page': per_page,
        'pages': pages,
        'total': total,
        'has_next': page < pages,
        'has_prev': page > 1,
    }
