"""
Material filter translation.

Turns the optional `searchQuery`, `subject`, `semester` and `type` inputs into
either a SQLAlchemy predicate (server) or an in-memory predicate over
view-model dicts (client). Both follow the same rules.
"""
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from sqlalchemy import or_

TYPE_ALL = 'ALL'


@dataclass(frozen=True)
class MaterialFilters:
    """Active filter set; empty values impose no constraint."""
    search_query: str = ''
    subject: str = ''
    semester: Optional[int] = None
    type: str = TYPE_ALL

    @property
    def is_active(self) -> bool:
        return bool(self.search_query or self.subject or self.semester is not None
                    or self.type != TYPE_ALL)

    def apply(self, query):
        """Add the filter predicate to a Material query."""
        from models import Material, Category

        if self.search_query:
            pattern = f"%{_escape_like(self.search_query)}%"
            query = query.filter(or_(
                Material.title.ilike(pattern, escape='\\'),
                Material.description.ilike(pattern, escape='\\'),
            ))
        if self.subject:
            query = query.filter(Material.category.has(Category.name == self.subject))
        if self.semester is not None:
            query = query.filter(Material.semester == self.semester)
        if self.type != TYPE_ALL:
            query = query.filter(Material.type == self.type)
        return query

    def matches(self, material: Mapping[str, Any]) -> bool:
        """Evaluate the predicate against a view-model dict."""
        if self.search_query:
            needle = self.search_query.lower()
            title = (material.get('title') or '').lower()
            description = (material.get('description') or '').lower()
            if needle not in title and needle not in description:
                return False
        if self.subject and material.get('subject') != self.subject:
            return False
        if self.semester is not None and material.get('semester') != self.semester:
            return False
        if self.type != TYPE_ALL and material.get('type') != self.type:
            return False
        return True

    def to_params(self) -> Dict[str, str]:
        """Query-string parameters for GET /api/materials (inactive filters omitted)."""
        params = {}
        if self.search_query:
            params['searchQuery'] = self.search_query
        if self.subject:
            params['subject'] = self.subject
        if self.semester is not None:
            params['semester'] = str(self.semester)
        if self.type != TYPE_ALL:
            params['type'] = self.type
        return params


def _escape_like(value: str) -> str:
    return value.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


def _clean(value) -> str:
    if value is None:
        return ''
    return str(value).strip()


def parse_semester(value) -> Tuple[Optional[int], bool]:
    """
    Parse a semester value.

    Returns (semester, ok). Empty input gives (None, True); anything that is not
    an integer gives (None, False). Booleans and fractional numbers are rejected.
    """
    if value is None or isinstance(value, bool):
        return None, value is None
    if isinstance(value, int):
        return value, True
    if isinstance(value, float):
        return (int(value), True) if value.is_integer() else (None, False)
    raw = _clean(value)
    if not raw:
        return None, True
    try:
        return int(raw), True
    except ValueError:
        return None, False


def parse_filters(args: Mapping[str, Any]):
    """
    Build MaterialFilters from a query-string style mapping.

    Returns:
        (filters, None) on success, or (None, error_info) where error_info is a
        dict with `code`, `message` and extra fields for the error response.
    """
    semester_raw = args.get('semester')
    semester, ok = parse_semester(semester_raw)
    if not ok:
        return None, {
            'code': 'INVALID_SEMESTER',
            'message': f"semester must be an integer, got {semester_raw!r}",
            'allowed': '1-8',
        }

    type_value = _clean(args.get('type')) or TYPE_ALL

    return MaterialFilters(
        search_query=str(args.get('searchQuery') or ''),
        subject=_clean(args.get('subject')),
        semester=semester,
        type=type_value,
    ), None
