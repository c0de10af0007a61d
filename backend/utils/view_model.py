"""
Material view-model mapping.

The single place where a stored material (ORM instance or raw row mapping)
is flattened into the shape clients consume.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Mapping


def _field(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def _subject_of(record: Any) -> Any:
    category = _field(record, 'category')
    if category is not None:
        if isinstance(category, str):
            return category
        return _field(category, 'name')
    subject = _field(record, 'subject')
    if subject is not None:
        return subject
    return _field(record, 'category_id')


def format_timestamp(value: Any) -> str | None:
    """
    Render a creation timestamp as an ISO-8601 string.

    Stored timestamps are naive UTC; they are rendered with an explicit offset.
    Strings are passed through unchanged.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    return str(value)


def to_view_model(record: Any) -> Dict[str, Any]:
    """
    Map a stored material to the client shape.

    `record` may be a Material instance or a mapping using storage names
    (file_url, created_at, category/subject). Only renaming and flattening
    happens here: nothing is added or dropped.
    """
    link = _field(record, 'file_url')
    if link is None:
        link = _field(record, 'link')
    created_at = _field(record, 'created_at')
    if created_at is None:
        created_at = _field(record, 'uploadDate')

    return {
        'id': _field(record, 'id'),
        'title': _field(record, 'title'),
        'description': _field(record, 'description') or '',
        'subject': _subject_of(record),
        'semester': _field(record, 'semester'),
        'type': _field(record, 'type'),
        'link': link,
        'tags': list(_field(record, 'tags') or []),
        'uploadDate': format_timestamp(created_at),
        'author': _field(record, 'author'),
    }
