"""
Create-material validation shared by the REST endpoint and the no-backend
material source.
"""
from typing import Any, Dict, Mapping

from models import MATERIAL_TYPES, SEMESTER_RANGE
from .material_filters import parse_semester

REQUIRED_FIELDS = ['title', 'link', 'type', 'author', 'semester', 'subject']

# Column sizes in models/
FIELD_MAX_LENGTHS = {
    'title': 255,
    'author': 255,
    'link': 2048,
    'subject': 100,
}


class InvalidMaterialError(ValueError):
    """A material payload was rejected; carries the same info as the 400 response."""

    def __init__(self, error_info: Dict[str, Any]):
        super().__init__(error_info['message'])
        self.code = error_info['code']
        self.error_info = error_info


def _is_missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _error(code: str, message: str, **extra) -> Dict[str, Any]:
    return {'code': code, 'message': message, **extra}


def validate_material_payload(data: Mapping[str, Any]):
    """
    Validate and normalize a create-material body.

    Returns:
        (payload, None) with a trimmed payload and an integer semester, or
        (None, error_info) where error_info holds `code`, `message` and the
        extra fields for the error response.
    """
    missing = [field for field in REQUIRED_FIELDS if _is_missing(data.get(field))]
    if missing:
        return None, _error(
            'MISSING_FIELDS',
            f"Missing required fields: {', '.join(missing)}",
            required=REQUIRED_FIELDS,
            missing=missing,
        )

    material_type = data['type']
    if material_type not in MATERIAL_TYPES:
        return None, _error(
            'INVALID_TYPE',
            f"Invalid type {material_type!r}",
            allowed=list(MATERIAL_TYPES),
        )

    low, high = SEMESTER_RANGE
    semester, ok = parse_semester(data['semester'])
    if not ok or semester is None or not low <= semester <= high:
        return None, _error(
            'INVALID_SEMESTER',
            f"Invalid semester {data['semester']!r}",
            allowed=f"{low}-{high}",
        )

    tags = data.get('tags') or []
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        return None, _error('INVALID_TAGS', "tags must be an array of strings")

    description = data.get('description')
    if description is not None and not isinstance(description, str):
        return None, _error('INVALID_REQUEST', "description must be a string")

    for field in ('title', 'link', 'author', 'subject'):
        if not isinstance(data[field], str):
            return None, _error('INVALID_REQUEST', f"{field} must be a string")

    payload = {
        'title': data['title'].strip(),
        'description': description or '',
        'link': data['link'].strip(),
        'type': material_type,
        'author': data['author'].strip(),
        'semester': semester,
        'subject': data['subject'].strip(),
        'tags': list(tags),
    }

    for field, max_length in FIELD_MAX_LENGTHS.items():
        if len(payload[field]) > max_length:
            return None, _error(
                'FIELD_TOO_LONG',
                f"{field} must be at most {max_length} characters",
                field=field,
                max_length=max_length,
            )

    return payload, None
