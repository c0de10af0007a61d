"""
Client derived state for the material catalog.

Works on view-model dicts (see utils.view_model). The full list is loaded
once from a material source; filtering and sorting happen in memory, and
favorites / download counters / preferences live in a KeyValueStore that is
never shared with the server.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

from utils.view_model import to_view_model
from .api_client import APIError
from .local_storage import (
    KeyValueStore, LOGIN_KEY, DARK_MODE_KEY, MATERIALS_KEY, FAVORITES_KEY, DOWNLOADS_KEY
)
from .material_filters import MaterialFilters
from .material_validation import InvalidMaterialError, validate_material_payload

logger = logging.getLogger(__name__)

SORT_DATE = 'date'
SORT_TITLE = 'title'
SORT_DOWNLOADS = 'downloads'
SORT_OPTIONS = (SORT_DATE, SORT_TITLE, SORT_DOWNLOADS)


class MaterialNotFoundError(KeyError):
    """No material with the given id, whichever source was asked."""


# ----------------------------------------------------------------------
# Filtering & sorting
# ----------------------------------------------------------------------

def filter_materials(materials: Iterable[Dict[str, Any]],
                     filters: Optional[MaterialFilters]) -> List[Dict[str, Any]]:
    if filters is None:
        return list(materials)
    return [material for material in materials if filters.matches(material)]


def _upload_timestamp(material: Dict[str, Any]) -> float:
    raw = material.get('uploadDate')
    if not raw:
        return float('-inf')
    try:
        parsed = datetime.fromisoformat(str(raw).replace('Z', '+00:00'))
    except ValueError:
        return float('-inf')
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def sort_materials(materials: Iterable[Dict[str, Any]], sort_by: str = SORT_DATE,
                   downloads: Optional[Dict[str, int]] = None) -> List[Dict[str, Any]]:
    """
    Sort a copy of `materials`.

    date      - most recent uploadDate first
    title     - title ascending
    downloads - highest local download count first
    Ties keep their input order.
    """
    if sort_by not in SORT_OPTIONS:
        raise ValueError(f"Unknown sort option {sort_by!r}; expected one of {SORT_OPTIONS}")

    items = list(materials)
    if sort_by == SORT_DATE:
        return sorted(items, key=_upload_timestamp, reverse=True)
    if sort_by == SORT_DOWNLOADS:
        counts = downloads or {}
        return sorted(items, key=lambda m: -counts.get(m.get('id'), 0))
    return sorted(items, key=lambda m: ((m.get('title') or '').casefold(), m.get('title') or ''))


def add_tag(tags: List[str], tag: str) -> List[str]:
    """Return tags with `tag` appended, unless it is blank or an exact duplicate."""
    tag = (tag or '').strip()
    if not tag or tag in tags:
        return list(tags)
    return [*tags, tag]


def remove_tag(tags: List[str], tag: str) -> List[str]:
    return [t for t in tags if t != tag]


# ----------------------------------------------------------------------
# Local counters & preferences
# ----------------------------------------------------------------------

class Favorites:
    """Favorite material ids, persisted under the `favorites` key."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    @property
    def ids(self) -> List[str]:
        return list(self.store.get(FAVORITES_KEY, []))

    def contains(self, material_id: str) -> bool:
        return material_id in self.ids

    def toggle(self, material_id: str) -> bool:
        """Flip membership; returns True if the id is now a favorite."""
        ids = self.ids
        if material_id in ids:
            ids = [fid for fid in ids if fid != material_id]
            now_favorite = False
        else:
            ids.append(material_id)
            now_favorite = True
        self.store.set(FAVORITES_KEY, ids)
        return now_favorite

    def discard(self, material_id: str) -> None:
        ids = self.ids
        if material_id in ids:
            self.store.set(FAVORITES_KEY, [fid for fid in ids if fid != material_id])


class DownloadCounter:
    """Per-material open counts, persisted under the `downloads` key."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def as_dict(self) -> Dict[str, int]:
        return dict(self.store.get(DOWNLOADS_KEY, {}))

    def count(self, material_id: str) -> int:
        return self.as_dict().get(material_id, 0)

    def increment(self, material_id: str) -> int:
        counts = self.as_dict()
        counts[material_id] = counts.get(material_id, 0) + 1
        self.store.set(DOWNLOADS_KEY, counts)
        return counts[material_id]

    def forget(self, material_id: str) -> None:
        counts = self.as_dict()
        if counts.pop(material_id, None) is not None:
            self.store.set(DOWNLOADS_KEY, counts)


class Preferences:
    """
    Login flag and theme preference.

    The login check compares against a fixed credential pair; it gates the
    admin-only create/edit/delete flow and is not a security mechanism.
    """

    def __init__(self, store: KeyValueStore, admin_user_id: str = 'RRCE',
                 admin_password: str = 'RRCE@Study'):
        self.store = store
        self._admin_user_id = admin_user_id
        self._admin_password = admin_password

    @classmethod
    def from_config(cls, store: KeyValueStore, config) -> 'Preferences':
        """Build from a config class (see config.get_config)."""
        return cls(store, config.ADMIN_USER_ID, config.ADMIN_PASSWORD)

    @property
    def is_logged_in(self) -> bool:
        return self.store.get(LOGIN_KEY, False) is True

    def login(self, user_id: str, password: str) -> bool:
        if user_id == self._admin_user_id and password == self._admin_password:
            self.store.set(LOGIN_KEY, True)
            return True
        logger.info("Rejected admin login for %r", user_id)
        return False

    def logout(self) -> None:
        self.store.remove(LOGIN_KEY)

    @property
    def dark_mode(self) -> bool:
        return self.store.get(DARK_MODE_KEY, False) is True

    def toggle_dark_mode(self) -> bool:
        value = not self.dark_mode
        self.store.set(DARK_MODE_KEY, value)
        return value


# ----------------------------------------------------------------------
# Material sources
# ----------------------------------------------------------------------

class MaterialSource:
    """
    Where the catalog's material list lives: list / create / delete.

    `create` raises InvalidMaterialError for a rejected payload (remote sources
    surface the server's 400 as APIError instead); `delete` raises
    MaterialNotFoundError for an unknown id.
    """

    def list(self) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def create(self, material: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def delete(self, material_id: str) -> None:
        raise NotImplementedError


class RemoteMaterialSource(MaterialSource):
    """Backed by the REST API through MaterialsApiClient."""

    def __init__(self, api_client):
        self.api_client = api_client

    def list(self):
        return self.api_client.fetch_materials()

    def create(self, material):
        return self.api_client.create_material(material)

    def delete(self, material_id):
        try:
            self.api_client.delete_material(material_id)
        except APIError as e:
            if e.status == 404:
                raise MaterialNotFoundError(material_id) from e
            raise


class LocalMaterialSource(MaterialSource):
    """
    No-backend variant: the whole list is kept under the `materials` key.
    Payloads go through the same checks as POST /api/materials; ids and upload
    dates are assigned here.
    """

    def __init__(self, store: KeyValueStore, clock: Callable[[], datetime] = None):
        self.store = store
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def list(self):
        return list(self.store.get(MATERIALS_KEY, []))

    def create(self, material):
        payload, error = validate_material_payload(material)
        if error:
            logger.warning("Rejected local material: %s", error['message'])
            raise InvalidMaterialError(error)

        record = dict(payload)
        record['id'] = str(uuid.uuid4())
        record['created_at'] = self._clock()
        saved = to_view_model(record)
        self.store.set(MATERIALS_KEY, [*self.list(), saved])
        return saved

    def delete(self, material_id):
        materials = self.list()
        remaining = [m for m in materials if m.get('id') != material_id]
        if len(remaining) == len(materials):
            raise MaterialNotFoundError(material_id)
        self.store.set(MATERIALS_KEY, remaining)


# ----------------------------------------------------------------------
# Catalog
# ----------------------------------------------------------------------

class MaterialCatalog:
    """
    In-memory material list plus the derived views over it.

    Mutations go through the source and then patch the local list; `edit` is
    local-only because the server has no update endpoint, and edited ids are
    tracked in `locally_edited`.
    """

    def __init__(self, source: MaterialSource, store: KeyValueStore):
        self.source = source
        self.favorites = Favorites(store)
        self.downloads = DownloadCounter(store)
        self.materials: List[Dict[str, Any]] = []
        self.locally_edited = set()
        self.loaded = False

    def load(self) -> List[Dict[str, Any]]:
        self.materials = list(self.source.list())
        self.locally_edited.clear()
        self.loaded = True
        logger.debug("Loaded %d materials", len(self.materials))
        return self.materials

    def visible(self, filters: Optional[MaterialFilters] = None,
                sort_by: str = SORT_DATE) -> List[Dict[str, Any]]:
        """Filtered then sorted view of the loaded list."""
        matched = filter_materials(self.materials, filters)
        return sort_materials(matched, sort_by, self.downloads.as_dict())

    def get(self, material_id: str) -> Optional[Dict[str, Any]]:
        for material in self.materials:
            if material.get('id') == material_id:
                return material
        return None

    def add(self, material: Dict[str, Any]) -> Dict[str, Any]:
        saved = self.source.create(material)
        self.materials.append(saved)
        return saved

    def remove(self, material_id: str) -> None:
        self.source.delete(material_id)
        self.materials = [m for m in self.materials if m.get('id') != material_id]
        self.favorites.discard(material_id)
        self.downloads.forget(material_id)
        self.locally_edited.discard(material_id)

    def edit(self, updated: Dict[str, Any]) -> Dict[str, Any]:
        material_id = updated.get('id')
        if self.get(material_id) is None:
            raise MaterialNotFoundError(material_id)
        self.materials = [updated if m.get('id') == material_id else m for m in self.materials]
        self.locally_edited.add(material_id)
        logger.info("Material %s edited locally only; change is not persisted", material_id)
        return updated

    def open_material(self, material_id: str) -> str:
        """Count a local download and return the material's link."""
        material = self.get(material_id)
        if material is None:
            raise MaterialNotFoundError(material_id)
        self.downloads.increment(material_id)
        return material.get('link')

    def toggle_favorite(self, material_id: str) -> bool:
        return self.favorites.toggle(material_id)
