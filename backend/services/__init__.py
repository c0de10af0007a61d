"""Services package"""
from .material_filters import MaterialFilters, parse_filters
from .material_store import MaterialStore, get_material_store
from .api_client import MaterialsApiClient, ApiClientError, APIError, NetworkError, RequestError
from .local_storage import KeyValueStore, MemoryKeyValueStore, JsonFileKeyValueStore
from .material_validation import InvalidMaterialError, validate_material_payload
from .catalog_state import (
    MaterialCatalog, MaterialNotFoundError, RemoteMaterialSource, LocalMaterialSource,
    Favorites, DownloadCounter, Preferences, filter_materials, sort_materials
)

__all__ = [
    'MaterialFilters', 'parse_filters', 'MaterialStore', 'get_material_store',
    'MaterialsApiClient', 'ApiClientError', 'APIError', 'NetworkError', 'RequestError',
    'KeyValueStore', 'MemoryKeyValueStore', 'JsonFileKeyValueStore',
    'InvalidMaterialError', 'validate_material_payload',
    'MaterialCatalog', 'MaterialNotFoundError', 'RemoteMaterialSource', 'LocalMaterialSource',
    'Favorites', 'DownloadCounter', 'Preferences', 'filter_materials', 'sort_materials',
]
