"""
Local key/value storage tests
"""

import pytest

from services.local_storage import MemoryKeyValueStore, JsonFileKeyValueStore


@pytest.fixture(params=['memory', 'file'])
def kv_store(request, tmp_path):
    if request.param == 'memory':
        return MemoryKeyValueStore()
    return JsonFileKeyValueStore(tmp_path / 'storage.json')


class TestKeyValueStore:
    """Both store implementations behave alike"""

    def test_get_default(self, kv_store):
        assert kv_store.get('favorites', []) == []

    def test_default_is_not_shared(self, kv_store):
        default = []
        kv_store.get('favorites', default).append('x')
        assert default == []

    def test_set_and_get(self, kv_store):
        kv_store.set('downloads', {'a': 1})
        assert kv_store.get('downloads') == {'a': 1}

    def test_last_write_wins(self, kv_store):
        kv_store.set('darkMode', True)
        kv_store.set('darkMode', False)
        assert kv_store.get('darkMode') is False

    def test_remove(self, kv_store):
        kv_store.set('isLoggedIn', True)
        kv_store.remove('isLoggedIn')
        kv_store.remove('isLoggedIn')
        assert kv_store.get('isLoggedIn') is None


class TestJsonFileKeyValueStore:
    """File-backed store"""

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / 'nested' / 'storage.json'
        JsonFileKeyValueStore(path).set('favorites', ['a'])

        assert JsonFileKeyValueStore(path).get('favorites') == ['a']

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / 'storage.json'
        path.write_text('{not json', encoding='utf-8')
        store = JsonFileKeyValueStore(path)

        assert store.get('favorites', []) == []
        store.set('favorites', ['b'])
        assert store.get('favorites') == ['b']
