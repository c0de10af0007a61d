"""
MaterialStore tests
"""

import pytest
from sqlalchemy.exc import IntegrityError

from services.material_filters import MaterialFilters


def _payload(**overrides):
    payload = {
        'title': 'Compilers', 'description': '', 'link': 'https://example.com/c.pdf',
        'type': 'PDF', 'author': 'A', 'semester': 6, 'subject': 'CSE', 'tags': [],
    }
    payload.update(overrides)
    return payload


class TestMaterialStore:
    """Storage operations"""

    def test_open_and_close(self, app, store):
        store.open()
        assert store.is_open

        store.close()
        assert not store.is_open

    def test_create_and_list(self, store):
        material = store.create_material(_payload())

        assert material.id
        assert material.user.email == 'default@example.com'
        assert material.category.name == 'CSE'
        assert [m.id for m in store.list_materials()] == [material.id]

    def test_list_with_filters(self, store):
        store.create_material(_payload(subject='CSE'))
        video = store.create_material(_payload(subject='ECE', type='VIDEO'))

        found = store.list_materials(MaterialFilters(type='VIDEO'))
        assert [m.id for m in found] == [video.id]

    def test_constraint_violation_rolls_back_everything(self, store):
        """A database-level rejection leaves no category or user behind"""
        from models import Category, User, Material

        with pytest.raises(IntegrityError):
            store.create_material(_payload(semester=9, subject='NEW'))

        assert Material.query.count() == 0
        assert Category.query.filter_by(name='NEW').count() == 0
        assert User.query.count() == 0

    def test_delete(self, store):
        material = store.create_material(_payload())

        assert store.delete_material(material.id) is True
        assert store.list_materials() == []

    def test_delete_unknown(self, store):
        assert store.delete_material('missing') is False

    def test_get_or_create_category_is_exact_match(self, store):
        first = store.get_or_create_category('CSE')
        again = store.get_or_create_category('CSE')
        other = store.get_or_create_category('CSE ')

        assert first.id == again.id
        assert other.id != first.id
