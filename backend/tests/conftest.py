"""
pytest configuration - shared fixtures for all backend tests
"""

import os
import sys
import shutil
import pytest
import tempfile
from pathlib import Path

# Make the backend directory importable
backend_path = Path(__file__).parent.parent
sys.path.insert(0, str(backend_path))

# Must be set before importing app
os.environ['TESTING'] = 'true'
os.environ['FLASK_ENV'] = 'testing'


@pytest.fixture(scope='session')
def app():
    """Create the Flask test application"""
    temp_dir = tempfile.mkdtemp()
    temp_db = os.path.join(temp_dir, 'test.db')

    from app import create_app

    test_app = create_app('testing', test_config={
        'SQLALCHEMY_DATABASE_URI': f'sqlite:///{temp_db}',
        'EXPOSE_ERROR_DETAILS': False,
    })

    with test_app.app_context():
        from models import db
        db.create_all()

    yield test_app

    with test_app.app_context():
        from models import db
        db.session.remove()
        db.engine.dispose()
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture(scope='function')
def client(app):
    """Create a test client with empty tables"""
    with app.test_client() as test_client:
        with app.app_context():
            from models import db
            # Wipe data so every test starts clean
            db.session.rollback()
            for table in reversed(db.metadata.sorted_tables):
                db.session.execute(table.delete())
            db.session.commit()
            yield test_client
            db.session.rollback()


@pytest.fixture
def store(app, client):
    """The MaterialStore registered on the app"""
    from services.material_store import EXTENSION_KEY
    return app.extensions[EXTENSION_KEY]


@pytest.fixture
def material_payload():
    """A valid create-material body"""
    return {
        'title': 'Data Structures',
        'description': 'Trees, graphs and hashing',
        'link': 'https://example.com/ds.pdf',
        'type': 'PDF',
        'author': 'Prof. Rao',
        'semester': 3,
        'subject': 'CSE',
        'tags': ['trees', 'graphs'],
    }


@pytest.fixture
def create_material(client, material_payload):
    """Factory: POST a material (overriding fields) and return its view-model"""
    def _create(**overrides):
        body = {**material_payload, **overrides}
        response = client.post('/api/materials', json=body)
        assert response.status_code == 201, response.get_json()
        return response.get_json()['data']
    return _create


# =====================================
# Test helpers
# =====================================

def assert_success_response(response, status_code=200):
    """Assert a successful envelope"""
    assert response.status_code == status_code
    data = response.get_json()
    assert data is not None
    assert data.get('success') is True
    return data


def assert_error_response(response, expected_status=None, expected_code=None):
    """Assert an error envelope"""
    if expected_status:
        assert response.status_code == expected_status
    data = response.get_json()
    assert data is not None
    assert data.get('success') is False or 'error' in data
    if expected_code:
        assert data['error']['code'] == expected_code
    return data
