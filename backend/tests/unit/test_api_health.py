"""
Health check API tests
"""

import pytest
from unittest.mock import patch


class TestHealthEndpoint:
    """Liveness probe"""

    def test_health_check_returns_ok(self, client):
        """Health check reports ok"""
        response = client.get('/health')

        assert response.status_code == 200
        data = response.get_json()
        assert data['status'] == 'ok'
        assert 'message' in data

    def test_health_check_response_format(self, client):
        """Health check payload shape"""
        response = client.get('/health')

        data = response.get_json()
        assert isinstance(data, dict)
        assert 'status' in data
        assert 'timestamp' in data


class TestDatabaseHealthEndpoint:
    """Database connectivity probe"""

    def test_db_health_connected(self, client):
        """A reachable database reports connected"""
        response = client.get('/health/db')

        assert response.status_code == 200
        assert response.get_json() == {'status': 'ok', 'database': 'connected'}

    def test_db_health_disconnected(self, client, store):
        """A failing ping reports disconnected with a 500"""
        with patch.object(store, 'ping', side_effect=RuntimeError('connection refused')):
            response = client.get('/health/db')

        assert response.status_code == 500
        data = response.get_json()
        assert data['status'] == 'error'
        assert data['database'] == 'disconnected'
        assert 'connection refused' in data['error']
