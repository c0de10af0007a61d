"""
Materials API client tests (HTTP transport is mocked)
"""

import pytest
import requests
from unittest.mock import MagicMock

from services.api_client import (
    MaterialsApiClient, APIError, NetworkError, RequestError, ApiClientError
)
from services.material_filters import MaterialFilters


def _response(status_code, body=None):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if body is None:
        response.json.side_effect = ValueError('no body')
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session


@pytest.fixture
def api(session):
    return MaterialsApiClient('http://localhost:3001/api/', session=session)


class TestRequests:
    """Successful calls"""

    def test_json_headers(self, api, session):
        assert session.headers['Content-Type'] == 'application/json'

    def test_fetch_materials_with_filters(self, api, session):
        session.request.return_value = _response(200, {
            'success': True, 'data': {'materials': [{'id': '1'}], 'count': 1}
        })

        result = api.fetch_materials(MaterialFilters(subject='CSE', semester=3))

        assert result == [{'id': '1'}]
        session.request.assert_called_once_with(
            'GET', 'http://localhost:3001/api/materials',
            timeout=None, params={'subject': 'CSE', 'semester': '3'}
        )

    def test_create_material(self, api, session):
        session.request.return_value = _response(201, {'success': True, 'data': {'id': 'new'}})

        assert api.create_material({'title': 'x'}) == {'id': 'new'}
        assert session.request.call_args.kwargs['json'] == {'title': 'x'}

    def test_delete_material(self, api, session):
        session.request.return_value = _response(204)

        api.delete_material('abc')

        session.request.assert_called_once_with(
            'DELETE', 'http://localhost:3001/api/materials/abc', timeout=None
        )


class TestErrorTranslation:
    """Server, network and request failures map to distinct errors"""

    def test_server_error_status(self, api, session):
        session.request.return_value = _response(400, {
            'success': False,
            'error': {'code': 'INVALID_TYPE', 'message': 'Invalid type'},
            'allowed': ['PDF', 'VIDEO'],
        })

        with pytest.raises(APIError) as exc_info:
            api.create_material({'type': 'AUDIO'})

        error = exc_info.value
        assert error.status == 400
        assert error.code == 'INVALID_TYPE'
        assert str(error) == 'Invalid type'
        assert error.data['allowed'] == ['PDF', 'VIDEO']

    def test_flat_error_body(self, api, session):
        session.request.return_value = _response(500, {'error': 'Failed to delete material',
                                                       'details': 'trace'})

        with pytest.raises(APIError) as exc_info:
            api.delete_material('x')

        assert exc_info.value.message == 'Failed to delete material'
        assert exc_info.value.details == 'trace'

    def test_error_without_body(self, api, session):
        session.request.return_value = _response(502)

        with pytest.raises(APIError) as exc_info:
            api.fetch_materials()

        assert exc_info.value.message == 'An error occurred'

    @pytest.mark.parametrize('exc', [
        requests.exceptions.ConnectionError('refused'),
        requests.exceptions.Timeout('slow'),
    ])
    def test_no_response_is_network_error(self, api, session, exc):
        session.request.side_effect = exc

        with pytest.raises(NetworkError):
            api.fetch_materials()

    def test_unbuildable_request_is_request_error(self, api, session):
        session.request.side_effect = requests.exceptions.InvalidURL('bad url')

        with pytest.raises(RequestError) as exc_info:
            api.fetch_materials()

        assert 'bad url' in str(exc_info.value)

    def test_errors_share_a_base_class(self):
        for cls in (APIError, NetworkError, RequestError):
            assert issubclass(cls, ApiClientError)

    def test_no_retry(self, api, session):
        session.request.side_effect = requests.exceptions.ConnectionError('refused')

        with pytest.raises(NetworkError):
            api.fetch_materials()

        assert session.request.call_count == 1
