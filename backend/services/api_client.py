"""
HTTP client for the materials API.

Failures are translated into three distinct error types so callers can
branch on them:

    APIError      - the server answered with a non-2xx status
    NetworkError  - the request was sent but no response arrived
    RequestError  - the request could not be constructed
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from .material_filters import MaterialFilters

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """Base class for client-side API failures"""


class APIError(ApiClientError):
    def __init__(self, message: str, status: int, code: str = '', details: Any = '',
                 data: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.details = details
        self.data = data


class NetworkError(ApiClientError):
    def __init__(self, message: str = 'Network error - no response received from server'):
        super().__init__(message)


class RequestError(ApiClientError):
    def __init__(self, reason: str):
        super().__init__(f"Request error: {reason}")


def _error_fields(body: Any):
    """Pull (message, code, details) out of an error body, tolerating both error shapes."""
    if not isinstance(body, dict):
        return 'An error occurred', '', ''

    error = body.get('error')
    code = body.get('code') or ''
    message = body.get('message')
    if isinstance(error, dict):
        message = message or error.get('message')
        code = code or error.get('code') or ''
    elif isinstance(error, str):
        message = message or error
    return message or 'An error occurred', code, body.get('details') or ''


class MaterialsApiClient:
    """
    Thin wrapper over requests.Session for /materials endpoints.

    No retries: a failed call is logged and raised once.
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        })

    @classmethod
    def from_config(cls, config, **kwargs) -> 'MaterialsApiClient':
        """Build from a config class (see config.get_config)."""
        return cls(config.API_BASE_URL, **kwargs)

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.error("Network error calling %s %s: %s", method, url, e)
            raise NetworkError() from e
        except (requests.exceptions.RequestException, ValueError, TypeError) as e:
            logger.error("Request error for %s %s: %s", method, url, e)
            raise RequestError(str(e)) from e

        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = None
            message, code, details = _error_fields(body)
            logger.error("API error %s from %s %s: %s", response.status_code, method, url, message)
            raise APIError(message, response.status_code, code=code, details=details, data=body)

        return response

    @staticmethod
    def _data(response: requests.Response):
        body = response.json()
        if isinstance(body, dict) and 'data' in body:
            return body['data']
        return body

    def fetch_materials(self, filters: Optional[MaterialFilters] = None) -> List[Dict[str, Any]]:
        params = filters.to_params() if filters is not None else None
        data = self._data(self._request('GET', '/materials', params=params))
        if isinstance(data, dict):
            return data.get('materials', [])
        return data

    def create_material(self, material: Dict[str, Any]) -> Dict[str, Any]:
        return self._data(self._request('POST', '/materials', json=material))

    def delete_material(self, material_id: str) -> None:
        self._request('DELETE', f'/materials/{material_id}')

    def list_categories(self) -> List[Dict[str, Any]]:
        data = self._data(self._request('GET', '/categories'))
        return data.get('categories', []) if isinstance(data, dict) else data
