"""HTTP client for the timeline API."""

import os

import httpx

DEFAULT_BASE_URL = 'http://localhost:5000'


class APIRequestError(Exception):
    """A request that did not produce a usable 2xx JSON response."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TimelineAPI:
    """Thin wrapper over ``httpx.Client``; one method per endpoint."""

    def __init__(self, base_url=None, token=None, *, timeout=10.0, transport=None):
        self.base_url = (base_url or os.environ.get('TIMELINE_API_URL') or DEFAULT_BASE_URL).rstrip('/')
        self.token = token
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    def _get_headers(self, skip_auth=False):
        headers = {'Accept': 'application/json'}
        if self.token and not skip_auth:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def request(self, method, path, *, json=None, skip_auth=False):
        """Make a request and return the decoded JSON body.

        No retries: every failure is raised as APIRequestError.
        """
        try:
            response = self._client.request(method, path, json=json, headers=self._get_headers(skip_auth=skip_auth))
        except httpx.HTTPError as e:
            raise APIRequestError(f'Network error: {e}') from e

        if response.is_error:
            message = f'HTTP {response.status_code}'
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get('error'):
                message = body['error']
            raise APIRequestError(message, response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise APIRequestError('Invalid JSON response', response.status_code) from e

    def login(self, username, password):
        return self.request(
            'POST',
            '/api/auth/login',
            json={'username': username, 'password': password},
            skip_auth=True,
        )

    def list_tasks(self):
        data = self.request('GET', '/api/tasks')
        if not isinstance(data, list):
            raise APIRequestError('Unexpected task list payload')
        return data

    def create_task(self, payload):
        return self.request('POST', '/api/tasks', json=payload)

    def update_task(self, task_id, payload):
        return self.request('PUT', f'/api/tasks/{task_id}', json=payload)

    def delete_task(self, task_id):
        return self.request('DELETE', f'/api/tasks/{task_id}')
