"""
In-process transport for the storefront client.

When the homepage is rendered by the same application that serves the
storefront API, the renderer's requests are answered by the app itself
through its test client instead of a loopback HTTP connection. A single
worker never waits on a request that only it could serve.
"""
from urllib.parse import urlsplit

import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

IN_PROCESS_URL = 'http://storefront.internal'


class AppAdapter(BaseAdapter):
    """requests adapter that dispatches to a Flask application's routes"""

    def __init__(self, app=None, test_client=None):
        super().__init__()
        self.test_client = test_client or app.test_client()

    def send(self, request, **kwargs):
        url = urlsplit(request.url)
        result = self.test_client.open(
            url.path,
            method=request.method,
            query_string=url.query,
            headers=dict(request.headers),
            data=request.body
        )

        response = requests.Response()
        response.status_code = result.status_code
        response.reason = result.status.partition(' ')[2]
        response.headers = CaseInsensitiveDict(result.headers)
        response._content = result.get_data()
        response.encoding = 'utf-8'
        response.url = request.url
        response.request = request
        result.close()
        return response

    def close(self):
        pass


def in_process_session(app):
    """Session whose requests to IN_PROCESS_URL are served by ``app``"""
    session = requests.Session()
    session.mount(IN_PROCESS_URL, AppAdapter(app))
    return session
