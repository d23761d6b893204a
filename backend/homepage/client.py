import logging
import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 8.0


class FetchError(Exception):
    """A storefront request failed (network, HTTP status or body)"""

    def __init__(self, path, message, status_code=None):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.status_code = status_code


class StorefrontClient:
    """
    Thin requests wrapper used by the homepage renderer.

    Paths are relative to the storefront root (``/api/...`` for JSON
    endpoints, ``/home-sections/...`` for templates). Every call carries
    an explicit timeout; a timeout is reported like any other failure.
    """

    def __init__(self, base_url, session=None, timeout=DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def url_for(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    def _get(self, path, params=None):
        try:
            response = self.session.get(self.url_for(path), params=params, timeout=self.timeout)
        except requests.Timeout:
            raise FetchError(path, f"timed out after {self.timeout}s")
        except requests.RequestException as e:
            raise FetchError(path, str(e))

        if not response.ok:
            raise FetchError(path, f"HTTP {response.status_code} {response.reason or ''}".strip(), response.status_code)
        return response

    def get_json(self, path, params=None):
        response = self._get(path, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise FetchError(path, f"invalid JSON body ({e})", response.status_code)

    def get_text(self, path):
        return self._get(path).text

    # Storefront endpoints

    def public_sections(self):
        return self.get_json('/api/homepage-sections/public')

    def section_data(self, section_id):
        return self.get_json(f'/api/homepage-sections/{section_id}/data/public')

    def products(self, **params):
        return self.get_json('/api/products', params=params)

    def categories(self, **params):
        return self.get_json('/api/categories', params=params)

    def sliders(self):
        return self.get_json('/api/sliders')

    def template(self, template_name):
        return self.get_text(f'/home-sections/{template_name}')
