"""Shared fixtures for the storefront backend and homepage renderer tests.

The application runs on :class:`config.TestingConfig` (in-memory SQLite).
``storefront`` returns a :class:`homepage.client.StorefrontClient` whose
``requests`` session is mounted on :class:`FlaskTestAdapter`, so renderer
calls travel through the real Flask routes without touching the network.
"""

from urllib.parse import urlsplit

import pytest
import requests

from app import create_app
from config import TestingConfig
from homepage.client import StorefrontClient
from homepage.renderer import clear_template_cache
from homepage.transport import AppAdapter
from models import db, Category, Product, Slider, Subcategory, Brand, HomepageSection


STOREFRONT_URL = 'http://storefront.test'


class FlaskTestAdapter(AppAdapter):
    """In-process transport with failure injection.

    Paths listed in ``fail_paths`` raise ``ConnectionError`` without reaching
    the app, and every requested path is recorded in ``calls``.
    """

    def __init__(self, test_client, fail_paths=()):
        super().__init__(test_client=test_client)
        self.fail_paths = list(fail_paths)
        self.calls = []

    def send(self, request, **kwargs):
        url = urlsplit(request.url)
        self.calls.append(url.path)
        if any(url.path.startswith(path) for path in self.fail_paths):
            raise requests.ConnectionError(f"connection refused: {url.path}")
        return super().send(request, **kwargs)


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers():
    return {'X-API-Key': TestingConfig.API_KEY, 'X-API-Secret': TestingConfig.API_SECRET}


@pytest.fixture(autouse=True)
def fresh_template_cache():
    clear_template_cache()
    yield
    clear_template_cache()


@pytest.fixture
def storefront_adapter(app):
    # Separate test client: the page route calls back into the app mid-request
    return FlaskTestAdapter(app.test_client())


@pytest.fixture
def storefront_session(storefront_adapter):
    session = requests.Session()
    session.mount(STOREFRONT_URL, storefront_adapter)
    return session


@pytest.fixture
def storefront(storefront_session):
    return StorefrontClient(STOREFRONT_URL, session=storefront_session, timeout=2)


@pytest.fixture
def make_section(app):
    """Persist a homepage section; active and published unless told otherwise"""
    def _make(name, section_type, config=None, **fields):
        fields.setdefault('is_active', True)
        fields.setdefault('is_published', True)
        fields.setdefault('ordering', HomepageSection.next_ordering())
        section = HomepageSection(name=name, type=section_type, config=config or {}, **fields)
        db.session.add(section)
        db.session.commit()
        return section
    return _make


@pytest.fixture
def make_category(app):
    def _make(name, **fields):
        category = Category(name=name, **fields)
        db.session.add(category)
        db.session.commit()
        return category
    return _make


@pytest.fixture
def make_subcategory(app):
    def _make(name, **fields):
        subcategory = Subcategory(name=name, **fields)
        db.session.add(subcategory)
        db.session.commit()
        return subcategory
    return _make


@pytest.fixture
def make_product(app):
    def _make(name, price=100, **fields):
        product = Product(name=name, price=price, **fields)
        db.session.add(product)
        db.session.commit()
        return product
    return _make


@pytest.fixture
def make_slider(app):
    def _make(title, **fields):
        slider = Slider(title=title, **fields)
        db.session.add(slider)
        db.session.commit()
        return slider
    return _make


@pytest.fixture
def make_brand(app):
    def _make(name, **fields):
        brand = Brand(name=name, **fields)
        db.session.add(brand)
        db.session.commit()
        return brand
    return _make
