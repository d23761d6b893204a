"""End-to-end tests: the renderer talking to the real Flask routes.

Requests from :class:`homepage.client.StorefrontClient` are routed into the
application in-process (``FlaskTestAdapter`` or the page route's own
:class:`homepage.transport.AppAdapter`), so these tests exercise the API,
the shipped section templates and the rendering pipeline together.
"""

import pytest
import requests
from bs4 import BeautifulSoup

from homepage.client import StorefrontClient, FetchError
from homepage.renderer import HomepageRenderer, CONTAINER_ID
from homepage.transport import IN_PROCESS_URL, in_process_session


def render(storefront):
    report = HomepageRenderer(storefront).render()
    return report, BeautifulSoup(report.html, 'html.parser').find(id=CONTAINER_ID)


@pytest.fixture
def catalog(make_category, make_product, make_slider, make_subcategory):
    skin = make_category('Skin', image='/skin.jpg')
    make_category('Hair')
    make_product('Serum', price=1500, is_new_arrival=True, image='/serum.jpg', category_id=skin.id)
    make_product('Cleanser', price=900, is_top_selling=True, category_id=skin.id)
    make_slider('Welcome', image='/slide-1.jpg', order=1)
    make_slider('Sale', image='/slide-2.jpg', order=2, link='/sale', button_text='Shop now')
    make_subcategory('Lipsticks', image='/lips.jpg')
    return skin


def test_full_homepage(storefront, make_section, catalog):
    make_section('announcement', 'scrollingText', {'items': ['Free delivery'], 'location': 'top'}, ordering=5)
    make_section('hero', 'heroSlider', {'autoplayInterval': 4000}, ordering=0)
    make_section('categories', 'categoryFeatured', {}, ordering=1, title='Shop by category')
    arrivals = make_section('arrivals', 'newArrivals', {}, ordering=2, title='New arrivals')
    make_section('best', 'topSelling', {'location': f'after-section-{arrivals.id}'}, ordering=3)
    make_section('collections', 'featuredCollections', {}, ordering=4)
    make_section('brands', 'brandSection', {'brands': [{'name': 'Olay', 'discount': 20}]}, ordering=6)
    make_section('banner', 'bannerFullWidth', {'imageUrl': '/banner.jpg', 'link': '/deals', 'location': 'bottom'}, ordering=7)
    make_section('newsletter', 'newsletterSocial', {'backgroundColor': '#111111'}, ordering=8)
    make_section('draft', 'scrollingText', {'items': ['hidden']}, ordering=9, is_published=False)

    report, container = render(storefront)

    names = [el.get('class')[0] for el in container.find_all('section', recursive=False)]
    assert names == [
        'announcement-bar', 'hero-slider', 'popular-categories', 'new-arrivals',
        'top-selling', 'featured-collections', 'brand-section', 'newsletter-social',
        'banner-full-width',
    ]
    assert report.skipped == {}
    assert 'hidden' not in report.html

    hero = container.find(class_='hero-slider')
    assert hero['data-autoplay'] == 'true'
    assert hero['data-autoplay-interval'] == '4000'
    assert [img['src'] for img in hero.select('.hero-slide img')] == ['/slide-1.jpg', '/slide-2.jpg']
    assert hero.find('a', class_='btn')['href'] == '/sale'
    assert len(hero.select('.hero-slider-dot')) == 2
    assert 'active' in hero.select('.hero-slider-dot')[0]['class']

    assert container.find(class_='popular-categories').find('h2').get_text() == 'Shop by category'
    assert container.find(class_='new-arrivals').find(class_='product-price').get_text() == 'Rs. 1500'
    assert container.find(class_='top-selling').find(class_='product-name').get_text() == 'Cleanser'
    assert container.find(class_='product-carousel')['data-autoscroll-interval'] == '3000'
    assert container.find(class_='brand-discount').get_text() == 'Flat 20% OFF'
    assert container.find(class_='collection-card')['href'].startswith('/subcategory/')

    banner = container.find(class_='banner-full-width')
    assert banner.find('a')['href'] == '/deals'
    newsletter = container.find(class_='newsletter-social')
    assert 'background-color: #111111' in newsletter['style']

    assert '{{' not in report.html


def test_empty_slider_selection_does_not_stop_the_page(storefront, make_section, catalog):
    hero = make_section('hero', 'heroSlider', {'sliderIds': [9999]}, ordering=0)
    bar = make_section('bar', 'scrollingText', {'items': ['still here']}, ordering=1)

    report, container = render(storefront)
    assert report.skipped == {str(hero.id): 'no_data'}
    assert report.rendered == [str(bar.id)]
    assert container.find(class_='hero-slider') is None


def test_failed_data_fetch_skips_section(storefront_adapter, storefront, make_section, catalog):
    arrivals = make_section('arrivals', 'newArrivals', ordering=0)
    bar = make_section('bar', 'scrollingText', {'items': ['x']}, ordering=1)
    storefront_adapter.fail_paths.append(f'/api/homepage-sections/{arrivals.id}/data')

    report, _ = render(storefront)
    assert report.skipped == {str(arrivals.id): 'no_data'}
    assert report.rendered == [str(bar.id)]


def test_failed_section_list_renders_empty_container(storefront_adapter, storefront, make_section):
    make_section('bar', 'scrollingText', {'items': ['x']})
    storefront_adapter.fail_paths.append('/api/homepage-sections/public')

    report, container = render(storefront)
    assert report.failed
    assert container.contents == []


def test_templates_fetched_once(storefront_adapter, storefront, make_section):
    make_section('a', 'scrollingText', {'items': ['1']})
    make_section('b', 'scrollingText', {'items': ['2']})
    render(storefront)
    render(storefront)
    assert storefront_adapter.calls.count('/home-sections/announcement-bar.html') == 1


def test_home_page_route(client, make_section):
    """The page reads its sections from the app itself, no HTTP involved"""
    make_section('bar', 'scrollingText', {'items': ['Welcome to the store']})

    response = client.get('/')
    assert response.status_code == 200
    page = BeautifulSoup(response.get_data(as_text=True), 'html.parser')
    assert page.title.get_text() == 'D. Watson'
    assert 'Welcome to the store' in page.find(id=CONTAINER_ID).get_text()


def test_home_page_route_uses_configured_api_host(monkeypatch, app, client, storefront, storefront_adapter,
                                                  storefront_session, make_section):
    make_section('bar', 'scrollingText', {'items': ['From the API host']})
    app.config['STOREFRONT_API_URL'] = storefront.base_url
    monkeypatch.setattr(requests, 'Session', lambda: storefront_session)

    response = client.get('/')
    assert 'From the API host' in response.get_data(as_text=True)
    assert '/api/homepage-sections/public' in storefront_adapter.calls


def test_in_process_session_serves_app_routes(app, make_slider):
    make_slider('One', image='/1.jpg', order=1)
    with in_process_session(app) as session:
        response = session.get(f'{IN_PROCESS_URL}/api/sliders', params={'unused': 1})
    assert response.status_code == 200
    assert [s['title'] for s in response.json()] == ['One']
    assert response.headers['Content-Type'].startswith('application/json')


def test_client_maps_http_errors(storefront):
    with pytest.raises(FetchError) as excinfo:
        storefront.get_json('/api/products/12345')
    assert excinfo.value.status_code == 404


def test_client_maps_timeouts():
    class SlowAdapter(requests.adapters.BaseAdapter):
        def send(self, request, **kwargs):
            raise requests.Timeout('read timed out')

        def close(self):
            pass

    session = requests.Session()
    session.mount('http://slow.test', SlowAdapter())
    client = StorefrontClient('http://slow.test/', session=session, timeout=0.5)
    with pytest.raises(FetchError, match='timed out after 0.5s'):
        client.sliders()


def test_client_rejects_invalid_json(storefront):
    with pytest.raises(FetchError, match='invalid JSON'):
        storefront.get_json('/home-sections/banner.html')
