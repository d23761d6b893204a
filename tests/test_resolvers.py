"""Unit tests for the per section type data resolvers.

A ``FakeClient`` stands in for the storefront API: it serves canned payloads
and records the calls made, so each test pins down which endpoint a resolver
uses and how the response is shaped into template data.
"""

import pytest

from homepage.client import FetchError
from homepage.resolvers import (
    brand_discount_label, normalize_social_links, resolve_section_data,
    PLACEHOLDER_BRAND, PLACEHOLDER_CATEGORY, PLACEHOLDER_PRODUCT,
)
from homepage.sections import Section, BrandEntry


class FakeClient:
    def __init__(self, sliders=None, categories=None, products=None, section_data=None, fail=False):
        self._sliders = sliders or []
        self._categories = categories or []
        self._products = products or []
        self._section_data = section_data or {}
        self.fail = fail
        self.calls = []

    def _call(self, name, payload, **params):
        self.calls.append((name, params))
        if self.fail:
            raise FetchError(f'/api/{name}', 'connection refused')
        return payload

    def sliders(self):
        return self._call('sliders', self._sliders)

    def categories(self, **params):
        payload = self._categories
        if params.get('limit'):
            payload = payload[:params['limit']]
        return self._call('categories', payload, **params)

    def products(self, **params):
        return self._call('products', self._products, **params)

    def section_data(self, section_id):
        return self._call('section_data', self._section_data, section_id=section_id)


def make(section_type, config=None, **fields):
    record = {
        'id': fields.pop('id', 10),
        'name': fields.pop('name', f'{section_type}-section'),
        'type': section_type,
        'is_active': True,
        'is_published': True,
        'config': config or {},
    }
    record.update(fields)
    return Section.from_record(record)


@pytest.mark.parametrize('brand, expected', [
    ({'discountText': '', 'discount': 15}, 'Flat 15% OFF'),
    ({'discountText': 'BOGO', 'discount': 0}, 'BOGO'),
    ({'discountText': '', 'discount': 0}, 'Special Offer'),
    ({'discountText': '   ', 'discount': 12.5}, 'Flat 12.5% OFF'),
    ({'discountText': 'Up to 50%', 'discount': 20}, 'Up to 50%'),
    ({}, 'Special Offer'),
])
def test_brand_discount_label(brand, expected):
    """Custom text beats a computed percentage, which beats the generic label."""
    assert brand_discount_label(brand) == expected


def test_brand_discount_label_accepts_entries():
    assert brand_discount_label(BrandEntry(discount=30)) == 'Flat 30% OFF'


def test_scrolling_text_defaults():
    data = resolve_section_data(make('scrollingText', {'items': ['Free shipping']}), FakeClient())
    assert data == {
        'sectionId': '10',
        'sectionName': 'scrollingText-section',
        'backgroundColor': '#c42525',
        'textColor': '#ffffff',
        'items': ['Free shipping'],
        'scrollSpeed': 20,
    }


def test_banner_passthrough():
    config = {'imageUrl': '/b.jpg', 'link': '/sale', 'sizingMode': 'custom', 'customWidth': 1200}
    data = resolve_section_data(make('bannerFullWidth', config), FakeClient())
    assert data['imageUrl'] == '/b.jpg'
    assert data['altText'] == 'Banner'
    assert data['sizingMode'] == 'custom'
    assert data['customWidth'] == 1200
    assert data['mobileHeight'] is None


def test_hero_slider_skips_when_no_configured_slider_exists():
    """Configured ids matching nothing leave the section without data."""
    client = FakeClient(sliders=[{'id': 1, 'title': 'One'}])
    assert resolve_section_data(make('heroSlider', {'sliderIds': [99]}), client) is None


def test_hero_slider_skips_without_sliders():
    assert resolve_section_data(make('heroSlider'), FakeClient()) is None


def test_hero_slider_follows_configured_order():
    sliders = [
        {'id': 1, 'title': 'One', 'image': '/1.jpg'},
        {'id': 2, 'title': 'Two', 'image_upload': {'url': '/2-upload.jpg'}, 'image': '/2.jpg'},
        {'id': 3, 'title': None, 'image_mobile_upload': {'url': '/3-mobile.jpg'}, 'button_link': '/b3'},
    ]
    config = {'sliderIds': ['3', 2], 'autoplay': False}
    data = resolve_section_data(make('heroSlider', config), FakeClient(sliders=sliders))

    assert [s['imageUrl'] for s in data['slides']] == ['/3-mobile.jpg', '/2-upload.jpg']
    assert data['slides'][0]['altText'] == 'Slider image'
    assert data['slides'][0]['buttonLink'] == '/b3'
    assert data['slides'][1]['altText'] == 'Two'
    assert data['autoplay'] is False
    assert data['autoplayInterval'] == 3000
    assert data['showArrows'] is True
    assert data['showDots'] is True


def test_hero_slider_prefers_link_over_button_link():
    sliders = [{'id': 1, 'image': '/1.jpg', 'link': '/a', 'button_link': '/b', 'image_alt': 'Alt'}]
    data = resolve_section_data(make('heroSlider'), FakeClient(sliders=sliders))
    assert data['slides'][0]['buttonLink'] == '/a'
    assert data['slides'][0]['altText'] == 'Alt'


def test_categories_reordered_to_configuration():
    categories = [
        {'id': 1, 'name': 'Skin', 'image': '/skin.jpg'},
        {'id': 2, 'name': 'Hair', 'image_upload': {'url': '/hair.jpg'}},
        {'id': 3, 'name': 'Baby'},
    ]
    client = FakeClient(categories=categories)
    data = resolve_section_data(make('categoryGrid', {'categoryIds': [3, 1, 42]}, title='Shop'), client)

    assert [c['name'] for c in data['categories']] == ['Baby', 'Skin']
    assert data['categories'][0]['imageUrl'] == PLACEHOLDER_CATEGORY
    assert data['title'] == 'Shop'
    assert client.calls == [('categories', {})]


def test_categories_default_to_first_eight():
    categories = [{'id': i, 'name': f'C{i}'} for i in range(12)]
    client = FakeClient(categories=categories)
    data = resolve_section_data(make('categoryCircles'), client)
    assert len(data['categories']) == 8
    assert client.calls == [('categories', {'limit': 8})]


def test_new_arrivals_use_section_data_endpoint():
    products = [{'id': 5, 'name': 'Serum', 'price': 1500.0}]
    client = FakeClient(section_data={'products': products})
    data = resolve_section_data(make('newArrivals', {'categoryId': 4}, id=7), client)

    assert client.calls == [('section_data', {'section_id': '7'})]
    assert data['products'] == [{'id': 5, 'name': 'Serum', 'price': 1500.0, 'imageUrl': PLACEHOLDER_PRODUCT}]


def test_top_selling_query():
    client = FakeClient(products=[{'id': 1, 'name': 'P', 'price': 10, 'image': '/p.jpg'}])
    data = resolve_section_data(make('topSelling', {'categoryId': 4}), client)
    assert client.calls == [('products', {'filter': 'top-selling', 'limit': 10, 'category_id': 4})]
    assert data['products'][0]['imageUrl'] == '/p.jpg'


def test_top_selling_without_category():
    client = FakeClient()
    data = resolve_section_data(make('topSelling'), client)
    assert client.calls == [('products', {'filter': 'top-selling', 'limit': 10})]
    assert data['products'] == []


def test_featured_collections():
    client = FakeClient(section_data={'subcategories': [{'id': 8, 'name': 'Lipsticks', 'image': '/l.jpg'}]})
    data = resolve_section_data(make('featuredCollections', {'showArrows': False}), client)
    assert data['collections'] == [{'name': 'Lipsticks', 'imageUrl': '/l.jpg', 'linkUrl': '/subcategory/8'}]
    assert data['showArrows'] is False


def test_brand_section_sorted_with_fallbacks():
    config = {'brands': [
        {'name': 'Late', 'order': 2, 'imageUrl': '/late.png', 'link': '/late'},
        {'name': 'Early', 'order': 1, 'discount': 10, 'id': 4},
        {'name': 'Also early', 'order': 1, 'discountText': 'New'},
    ]}
    data = resolve_section_data(make('brandSection', config), FakeClient())
    brands = data['brands']

    assert [b['name'] for b in brands] == ['Early', 'Also early', 'Late']
    assert brands[0]['imageUrl'] == PLACEHOLDER_BRAND
    assert brands[0]['link'] == '#'
    assert brands[0]['discountText'] == 'Flat 10% OFF'
    assert brands[0]['id'] == 4
    assert brands[1]['discountText'] == 'New'
    assert brands[2]['link'] == '/late'


def test_brand_section_without_brands_still_renders():
    data = resolve_section_data(make('brandSection'), FakeClient())
    assert data['brands'] == []


def test_newsletter_defaults_and_legacy_keys():
    config = {'socialTitle': 'Follow us', 'rightText': 'Deals weekly'}
    data = resolve_section_data(make('newsletterSocial', config), FakeClient())
    assert data['leftTitle'] == 'Follow us'
    assert data['leftText'] == 'Follow us to stay updated on latest looks.'
    assert data['rightTitle'] == 'SIGN UP FOR EXCLUSIVE OFFERS & DISCOUNTS'
    assert data['rightText'] == 'Deals weekly'
    assert data['backgroundColor'] == '#c42525'
    assert [link['url'] for link in data['socialLinks']] == ['#', '#']


def test_social_links_normalisation():
    links = [{'platform': 'X', 'url': '/x', 'iconClass': 'x'}]
    assert normalize_social_links(links) is links
    assert normalize_social_links({'instagram': 'https://instagram.com/store'}) == [
        {'platform': 'Instagram', 'url': 'https://instagram.com/store', 'iconClass': 'fab fa-instagram'},
    ]
    assert [l['platform'] for l in normalize_social_links(None)] == ['Facebook', 'Instagram']


def test_unknown_type_has_no_data(caplog):
    assert resolve_section_data(make('videoBanner'), FakeClient()) is None
    assert 'videoBanner' in caplog.text


def test_fetch_errors_propagate():
    with pytest.raises(FetchError):
        resolve_section_data(make('heroSlider'), FakeClient(fail=True))


def test_malformed_config_falls_back_to_defaults():
    section = make('heroSlider', {'sliderIds': 'nope', 'autoplayInterval': 'fast', 'showDots': False})
    assert section.config.slider_ids == []
    assert section.config.autoplay_interval == 3000
    assert section.config.show_dots is False
    banner = make('bannerFullWidth', {'imageUrl': ['/a.jpg'], 'link': 7, 'altText': None})
    assert banner.config.image_url == ''
    assert banner.config.link == ''
    assert banner.config.alt_text == 'Banner'


def test_brand_entries_with_non_text_fields():
    section = make('brandSection', {'brands': [{'name': 5, 'imageUrl': {}, 'link': 42, 'discount': 10}]})
    brand, = resolve_section_data(section, FakeClient())['brands']
    assert brand['name'] == ''
    assert brand['imageUrl'] == PLACEHOLDER_BRAND
    assert brand['link'] == '#'
    assert brand['discountText'] == 'Flat 10% OFF'
