"""
Per section type data resolution.

Each resolver maps a ``Section`` to the flat record its template renders,
or ``None`` when the section has nothing to show and must be skipped.
Network failures surface as ``FetchError`` for the renderer to handle.
"""
import logging

from homepage.sections import BrandEntry
from homepage.templating import stringify

logger = logging.getLogger(__name__)

PLACEHOLDER_CATEGORY = '/images/placeholder-category.jpg'
PLACEHOLDER_PRODUCT = '/images/placeholder-product.jpg'
PLACEHOLDER_BRAND = '/images/placeholder-brand.jpg'

DEFAULT_CATEGORY_COUNT = 8
TOP_SELLING_COUNT = 10

SOCIAL_PLATFORMS = (
    ('facebook', 'Facebook', 'fab fa-facebook-f'),
    ('instagram', 'Instagram', 'fab fa-instagram'),
)


def upload_url(record, key='image_upload'):
    upload = record.get(key)
    if isinstance(upload, dict):
        return upload.get('url') or ''
    return ''


def image_url(record, placeholder=''):
    """Upload reference first, then the direct image field"""
    return upload_url(record) or record.get('image') or placeholder


def as_list(payload, key=None):
    if key is not None:
        payload = payload.get(key) if isinstance(payload, dict) else None
    return [item for item in payload if isinstance(item, dict)] if isinstance(payload, list) else []


def base_record(section):
    return {
        'sectionId': section.id,
        'title': section.title or '',
        'subtitle': section.subtitle or '',
    }


def product_card(product):
    return {
        'id': product.get('id'),
        'name': product.get('name'),
        'price': product.get('price'),
        'imageUrl': image_url(product, PLACEHOLDER_PRODUCT),
    }


def brand_discount_label(brand):
    """Display label for a brand tile: custom text, computed percentage or a generic offer"""
    if isinstance(brand, dict):
        brand = BrandEntry.from_dict(brand)
    text = (brand.discount_text or '').strip()
    if text:
        return text
    if brand.discount and brand.discount > 0:
        return f"Flat {stringify(brand.discount)}% OFF"
    return 'Special Offer'


def resolve_scrolling_text(section, client):
    config = section.config
    return {
        'sectionId': section.id,
        'sectionName': section.name,
        'backgroundColor': config.background_color,
        'textColor': config.text_color,
        'items': config.items,
        'scrollSpeed': config.scroll_speed,
    }


def resolve_banner(section, client):
    config = section.config
    return {
        'sectionId': section.id,
        'imageUrl': config.image_url,
        'altText': config.alt_text,
        'link': config.link,
        'sizingMode': config.sizing_mode,
        'customWidth': config.custom_width,
        'customHeight': config.custom_height,
        'mobileHeight': config.mobile_height,
        'tabletHeight': config.tablet_height,
        'desktopHeight': config.desktop_height,
    }


def slide_image(slider):
    return upload_url(slider) or slider.get('image') or upload_url(slider, 'image_mobile_upload')


def resolve_hero_slider(section, client):
    config = section.config
    sliders = as_list(client.sliders())

    if config.slider_ids:
        by_id = {str(s.get('id')): s for s in sliders}
        sliders = [by_id[str(i)] for i in config.slider_ids if str(i) in by_id]
        logger.debug(f"Hero slider {section.id}: {len(sliders)} of {len(config.slider_ids)} configured sliders found")

    if not sliders:
        logger.warning(f"Hero slider {section.name!r} has no sliders to show")
        return None

    slides = [{
        'imageUrl': slide_image(s),
        'altText': s.get('image_alt') or s.get('title') or 'Slider image',
        'title': s.get('title'),
        'subtitle': s.get('description'),
        'buttonText': s.get('button_text'),
        'buttonLink': s.get('link') or s.get('button_link'),
    } for s in sliders]

    return {
        'sectionId': section.id,
        'slides': slides,
        'showArrows': config.show_arrows,
        'showDots': config.show_dots,
        'autoplay': config.autoplay,
        'autoplayInterval': config.autoplay_interval,
    }


def resolve_categories(section, client):
    config = section.config
    if config.category_ids:
        by_id = {str(c.get('id')): c for c in as_list(client.categories())}
        # Configured order wins over query order
        categories = [by_id[str(i)] for i in config.category_ids if str(i) in by_id]
    else:
        categories = as_list(client.categories(limit=DEFAULT_CATEGORY_COUNT))

    record = base_record(section)
    record['categories'] = [{
        'id': c.get('id'),
        'name': c.get('name'),
        'imageUrl': image_url(c, PLACEHOLDER_CATEGORY),
    } for c in categories]
    return record


def resolve_new_arrivals(section, client):
    # Section endpoint spans every category, whatever config.categoryId says
    products = as_list(client.section_data(section.id), 'products')
    record = base_record(section)
    record['products'] = [product_card(p) for p in products]
    return record


def resolve_top_selling(section, client):
    params = {'filter': 'top-selling', 'limit': TOP_SELLING_COUNT}
    if section.config.category_id:
        params['category_id'] = section.config.category_id
    record = base_record(section)
    record['products'] = [product_card(p) for p in as_list(client.products(**params))]
    return record


def resolve_featured_collections(section, client):
    subcategories = as_list(client.section_data(section.id), 'subcategories')
    record = base_record(section)
    record['showArrows'] = section.config.show_arrows
    record['collections'] = [{
        'name': sc.get('name'),
        'imageUrl': image_url(sc, PLACEHOLDER_CATEGORY),
        'linkUrl': f"/subcategory/{sc.get('id')}",
    } for sc in subcategories]
    return record


def resolve_brand_section(section, client):
    brands = sorted(section.config.brands, key=lambda b: b.order)
    if not brands:
        logger.warning(f"Brand section {section.name!r} has no brands configured")

    record = base_record(section)
    record['brands'] = [{
        'id': b.id,
        'name': b.name,
        'imageUrl': b.image_url or PLACEHOLDER_BRAND,
        'link': b.link if b.link.strip() else '#',
        'discount': b.discount,
        'discountText': brand_discount_label(b),
    } for b in brands]
    return record


def normalize_social_links(raw):
    """List passthrough, platform-keyed object, or the two default links"""
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict):
        return [
            {'platform': label, 'url': raw[key], 'iconClass': icon}
            for key, label, icon in SOCIAL_PLATFORMS
            if raw.get(key)
        ]
    return [{'platform': label, 'url': '#', 'iconClass': icon} for _, label, icon in SOCIAL_PLATFORMS]


def resolve_newsletter(section, client):
    config = section.config
    record = base_record(section)
    record.update({
        'backgroundColor': config.background_color,
        'textColor': config.text_color,
        'socialLinks': normalize_social_links(config.social_links),
        'leftTitle': config.left_title,
        'leftText': config.left_text,
        'rightTitle': config.right_title,
        'rightText': config.right_text,
    })
    return record


RESOLVERS = {
    'scrollingText': resolve_scrolling_text,
    'bannerFullWidth': resolve_banner,
    'heroSlider': resolve_hero_slider,
    'categoryFeatured': resolve_categories,
    'categoryGrid': resolve_categories,
    'categoryCircles': resolve_categories,
    'newArrivals': resolve_new_arrivals,
    'topSelling': resolve_top_selling,
    'featuredCollections': resolve_featured_collections,
    'brandSection': resolve_brand_section,
    'newsletterSocial': resolve_newsletter,
}


def resolve_section_data(section, client):
    """Data record for a section, or None when it should not be rendered"""
    resolver = RESOLVERS.get(section.type)
    if resolver is None:
        logger.warning(f"Unknown section type {section.type!r} for section {section.name!r}")
        return None
    return resolver(section, client)
