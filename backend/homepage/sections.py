"""
Typed views over homepage section records.

A section's ``config`` is an open JSON object whose shape depends on the
section ``type``. ``parse_config`` turns it into one dataclass per section
family with explicit defaults, so resolvers never inspect raw dictionaries.
Malformed values (wrong container type, unparsable numbers, non-string text)
fall back to the defaults instead of raising.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

LOCATION_TOP = 'top'
LOCATION_BOTTOM = 'bottom'
AFTER_SECTION_PREFIX = 'after-section-'


def _value(raw, key, default=None):
    """``raw[key]`` unless it is missing or empty"""
    value = raw.get(key)
    if value is None or value == '' or value is False:
        return default
    return value


def _text(raw, key, default=''):
    """String values only; anything else gives the default"""
    value = raw.get(key)
    return value if isinstance(value, str) and value else default


def _flag(raw, key):
    """Flags default to on; only an explicit false disables them"""
    return raw.get(key) is not False


def _int(raw, key, default):
    try:
        value = int(raw.get(key) or 0)
    except (TypeError, ValueError):
        return default
    return value or default


def _list(raw, key):
    value = raw.get(key)
    return list(value) if isinstance(value, (list, tuple)) else []


@dataclass
class SectionConfig:
    location: str = ''
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, raw):
        return cls(**cls.fields_from(raw))

    @classmethod
    def fields_from(cls, raw):
        location = raw.get('location')
        return {'location': location if isinstance(location, str) else '', 'raw': raw}


@dataclass
class ScrollingTextConfig(SectionConfig):
    background_color: str = '#c42525'
    text_color: str = '#ffffff'
    items: List[Any] = field(default_factory=list)
    scroll_speed: int = 20

    @classmethod
    def fields_from(cls, raw):
        return dict(
            super().fields_from(raw),
            background_color=_text(raw, 'backgroundColor', '#c42525'),
            text_color=_text(raw, 'textColor', '#ffffff'),
            items=_list(raw, 'items'),
            scroll_speed=_int(raw, 'scrollSpeed', 20),
        )


@dataclass
class BannerConfig(SectionConfig):
    image_url: str = ''
    alt_text: str = 'Banner'
    link: str = ''
    sizing_mode: str = 'auto'
    custom_width: Optional[Any] = None
    custom_height: Optional[Any] = None
    mobile_height: Optional[Any] = None
    tablet_height: Optional[Any] = None
    desktop_height: Optional[Any] = None

    @classmethod
    def fields_from(cls, raw):
        return dict(
            super().fields_from(raw),
            image_url=_text(raw, 'imageUrl'),
            alt_text=_text(raw, 'altText', 'Banner'),
            link=_text(raw, 'link'),
            sizing_mode=_text(raw, 'sizingMode', 'auto'),
            custom_width=raw.get('customWidth'),
            custom_height=raw.get('customHeight'),
            mobile_height=raw.get('mobileHeight'),
            tablet_height=raw.get('tabletHeight'),
            desktop_height=raw.get('desktopHeight'),
        )


@dataclass
class HeroSliderConfig(SectionConfig):
    slider_ids: List[Any] = field(default_factory=list)
    show_arrows: bool = True
    show_dots: bool = True
    autoplay: bool = True
    autoplay_interval: int = 3000

    @classmethod
    def fields_from(cls, raw):
        return dict(
            super().fields_from(raw),
            slider_ids=_list(raw, 'sliderIds'),
            show_arrows=_flag(raw, 'showArrows'),
            show_dots=_flag(raw, 'showDots'),
            autoplay=_flag(raw, 'autoplay'),
            autoplay_interval=_int(raw, 'autoplayInterval', 3000),
        )


@dataclass
class CategoryConfig(SectionConfig):
    category_ids: List[Any] = field(default_factory=list)

    @classmethod
    def fields_from(cls, raw):
        return dict(super().fields_from(raw), category_ids=_list(raw, 'categoryIds'))


@dataclass
class ProductSectionConfig(SectionConfig):
    category_id: Optional[Any] = None
    limit: Optional[int] = None

    @classmethod
    def fields_from(cls, raw):
        return dict(
            super().fields_from(raw),
            category_id=_value(raw, 'categoryId'),
            limit=_int(raw, 'limit', None),
        )


@dataclass
class CollectionsConfig(SectionConfig):
    show_arrows: bool = True

    @classmethod
    def fields_from(cls, raw):
        return dict(super().fields_from(raw), show_arrows=_flag(raw, 'showArrows'))


@dataclass
class BrandEntry:
    name: str = ''
    image_url: str = ''
    link: str = ''
    discount: float = 0
    discount_text: str = ''
    order: float = 0
    id: Optional[Any] = None

    @classmethod
    def from_dict(cls, raw):
        try:
            discount = float(raw.get('discount') or 0)
        except (TypeError, ValueError):
            discount = 0
        try:
            order = float(raw.get('order') or 0)
        except (TypeError, ValueError):
            order = 0
        text = raw.get('discountText')
        return cls(
            name=_text(raw, 'name'),
            image_url=_text(raw, 'imageUrl'),
            link=_text(raw, 'link'),
            discount=discount,
            discount_text=text if isinstance(text, str) else '',
            order=order,
            id=raw.get('id'),
        )


@dataclass
class BrandSectionConfig(SectionConfig):
    brands: List[BrandEntry] = field(default_factory=list)

    @classmethod
    def fields_from(cls, raw):
        brands = [BrandEntry.from_dict(b) for b in _list(raw, 'brands') if isinstance(b, dict)]
        return dict(super().fields_from(raw), brands=brands)


@dataclass
class NewsletterConfig(SectionConfig):
    background_color: str = '#c42525'
    text_color: str = '#ffffff'
    social_links: Any = None
    left_title: str = "LET'S CONNECT ON SOCIAL MEDIA"
    left_text: str = 'Follow us to stay updated on latest looks.'
    right_title: str = 'SIGN UP FOR EXCLUSIVE OFFERS & DISCOUNTS'
    right_text: str = 'Stay updated on new deals and news.'

    @classmethod
    def fields_from(cls, raw):
        return dict(
            super().fields_from(raw),
            background_color=_text(raw, 'backgroundColor', '#c42525'),
            text_color=_text(raw, 'textColor', '#ffffff'),
            social_links=raw.get('socialLinks'),
            left_title=_value(raw, 'leftTitle') or _value(raw, 'socialTitle', cls.left_title),
            left_text=_value(raw, 'leftText') or _value(raw, 'socialDesc', cls.left_text),
            right_title=_value(raw, 'rightTitle') or _value(raw, 'newsletterTitle', cls.right_title),
            right_text=_value(raw, 'rightText') or _value(raw, 'newsletterDesc', cls.right_text),
        )


CONFIG_TYPES = {
    'scrollingText': ScrollingTextConfig,
    'bannerFullWidth': BannerConfig,
    'heroSlider': HeroSliderConfig,
    'categoryFeatured': CategoryConfig,
    'categoryGrid': CategoryConfig,
    'categoryCircles': CategoryConfig,
    'newArrivals': ProductSectionConfig,
    'topSelling': ProductSectionConfig,
    'featuredCollections': CollectionsConfig,
    'brandSection': BrandSectionConfig,
    'newsletterSocial': NewsletterConfig,
}


def parse_config(section_type, raw):
    """Config variant for ``section_type``; unknown types get the base class"""
    if not isinstance(raw, dict):
        raw = {}
    return CONFIG_TYPES.get(section_type, SectionConfig).from_dict(raw)


@dataclass
class Section:
    id: str
    name: str
    type: str
    title: Optional[str] = None
    subtitle: Optional[str] = None
    description: Optional[str] = None
    ordering: int = 0
    is_active: bool = False
    is_published: bool = False
    display_on: Dict[str, bool] = field(default_factory=dict)
    config: SectionConfig = field(default_factory=SectionConfig)

    @classmethod
    def from_record(cls, record):
        """Build from a JSON record of GET /api/homepage-sections/public"""
        section_type = record.get('type') or ''
        display_on = record.get('display_on')
        try:
            ordering = int(record.get('ordering') or 0)
        except (TypeError, ValueError):
            ordering = 0
        return cls(
            id=str(record.get('id', '')),
            name=record.get('name') or '',
            type=section_type,
            title=record.get('title'),
            subtitle=record.get('subtitle'),
            description=record.get('description'),
            ordering=ordering,
            is_active=record.get('is_active') is True,
            is_published=record.get('is_published') is True,
            display_on=display_on if isinstance(display_on, dict) else {},
            config=parse_config(section_type, record.get('config')),
        )

    @property
    def location(self):
        return self.config.location

    @property
    def is_eligible(self):
        return self.is_active and self.is_published
