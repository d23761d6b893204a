"""
Homepage section rendering pipeline.

fetch sections -> keep active+published -> order by location -> for each
section: template + data -> render -> post-process -> append to the
``#homepage-sections`` container -> initialize sliders/carousels.

Every section is fault isolated: a failure skips that section with a
reason recorded in the RenderReport and the loop carries on. Only a failed
fetch of the section list leaves the whole container empty.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from bs4 import BeautifulSoup, Tag

from homepage.behaviors import initialize_widgets
from homepage.client import FetchError
from homepage.ordering import OrderResult, order_sections
from homepage.resolvers import resolve_section_data
from homepage.sections import Section
from homepage.templating import Template, stringify

CONTAINER_ID = 'homepage-sections'

SECTION_TEMPLATES = {
    'scrollingText': 'announcement-bar.html',
    'bannerFullWidth': 'banner.html',
    'heroSlider': 'hero-slider.html',
    'categoryFeatured': 'popular-categories.html',
    'categoryGrid': 'popular-categories.html',
    'categoryCircles': 'popular-categories.html',
    'newArrivals': 'new-arrivals.html',
    'topSelling': 'top-selling-products.html',
    'featuredCollections': 'featured-collections.html',
    'brandSection': 'brand-section.html',
    'newsletterSocial': 'newsletter-social.html',
}

# Skip reasons
UNKNOWN_TYPE = 'unknown_type'
TEMPLATE_UNAVAILABLE = 'template_unavailable'
NO_DATA = 'no_data'
EMPTY_HTML = 'empty_html'
ERROR = 'error'

MISSING_VALUES = ('', 'null', 'undefined', 'None')

# Parsed templates by name, shared by every renderer in the process
_template_cache = {}


def clear_template_cache():
    _template_cache.clear()


@dataclass
class RenderReport:
    html: str = ''
    rendered: List[str] = field(default_factory=list)
    skipped: Dict[str, str] = field(default_factory=dict)
    order: Optional[OrderResult] = None
    counters: Counter = field(default_factory=Counter)
    failed: bool = False

    def mark_rendered(self, section):
        self.rendered.append(section.id)
        self.counters['rendered'] += 1

    def mark_skipped(self, section, reason):
        self.skipped[section.id] = reason
        self.counters[f'skipped.{reason}'] += 1


def is_set(value):
    return value is not None and stringify(value).strip() not in MISSING_VALUES


def parse_style(style):
    declarations = {}
    for declaration in (style or '').split(';'):
        name, _, value = declaration.partition(':')
        if name.strip() and value.strip():
            declarations[name.strip()] = value.strip()
    return declarations


def set_style(element, **properties):
    """Merge inline style declarations; underscores become dashes"""
    declarations = parse_style(element.get('style'))
    for name, value in properties.items():
        declarations[name.replace('_', '-')] = value
    element['style'] = '; '.join(f'{k}: {v}' for k, v in declarations.items())


def set_custom_property(element, name, value):
    declarations = parse_style(element.get('style'))
    declarations[name] = value
    element['style'] = '; '.join(f'{k}: {v}' for k, v in declarations.items())


def add_class(element, name):
    classes = element.get('class') or []
    if isinstance(classes, str):
        classes = classes.split()
    if name not in classes:
        element['class'] = list(classes) + [name]


class HomepageRenderer:
    """Renders the dynamic homepage section area from the storefront API"""

    def __init__(self, client, logger=None, template_map=None, template_cache=None):
        self.client = client
        self.logger = logger or logging.getLogger(__name__)
        self.template_map = SECTION_TEMPLATES if template_map is None else template_map
        self.template_cache = _template_cache if template_cache is None else template_cache

    def load_template(self, template_name):
        """Parsed template, fetched once per process"""
        if template_name in self.template_cache:
            return self.template_cache[template_name]
        try:
            source = self.client.template(template_name)
        except FetchError as e:
            self.logger.error(f"Failed to load template {template_name}: {e}")
            return None
        if not source or not source.strip():
            self.logger.error(f"Template {template_name} is empty")
            return None
        template = Template(source, name=template_name)
        self.template_cache[template_name] = template
        return template

    def fetch_sections(self):
        records = self.client.public_sections()
        if not isinstance(records, list):
            raise FetchError('/api/homepage-sections/public', 'section list is not an array')
        return [Section.from_record(r) for r in records if isinstance(r, dict)]

    def render(self):
        report = RenderReport()
        soup = BeautifulSoup(f'<div id="{CONTAINER_ID}"></div>', 'html.parser')
        container = soup.find(id=CONTAINER_ID)

        try:
            sections = self.fetch_sections()
        except FetchError as e:
            self.logger.error(f"Error loading homepage sections: {e}")
            report.failed = True
            report.html = str(container)
            return report

        eligible = [s for s in sections if s.is_eligible]
        self.logger.info(f"Homepage: {len(eligible)} of {len(sections)} sections active and published")

        report.order = order_sections(eligible, logger=self.logger)
        report.counters['ordering.iterations'] = report.order.iterations
        report.counters['ordering.unresolved'] = len(report.order.unresolved)

        for section in report.order.sections:
            try:
                element, reason = self.render_section(section)
            except Exception:
                self.logger.exception(f"Error rendering section {section.name!r}")
                element, reason = None, ERROR

            if element is None:
                self.logger.warning(f"Skipped section {section.name!r} ({section.type}): {reason}")
                report.mark_skipped(section, reason)
                continue

            container.append(element)
            report.mark_rendered(section)

        if report.rendered:
            initialize_widgets(container)

        self.logger.info(f"Homepage: rendered {len(report.rendered)} section(s), skipped {len(report.skipped)}")
        report.html = str(container)
        return report

    def render_section(self, section):
        """(element, None) on success, (None, reason) when the section is skipped"""
        template_name = self.template_map.get(section.type)
        if not template_name:
            self.logger.warning(f"No template for section type {section.type!r} (section {section.name!r})")
            return None, UNKNOWN_TYPE

        template = self.load_template(template_name)
        if template is None:
            return None, TEMPLATE_UNAVAILABLE

        try:
            data = resolve_section_data(section, self.client)
        except FetchError as e:
            self.logger.warning(f"Data fetch failed for section {section.name!r}: {e}")
            return None, NO_DATA
        if not data:
            return None, NO_DATA

        html = template.render(data)
        if not html.strip():
            return None, EMPTY_HTML

        fragment = BeautifulSoup(html, 'html.parser')
        element = next((node for node in fragment.contents if isinstance(node, Tag)), None)
        if element is None:
            return None, EMPTY_HTML

        element = element.extract()
        self.post_process(section, element)
        return element, None

    def post_process(self, section, element):
        """Presentation the template language cannot express"""
        for viewport, visible in (section.display_on or {}).items():
            if visible is False:
                add_class(element, f'hidden-{viewport}')

        if section.type == 'heroSlider':
            element['data-autoplay'] = 'true' if section.config.autoplay else 'false'
            element['data-autoplay-interval'] = str(section.config.autoplay_interval)
        elif section.type == 'bannerFullWidth':
            self.post_process_banner(section, element)
        elif section.type == 'newsletterSocial':
            set_style(element,
                      background_color=section.config.background_color,
                      color=section.config.text_color)

    def post_process_banner(self, section, element):
        config = section.config
        image = element.find('img')
        if image is None or not is_set(image.get('src')):
            self.logger.warning(f"Banner {section.name!r} has no image; hiding it")
            set_style(element, display='none')
            return

        link = (config.link or '').strip()
        if link:
            anchor = BeautifulSoup('', 'html.parser').new_tag('a', href=link)
            anchor['aria-label'] = 'Banner link'
            image.wrap(anchor)

        if config.sizing_mode != 'custom':
            return

        if is_set(config.custom_width):
            set_style(element, max_width=f'{stringify(config.custom_width)}px', margin='0 auto')
        for viewport, value in (('mobile', config.mobile_height),
                                ('tablet', config.tablet_height),
                                ('desktop', config.desktop_height)):
            if is_set(value):
                set_custom_property(element, f'--banner-height-{viewport}', f'{stringify(value)}px')
        if is_set(config.custom_height):
            set_style(image, height=f'{stringify(config.custom_height)}px', object_fit='cover')
        add_class(element, 'custom-size')
