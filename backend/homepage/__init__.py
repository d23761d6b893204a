"""Server side rendering of the storefront homepage sections"""
from homepage.client import StorefrontClient, FetchError
from homepage.renderer import HomepageRenderer, RenderReport, SECTION_TEMPLATES
from homepage.ordering import order_sections, OrderResult
from homepage.transport import AppAdapter, in_process_session
from homepage.templating import Template, render_template

__all__ = [
    'StorefrontClient', 'FetchError',
    'HomepageRenderer', 'RenderReport', 'SECTION_TEMPLATES',
    'order_sections', 'OrderResult',
    'AppAdapter', 'in_process_session',
    'Template', 'render_template',
]
