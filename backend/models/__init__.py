from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

from .product import Department, Category, Subcategory, Brand, Product
from .media import Slider, Banner
from .homepage_section import HomepageSection, SECTION_TYPES

__all__ = [
    'db',
    'Department', 'Category', 'Subcategory', 'Brand', 'Product',
    'Slider', 'Banner',
    'HomepageSection', 'SECTION_TYPES',
]
