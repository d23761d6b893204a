from . import db
from datetime import datetime

# Section Types (validated on write only)
SECTION_TYPES = (
    'heroSlider', 'scrollingText', 'categoryFeatured', 'categoryGrid',
    'categoryCircles', 'departmentGrid', 'productTabs', 'productCarousel',
    'newArrivals', 'topSelling', 'featuredCollections', 'subcategoryGrid',
    'bannerFullWidth', 'videoBanner', 'collectionLinks', 'newsletterSocial',
    'brandSection', 'customHTML',
)


def default_display_on():
    return {'desktop': True, 'tablet': True, 'mobile': True}


class HomepageSection(db.Model):
    __tablename__ = 'homepage_sections'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), unique=True, nullable=False)
    type = db.Column(db.String(50), nullable=False, index=True)

    title = db.Column(db.String(255), nullable=True)
    subtitle = db.Column(db.String(255), nullable=True)
    description = db.Column(db.Text, nullable=True)

    # Type dependent settings, including the 'location' directive
    config = db.Column(db.JSON, nullable=False, default=dict)

    ordering = db.Column(db.Integer, default=0, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    is_published = db.Column(db.Boolean, default=False, nullable=False)
    display_on = db.Column(db.JSON, nullable=False, default=default_display_on)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def is_visible(self):
        """Eligible for the public homepage"""
        return bool(self.is_active and self.is_published)

    @staticmethod
    def next_ordering():
        """Ordering value for a new section (max existing + 1)"""
        last = HomepageSection.query.order_by(HomepageSection.ordering.desc()).first()
        return last.ordering + 1 if last else 0

    def __repr__(self):
        return f'<HomepageSection {self.name} ({self.type})>'
