import logging
from models.product import Product, Category, Subcategory, Brand
from models.media import Banner
from api.products import format_product
from api.categories import format_category, format_subcategory, format_department, active_departments
from api.sliders import format_slider, format_banner, active_sliders

logger = logging.getLogger(__name__)

class SectionDataService:
    """
    Type specific payloads for homepage sections.

    The public variant only covers the section types whose content is too
    large or dynamic to embed in the section list; the admin variant backs
    the editor preview and covers every type with catalog content.
    """

    NEW_ARRIVALS_LIMIT = 100
    TOP_SELLING_LIMIT = 20
    PRODUCT_LIST_LIMIT = 20
    GRID_SUBCATEGORY_LIMIT = 6
    BUTTON_SUBCATEGORY_LIMIT = 20

    @staticmethod
    def config_limit(config, default):
        """Positive integer config.limit, else the default"""
        try:
            limit = int(config.get('limit') or 0)
        except (TypeError, ValueError):
            return default
        return limit if limit > 0 else default

    @staticmethod
    def newest_active_products(**flags):
        query = Product.query.filter(Product.is_active == True)
        for column, value in flags.items():
            query = query.filter(getattr(Product, column) == value)
        return query.order_by(Product.created_at.desc(), Product.id.desc())

    @staticmethod
    def new_arrivals(config):
        # All categories on purpose: config.categoryId is not applied here
        limit = SectionDataService.config_limit(config, SectionDataService.NEW_ARRIVALS_LIMIT)
        products = SectionDataService.newest_active_products(is_new_arrival=True).limit(limit).all()
        logger.info(f"New arrivals: {len(products)} products from all categories")
        return {"products": [format_product(p) for p in products]}

    @staticmethod
    def top_selling(config):
        query = SectionDataService.newest_active_products(is_top_selling=True)
        if config.get('categoryId'):
            query = query.filter(Product.category_id == config.get('categoryId'))
        limit = SectionDataService.config_limit(config, SectionDataService.TOP_SELLING_LIMIT)
        return {"products": [format_product(p) for p in query.limit(limit).all()]}

    @staticmethod
    def featured_collections(config):
        subcategories = Subcategory.query.filter(Subcategory.is_active == True) \
            .order_by(Subcategory.ordering.asc(), Subcategory.name.asc()).all()
        return {"subcategories": [format_subcategory(s) for s in subcategories]}

    @staticmethod
    def subcategory_grid(config):
        grid_ids = config.get('subcategoryIds') or []
        button_ids = config.get('buttonSubcategoryIds') or []

        grid = []
        if grid_ids:
            grid = Subcategory.query.filter(
                Subcategory.id.in_(grid_ids),
                Subcategory.is_active == True
            ).limit(SectionDataService.GRID_SUBCATEGORY_LIMIT).all()

        buttons = Subcategory.query.filter(Subcategory.is_active == True)
        if button_ids:
            buttons = buttons.filter(Subcategory.id.in_(button_ids)).order_by(Subcategory.name.asc())
        else:
            buttons = buttons.order_by(Subcategory.name.asc()).limit(SectionDataService.BUTTON_SUBCATEGORY_LIMIT)

        return {
            "gridSubcategories": [format_subcategory(s) for s in grid[:SectionDataService.GRID_SUBCATEGORY_LIMIT]],
            "buttonSubcategories": [format_subcategory(s) for s in buttons.all()],
        }

    @staticmethod
    def product_list(config):
        """Products for tabs/carousels; a named merchandising section wins over flags"""
        query = Product.query.filter(Product.is_active == True)
        if config.get('categoryId'):
            query = query.filter(Product.category_id == config.get('categoryId'))

        products_filter = None
        section_name = config.get('section')
        if not section_name:
            if config.get('isFeatured'):
                query = query.filter(Product.is_featured == True)
            elif config.get('isNewArrival'):
                query = query.filter(Product.is_new_arrival == True)
            elif config.get('isTrending'):
                query = query.filter(Product.is_trending == True)
        else:
            logger.info(f"Section data filtered by merchandising section: {section_name!r}")
            # JSON membership is filtered in Python to stay portable across backends
            products_filter = lambda p: section_name in (p.sections or [])

        limit = SectionDataService.config_limit(config, SectionDataService.PRODUCT_LIST_LIMIT)
        query = query.order_by(Product.created_at.desc(), Product.id.desc())
        if products_filter:
            products = [p for p in query.all() if products_filter(p)][:limit]
        else:
            products = query.limit(limit).all()
        return {"products": [format_product(p) for p in products]}

    @staticmethod
    def get_public_data(section):
        """Payload for GET /homepage-sections/<id>/data/public"""
        config = section.config or {}
        handlers = {
            'newArrivals': SectionDataService.new_arrivals,
            'topSelling': SectionDataService.top_selling,
            'featuredCollections': SectionDataService.featured_collections,
            'subcategoryGrid': SectionDataService.subcategory_grid,
        }
        handler = handlers.get(section.type)
        return handler(config) if handler else {}

    @staticmethod
    def get_admin_data(section):
        """Payload for the admin preview, regardless of publish state"""
        config = section.config or {}
        section_type = section.type

        if section_type == 'heroSlider':
            return {"sliders": [format_slider(s) for s in active_sliders()]}
        if section_type in ('categoryFeatured', 'categoryGrid', 'categoryCircles'):
            categories = Category.query.filter(Category.is_active == True).order_by(Category.name.asc()).all()
            return {"categories": [format_category(c) for c in categories]}
        if section_type == 'departmentGrid':
            return {"departments": [format_department(d) for d in active_departments()]}
        if section_type in ('productTabs', 'productCarousel'):
            return SectionDataService.product_list(config)
        if section_type == 'bannerFullWidth':
            banners = Banner.query.filter(Banner.is_active == True, Banner.position == 'middle') \
                .order_by(Banner.created_at.desc(), Banner.id.desc()).all()
            return {"banners": [format_banner(b) for b in banners]}
        return SectionDataService.get_public_data(section)

    @staticmethod
    def brand_lookup():
        """Lowercased brand name/alt -> brand id for active brands"""
        lookup = {}
        for brand in Brand.query.filter(Brand.is_active == True).all():
            for label in (brand.name, brand.alt):
                key = str(label or '').strip().lower()
                if key:
                    lookup[key] = brand.id
        return lookup

    @staticmethod
    def attach_brand_ids(config, lookup):
        """Copy of a brandSection config with catalog ids on each embedded brand"""
        brands = config.get('brands')
        if not isinstance(brands, list):
            return config
        annotated = []
        for brand in brands:
            if not isinstance(brand, dict):
                continue
            key = str(brand.get('name') or '').strip().lower()
            annotated.append(dict(brand, id=lookup.get(key)))
        return dict(config, brands=annotated)
