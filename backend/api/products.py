from flask import Blueprint, request, current_app
from models.product import Product
from api.utils import error_response, parse_bool

products_bp = Blueprint('products', __name__)

# filter=<name> shortcuts accepted by the product list
FLAG_FILTERS = {
    'top-selling': 'is_top_selling',
    'best-selling': 'is_top_selling',
    'trending': 'is_trending',
    'new': 'is_new_arrival',
    'featured': 'is_featured',
}

def format_upload(url):
    """Upload reference as exposed to clients"""
    return {"url": url} if url else None

def format_product(product):
    """Format product for API response"""
    return {
        "id": product.id,
        "name": product.name,
        "price": float(product.price) if product.price is not None else 0.0,
        "discount": float(product.discount) if product.discount else 0,
        "final_price": product.final_price,
        "stock": product.stock,
        "image": product.image,
        "image_upload": format_upload(product.image_upload_url),
        "category": {"id": product.category.id, "name": product.category.name} if product.category else None,
        "department": {"id": product.department.id, "name": product.department.name} if product.department else None,
        "is_new_arrival": product.is_new_arrival,
        "is_top_selling": product.is_top_selling,
        "is_trending": product.is_trending,
        "is_featured": product.is_featured,
        "created_at": product.created_at.isoformat() if product.created_at else None,
    }

def active_products():
    """Base query for storefront products"""
    return Product.query.filter(Product.is_active == True)

@products_bp.route('', methods=['GET'])
def list_products():
    """
    List active products.

    Query Params:
        filter (str): top-selling, best-selling, trending, new, featured
        is_new_arrival, is_top_selling, is_trending, is_featured (bool)
        category_id (int), limit (int, default 20, max 100)
    """
    try:
        query = active_products()

        flag = FLAG_FILTERS.get(request.args.get('filter', '').strip())
        if flag:
            query = query.filter(getattr(Product, flag) == True)

        for column in ('is_new_arrival', 'is_top_selling', 'is_trending', 'is_featured'):
            value = parse_bool(request.args.get(column))
            if value is not None:
                query = query.filter(getattr(Product, column) == value)

        category_id = request.args.get('category_id', type=int)
        if category_id:
            query = query.filter(Product.category_id == category_id)

        limit = request.args.get('limit', 20, type=int) or 20
        limit = max(1, min(limit, 100))

        products = query.order_by(Product.created_at.desc(), Product.id.desc()).limit(limit).all()
        return [format_product(p) for p in products]
    except Exception as e:
        current_app.logger.error(f"Product list error: {str(e)}")
        return error_response(str(e), "INTERNAL_ERROR", 500)

@products_bp.route('/<int:product_id>', methods=['GET'])
def get_product(product_id):
    """Get product by ID"""
    product = active_products().filter(Product.id == product_id).first()
    if not product:
        return error_response("Product not found", "NOT_FOUND", 404)
    return format_product(product)
