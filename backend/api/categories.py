from flask import Blueprint, request, current_app
from models.product import Category, Department
from api.utils import error_response
from api.products import format_upload

categories_bp = Blueprint('categories', __name__)

def format_department(department):
    """Format department for API response"""
    return {
        "id": department.id,
        "name": department.name,
        "image": department.image,
        "image_upload": format_upload(department.image_upload_url),
    }

def format_category(category):
    """Format category for API response"""
    return {
        "id": category.id,
        "name": category.name,
        "image": category.image,
        "image_upload": format_upload(category.image_upload_url),
        "department": {"id": category.department.id, "name": category.department.name} if category.department else None,
    }

def format_subcategory(subcategory):
    """Format subcategory for API response"""
    return {
        "id": subcategory.id,
        "name": subcategory.name,
        "image": subcategory.image,
        "image_upload": format_upload(subcategory.image_upload_url),
        "ordering": subcategory.ordering,
        "category": {"id": subcategory.category.id, "name": subcategory.category.name} if subcategory.category else None,
    }

@categories_bp.route('', methods=['GET'])
def list_categories():
    """List active categories, optionally limited"""
    try:
        query = Category.query.filter(Category.is_active == True).order_by(Category.name.asc(), Category.id.asc())
        limit = request.args.get('limit', type=int)
        if limit and limit > 0:
            query = query.limit(limit)
        return [format_category(cat) for cat in query.all()]
    except Exception as e:
        current_app.logger.error(f"Category list error: {str(e)}")
        return error_response(str(e), "INTERNAL_ERROR", 500)

@categories_bp.route('/<int:category_id>', methods=['GET'])
def get_category(category_id):
    """Get category by ID"""
    category = Category.query.get(category_id)
    if not category or not category.is_active:
        return error_response("Category not found", "NOT_FOUND", 404)
    return format_category(category)

def active_departments():
    return Department.query.filter(Department.is_active == True).order_by(Department.name.asc()).all()
