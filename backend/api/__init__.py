from flask import Blueprint
from flask_cors import CORS

api = Blueprint('api', __name__, url_prefix='/api')

CORS(api, resources={
    r"/*": {
        "origins": "*",
        "methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        "allow_headers": ["Content-Type", "X-API-Key", "X-API-Secret", "If-None-Match"]
    }
})

# Import all modules to ensure registration
from . import products, categories, sliders, homepage_sections

# Register Blueprints
api.register_blueprint(products.products_bp, url_prefix='/products')
api.register_blueprint(categories.categories_bp, url_prefix='/categories')
api.register_blueprint(sliders.sliders_bp, url_prefix='/sliders')
api.register_blueprint(homepage_sections.homepage_sections_bp, url_prefix='/homepage-sections')
