from flask import Blueprint, current_app
from models.media import Slider
from api.utils import error_response
from api.products import format_upload

sliders_bp = Blueprint('sliders', __name__)

def format_slider(slider):
    """Format slider for API response"""
    return {
        "id": slider.id,
        "title": slider.title,
        "description": slider.description,
        "image": slider.image,
        "image_upload": format_upload(slider.image_upload_url),
        "image_mobile_upload": format_upload(slider.image_mobile_upload_url),
        "image_alt": slider.image_alt,
        "button_text": slider.button_text,
        "button_link": slider.button_link,
        "link": slider.link,
        "order": slider.order,
    }

def format_banner(banner):
    """Format banner for API response"""
    return {
        "id": banner.id,
        "title": banner.title,
        "image": banner.image,
        "image_upload": format_upload(banner.image_upload_url),
        "link": banner.link,
        "position": banner.position,
    }

def active_sliders():
    return Slider.query.filter(Slider.is_active == True).order_by(Slider.order.asc(), Slider.id.asc()).all()

@sliders_bp.route('', methods=['GET'])
def list_sliders():
    """List active sliders in display order"""
    try:
        return [format_slider(s) for s in active_sliders()]
    except Exception as e:
        current_app.logger.error(f"Slider list error: {str(e)}")
        return error_response(str(e), "INTERNAL_ERROR", 500)
