from flask import Blueprint, request, current_app
from sqlalchemy.exc import IntegrityError
from models import db
from models.homepage_section import HomepageSection, SECTION_TYPES, default_display_on
from api.middleware import require_admin
from api.utils import error_response, cached_json_response, validate_request_json, parse_bool
from services.section_data import SectionDataService

homepage_sections_bp = Blueprint('homepage_sections', __name__)

EDITABLE_FIELDS = (
    'name', 'type', 'title', 'subtitle', 'description', 'config',
    'ordering', 'is_active', 'is_published', 'display_on',
)

def format_section(section, config=None):
    """Format homepage section for API response"""
    return {
        "id": section.id,
        "name": section.name,
        "type": section.type,
        "title": section.title,
        "subtitle": section.subtitle,
        "description": section.description,
        "config": config if config is not None else (section.config or {}),
        "ordering": section.ordering,
        "is_active": section.is_active,
        "is_published": section.is_published,
        "display_on": section.display_on or default_display_on(),
        "created_at": section.created_at.isoformat() if section.created_at else None,
        "updated_at": section.updated_at.isoformat() if section.updated_at else None,
    }

def ordered_sections():
    return HomepageSection.query.order_by(HomepageSection.ordering.asc(), HomepageSection.created_at.asc(), HomepageSection.id.asc())

def invalid_type_response(section_type):
    return error_response(
        f"Invalid section type: {section_type}. Valid types are: {', '.join(SECTION_TYPES)}",
        "INVALID_TYPE",
        400,
        received_type=section_type
    )

def name_taken(name, exclude_id=None):
    query = HomepageSection.query.filter(HomepageSection.name == name)
    if exclude_id is not None:
        query = query.filter(HomepageSection.id != exclude_id)
    return query.first() is not None

# Public routes

@homepage_sections_bp.route('/public', methods=['GET'])
def list_public_sections():
    """Active and published sections for the homepage"""
    try:
        sections = ordered_sections().filter(
            HomepageSection.is_active == True,
            HomepageSection.is_published == True
        ).all()
        current_app.logger.info(f"Public homepage sections: {len(sections)} active and published")

        lookup = None
        result = []
        for section in sections:
            config = section.config or {}
            if section.type == 'brandSection':
                if lookup is None:
                    lookup = SectionDataService.brand_lookup()
                config = SectionDataService.attach_brand_ids(config, lookup)
            result.append(format_section(section, config))

        return cached_json_response(result, current_app.config.get('PUBLIC_SECTIONS_MAX_AGE', 300))
    except Exception as e:
        current_app.logger.error(f"Error fetching public homepage sections: {str(e)}")
        return error_response(str(e), "INTERNAL_ERROR", 500)

@homepage_sections_bp.route('/<int:section_id>/data/public', methods=['GET'])
def get_public_section_data(section_id):
    """Type specific data for a published section"""
    try:
        section = HomepageSection.query.get(section_id)
        if not section:
            return error_response("Section not found", "NOT_FOUND", 404)
        if not section.is_visible:
            return error_response("Section is not published", "NOT_PUBLISHED", 403)
        return SectionDataService.get_public_data(section)
    except Exception as e:
        current_app.logger.error(f"Error fetching data for section {section_id}: {str(e)}")
        return error_response(str(e), "INTERNAL_ERROR", 500)

# Admin routes

@homepage_sections_bp.route('', methods=['GET'])
@require_admin
def list_sections():
    """List all sections with optional type/active/published filters"""
    try:
        query = ordered_sections()
        section_type = request.args.get('type')
        if section_type:
            query = query.filter(HomepageSection.type == section_type)
        active = parse_bool(request.args.get('active'))
        if active is not None:
            query = query.filter(HomepageSection.is_active == active)
        published = parse_bool(request.args.get('published'))
        if published is not None:
            query = query.filter(HomepageSection.is_published == published)
        return [format_section(s) for s in query.all()]
    except Exception as e:
        return error_response(str(e), "INTERNAL_ERROR", 500)

@homepage_sections_bp.route('/<int:section_id>', methods=['GET'])
@require_admin
def get_section(section_id):
    """Get section by ID"""
    section = HomepageSection.query.get(section_id)
    if not section:
        return error_response("Section not found", "NOT_FOUND", 404)
    return format_section(section)

@homepage_sections_bp.route('', methods=['POST'])
@require_admin
@validate_request_json(required_fields=['name', 'type'])
def create_section():
    """Create a new homepage section"""
    data = request.get_json(force=True, silent=True)
    try:
        if data['type'] not in SECTION_TYPES:
            return invalid_type_response(data['type'])
        if name_taken(data['name']):
            return error_response("A section with this name already exists", "DUPLICATE_NAME", 400, field='name', value=data['name'])

        ordering = data.get('ordering')
        if ordering is None:
            ordering = HomepageSection.next_ordering()

        section = HomepageSection(
            name=data['name'],
            type=data['type'],
            title=data.get('title'),
            subtitle=data.get('subtitle'),
            description=data.get('description'),
            config=data.get('config') or {},
            ordering=int(ordering),
            is_active=data.get('is_active', True),
            is_published=data.get('is_published', False),
            display_on=data.get('display_on') or default_display_on(),
        )
        db.session.add(section)
        db.session.commit()

        current_app.logger.info(f"Homepage section created: {section.id} ({section.type})")
        return format_section(section), 201
    except IntegrityError:
        db.session.rollback()
        return error_response("A section with this name already exists", "DUPLICATE_NAME", 400, field='name', value=data.get('name'))
    except (TypeError, ValueError) as e:
        db.session.rollback()
        return error_response(str(e), "INVALID_PAYLOAD", 400)
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error creating homepage section: {str(e)}")
        return error_response(str(e), "INTERNAL_ERROR", 500)

@homepage_sections_bp.route('/reorder', methods=['PATCH'])
@require_admin
def reorder_sections():
    """Apply [{"id": .., "ordering": ..}, ...] in one go"""
    try:
        data = request.get_json(force=True, silent=True) or {}
        order = data.get('order') if isinstance(data, dict) else None
        if not isinstance(order, list):
            return error_response("Order payload must be an array", "INVALID_PAYLOAD", 400)

        updated = 0
        for item in order:
            if not isinstance(item, dict) or not item.get('id'):
                continue
            section = HomepageSection.query.get(item['id'])
            if section:
                section.ordering = int(item.get('ordering') or 0)
                updated += 1

        db.session.commit()
        return {"updated": updated}
    except Exception as e:
        db.session.rollback()
        return error_response(str(e), "INTERNAL_ERROR", 500)

@homepage_sections_bp.route('/<int:section_id>', methods=['PUT'])
@require_admin
@validate_request_json()
def update_section(section_id):
    """Update the fields present in the payload"""
    section = HomepageSection.query.get(section_id)
    if not section:
        return error_response("Section not found", "NOT_FOUND", 404)

    data = request.get_json(force=True, silent=True)
    try:
        if 'type' in data and data['type'] not in SECTION_TYPES:
            return invalid_type_response(data['type'])
        if data.get('name') and name_taken(data['name'], exclude_id=section.id):
            return error_response("A section with this name already exists", "DUPLICATE_NAME", 400, field='name', value=data['name'])

        for field in EDITABLE_FIELDS:
            if field in data and data[field] is not None:
                setattr(section, field, data[field])

        db.session.commit()
        return format_section(section)
    except IntegrityError:
        db.session.rollback()
        return error_response("A section with this name already exists", "DUPLICATE_NAME", 400, field='name')
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error updating homepage section {section_id}: {str(e)}")
        return error_response(str(e), "INTERNAL_ERROR", 500)

@homepage_sections_bp.route('/<int:section_id>', methods=['DELETE'])
@require_admin
def delete_section(section_id):
    """Delete homepage section"""
    section = HomepageSection.query.get(section_id)
    if not section:
        return error_response("Section not found", "NOT_FOUND", 404)
    try:
        db.session.delete(section)
        db.session.commit()
        return {"message": "Section deleted successfully"}
    except Exception as e:
        db.session.rollback()
        return error_response(str(e), "INTERNAL_ERROR", 500)

@homepage_sections_bp.route('/<int:section_id>/data', methods=['GET'])
@require_admin
def get_section_data(section_id):
    """Admin preview data, available whatever the publish state"""
    try:
        section = HomepageSection.query.get(section_id)
        if not section:
            return error_response("Section not found", "NOT_FOUND", 404)
        data = SectionDataService.get_admin_data(section)
        return cached_json_response(data, current_app.config.get('SECTION_DATA_MAX_AGE', 120))
    except Exception as e:
        return error_response(str(e), "INTERNAL_ERROR", 500)
