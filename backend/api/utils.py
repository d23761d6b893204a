import hashlib
import json
from flask import jsonify, request, current_app, make_response
from functools import wraps

def error_response(error_message, error_code=None, status_code=400, **extra):
    """Create a standardized error response"""
    response = {
        "success": False,
        "error": error_message
    }
    if error_code:
        response["code"] = error_code
    response.update(extra)
    return jsonify(response), status_code

def generate_etag(data):
    """MD5 fingerprint of the JSON payload"""
    payload = json.dumps(data, sort_keys=True, default=str)
    return hashlib.md5(payload.encode('utf-8')).hexdigest()

def cached_json_response(data, max_age=300):
    """
    JSON response with cache headers for public endpoints.

    Development responses are never cached. In production the payload is
    fingerprinted with an ETag and a matching If-None-Match yields 304.
    """
    if current_app.config.get('FLASK_ENV') != 'production':
        response = make_response(jsonify(data))
        response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate, max-age=0'
        response.headers['Pragma'] = 'no-cache'
        response.headers['Expires'] = '0'
        return response

    etag = f'"{generate_etag(data)}"'
    if request.headers.get('If-None-Match') == etag:
        response = make_response('', 304)
    else:
        response = make_response(jsonify(data))
    response.headers['Cache-Control'] = f'public, max-age={max_age}, s-maxage={max_age * 2}'
    response.headers['ETag'] = etag
    response.headers['Vary'] = 'Accept-Encoding'
    return response

def validate_request_json(required_fields=None):
    """Decorator to validate JSON request data"""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            # Accept bodies sent without a JSON content type; the parsed
            # result is cached on the request for the view function
            data = request.get_json(force=True, silent=True)
            if not isinstance(data, dict):
                return error_response("Request must be a JSON object", "INVALID_PAYLOAD", 400)

            if required_fields:
                missing_fields = [field for field in required_fields if not data.get(field)]
                if missing_fields:
                    return error_response(
                        f"Missing required fields: {', '.join(missing_fields)}",
                        "MISSING_FIELDS",
                        400
                    )

            return f(*args, **kwargs)
        return decorated_function
    return decorator

def parse_bool(value):
    """Interpret a query string flag"""
    if value is None:
        return None
    return str(value).strip().lower() in ('true', '1', 'yes', 'on')
