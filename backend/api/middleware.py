import hmac
from functools import wraps
from flask import request, current_app
from api.utils import error_response

def require_admin(f):
    """
    Decorator guarding the admin section endpoints.

    Callers authenticate with the X-API-Key and X-API-Secret headers, which
    must match the API_KEY / API_SECRET configured for the application.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        api_key = request.headers.get('X-API-Key')
        api_secret = request.headers.get('X-API-Secret')

        if not api_key or not api_secret:
            return error_response(
                "API Key and Secret Key are required. Please provide X-API-Key and X-API-Secret headers.",
                "MISSING_CREDENTIALS",
                401
            )

        master_key = current_app.config.get('API_KEY') or ''
        master_secret = current_app.config.get('API_SECRET') or ''

        if not (hmac.compare_digest(api_key, master_key) and hmac.compare_digest(api_secret, master_secret)):
            return error_response("Invalid API credentials", "INVALID_CREDENTIALS", 401)

        return f(*args, **kwargs)
    return decorated_function
