"""
Authentication routes for the Faculty Marks Portal
Token login and the bearer-token guard shared by the API blueprints
"""

from functools import wraps

from flask import Blueprint, request, jsonify, g

from services.auth_service import AuthService
from utils.validators import validate_username

auth_bp = Blueprint('auth', __name__)

def api_response(message, data=None, code=200):
    """Uniform ``{message, data, code}`` JSON body"""
    return jsonify({
        'message': message,
        'data': data if data is not None else [],
        'code': code
    }), code

def token_required(f):
    """Decorator to require a valid ``Authorization: Bearer <token>`` header"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        header = request.headers.get('Authorization', '')
        if not header:
            return api_response("Access denied. No token provided.", code=401)

        # Accept the token with or without the 'Bearer ' prefix
        token = header[7:] if header.startswith('Bearer ') else header
        faculty, message = AuthService.verify_token(token.strip())
        if faculty is None:
            return api_response(message, code=401)

        g.current_faculty = faculty
        return f(*args, **kwargs)

    return decorated_function

@auth_bp.route('/faculty/login', methods=['POST'])
def faculty_login():
    """Exchange faculty credentials for a bearer token"""
    body = request.get_json(silent=True) or {}
    username = (body.get('username') or '').strip()
    password = body.get('password') or ''

    if not username or not password:
        return api_response('Username and password are required', code=400)

    is_valid, message = validate_username(username)
    if not is_valid:
        return api_response(message, code=400)

    success, user, message = AuthService.authenticate_faculty(username, password)
    if not success:
        return api_response(message, code=401)

    return api_response(message, {
        'token': AuthService.issue_token(user),
        'faculty': user.to_dict()
    })
