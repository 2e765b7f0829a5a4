from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from propertyhub import db, limiter
from propertyhub.errors import NotFoundError
from propertyhub.models.user import User
from propertyhub.services import auth_service
from propertyhub.utils.decorators import handle_errors, current_user_id

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("10 per minute")
@handle_errors('Registration failed')
def register():
    """Register a new user"""
    data = request.get_json(silent=True) or {}

    user, token = auth_service.register(
        data.get('name'),
        data.get('email'),
        data.get('password'),
    )

    return jsonify({
        'user': user.to_dict(),
        'token': token
    }), 201


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("10 per minute")
@handle_errors('Login failed')
def login():
    """Login user"""
    data = request.get_json(silent=True) or {}

    user, token = auth_service.login(data.get('email'), data.get('password'))

    return jsonify({
        'user': user.to_dict(),
        'token': token
    }), 200


@auth_bp.route('/me', methods=['GET'])
@jwt_required()
@handle_errors('Failed to fetch user')
def me():
    """Get the current user"""
    user = db.session.get(User, current_user_id())
    if not user:
        raise NotFoundError('User not found')

    return jsonify(user.to_dict()), 200
