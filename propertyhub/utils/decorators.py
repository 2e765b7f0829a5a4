from functools import wraps
from flask import jsonify, current_app
from flask_jwt_extended import get_jwt_identity
from propertyhub import db
from propertyhub.errors import APIError, AuthenticationError


def handle_errors(failure_message):
    """Turn APIError into its JSON response and anything else into a 500"""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except APIError as e:
                db.session.rollback()
                return jsonify(e.to_dict()), e.status_code
            except Exception as e:
                db.session.rollback()
                current_app.logger.exception(failure_message)
                return jsonify({'message': failure_message, 'error': str(e)}), 500
        return wrapper
    return decorator


def current_user_id():
    """Id of the authenticated caller, from the verified token"""
    identity = get_jwt_identity()
    try:
        return int(identity)
    except (TypeError, ValueError):
        raise AuthenticationError('Invalid token')
