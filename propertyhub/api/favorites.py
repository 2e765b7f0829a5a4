from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required
from propertyhub.services import relationship_service
from propertyhub.utils.decorators import handle_errors, current_user_id

favorites_bp = Blueprint('favorites', __name__)


@favorites_bp.route('/', methods=['GET'], strict_slashes=False)
@jwt_required()
@handle_errors('Failed to fetch favorites')
def get_favorites():
    """Get the current user's favorited properties"""
    return jsonify(relationship_service.list_favorites(current_user_id())), 200


@favorites_bp.route('/<int:property_id>', methods=['POST'])
@jwt_required()
@handle_errors('Failed to add favorite')
def add_favorite(property_id):
    """Favorite a property; repeating the call returns the existing favorite"""
    favorite, created = relationship_service.add_favorite(current_user_id(), property_id)
    return jsonify(favorite.to_dict()), 201 if created else 200


@favorites_bp.route('/<int:property_id>', methods=['DELETE'])
@jwt_required()
@handle_errors('Failed to remove favorite')
def remove_favorite(property_id):
    """Remove a property from the current user's favorites"""
    relationship_service.remove_favorite(current_user_id(), property_id)
    return '', 204
