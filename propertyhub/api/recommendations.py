from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from propertyhub.errors import ValidationError
from propertyhub.services import relationship_service
from propertyhub.utils.decorators import handle_errors, current_user_id
from propertyhub.utils.sanitizers import sanitize_string
from propertyhub.utils.validators import parse_int

recommendations_bp = Blueprint('recommendations', __name__)


@recommendations_bp.route('/recommend', methods=['POST'])
@jwt_required()
@handle_errors('Failed to create recommendation')
def create_recommendation():
    """Recommend a property to another user by email"""
    data = request.get_json(silent=True) or {}

    recipient_email = sanitize_string(data.get('recipientEmail'))
    if not recipient_email or data.get('propertyId') is None:
        raise ValidationError('Recipient email and property are required')
    property_id = parse_int(data.get('propertyId'), 'propertyId')

    recommendation = relationship_service.recommend(current_user_id(), recipient_email, property_id)
    if not recommendation:
        raise ValidationError('Failed to create recommendation. User or property not found.')

    return jsonify(recommendation.to_dict()), 201


@recommendations_bp.route('/recommendations', methods=['GET'])
@jwt_required()
@handle_errors('Failed to fetch recommendations')
def get_recommendations():
    """Get properties recommended to the current user"""
    return jsonify(relationship_service.list_recommendations_received(current_user_id())), 200
