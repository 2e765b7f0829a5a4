from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from propertyhub.services.property_filters import PropertyFilters
from propertyhub.services.property_service import PropertyService
from propertyhub.utils.decorators import handle_errors, current_user_id

properties_bp = Blueprint('properties', __name__)


@properties_bp.route('/', methods=['GET'], strict_slashes=False)
@handle_errors('Failed to fetch properties')
def get_properties():
    """Get all properties with filters, sorting and pagination"""
    filters = PropertyFilters.from_args(request.args)
    return jsonify(PropertyService().list(filters)), 200


@properties_bp.route('/my-properties', methods=['GET'])
@jwt_required()
@handle_errors('Failed to fetch properties')
def get_my_properties():
    """Get properties listed by the current user"""
    properties = PropertyService().list_owned(current_user_id())
    return jsonify({'properties': properties}), 200


@properties_bp.route('/<int:property_id>', methods=['GET'])
@handle_errors('Failed to fetch property')
def get_property(property_id):
    """Get a single property by ID"""
    return jsonify(PropertyService().get(property_id)), 200


@properties_bp.route('/', methods=['POST'], strict_slashes=False)
@jwt_required()
@handle_errors('Failed to create property')
def create_property():
    """Create a new property listing"""
    user_id = current_user_id()
    data = request.get_json(silent=True)

    property = PropertyService().create(data, user_id)
    return jsonify(property.to_dict()), 201


@properties_bp.route('/<int:property_id>', methods=['PATCH', 'PUT'])
@jwt_required()
@handle_errors('Failed to update property')
def update_property(property_id):
    """Update a property listing owned by the current user"""
    data = request.get_json(silent=True)

    property = PropertyService().update(property_id, data, current_user_id())

    return jsonify(property.to_dict()), 200


@properties_bp.route('/<int:property_id>', methods=['DELETE'])
@jwt_required()
@handle_errors('Failed to delete property')
def delete_property(property_id):
    """Delete a property listing owned by the current user"""
    PropertyService().delete(property_id, current_user_id())
    return '', 204
