import logging
from datetime import datetime
from decimal import Decimal
from sqlalchemy.orm import joinedload

from propertyhub import db
from propertyhub.errors import NotFoundError, ValidationError
from propertyhub.models.favorite import Favorite
from propertyhub.models.property import Property, DEFAULT_COLOR_THEME, DEFAULT_LISTED_BY
from propertyhub.models.recommendation import Recommendation
from propertyhub.models.user import User
from propertyhub.services.cache_service import get_result_cache, listing_key, property_key
from propertyhub.services.property_filters import MAX_LIMIT
from propertyhub.utils.sanitizers import sanitize_list, sanitize_string
from propertyhub.utils.validators import parse_bool, parse_date, parse_decimal, parse_int

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('title', 'price', 'city')

# Request key -> (model attribute, kind)
PROPERTY_FIELDS = {
    'title': ('title', 'text'),
    'description': ('description', 'text'),
    'price': ('price', 'price'),
    'area': ('area', 'count'),
    'areaSqFt': ('area', 'count'),
    'bedrooms': ('bedrooms', 'count'),
    'bathrooms': ('bathrooms', 'count'),
    'city': ('city', 'text'),
    'state': ('state', 'text'),
    'country': ('country', 'text'),
    'type': ('type', 'text'),
    'furnished': ('furnished', 'text'),
    'listedBy': ('listed_by', 'text'),
    'listingType': ('listing_type', 'text'),
    'isVerified': ('is_verified', 'bool'),
    'rating': ('rating', 'rating'),
    'amenities': ('amenities', 'list'),
    'tags': ('tags', 'list'),
    'availableFrom': ('available_from', 'date'),
    'imageUrl': ('image_url', 'text'),
    'colorTheme': ('color_theme', 'text'),
}

# Attributes that fall back to a default instead of being cleared
DEFAULTS = {
    'listed_by': DEFAULT_LISTED_BY,
    'color_theme': DEFAULT_COLOR_THEME,
    'is_verified': False,
    'rating': Decimal('0'),
}


def _convert(key, kind, value):
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if kind == 'text':
        return sanitize_string(value) or None
    if kind == 'price':
        return parse_decimal(value, key, minimum=0)
    if kind == 'rating':
        return parse_decimal(value, key, minimum=0, maximum=5)
    if kind == 'count':
        return parse_int(value, key, minimum=0)
    if kind == 'bool':
        return parse_bool(value, key)
    if kind == 'date':
        return parse_date(value, key)
    if kind == 'list':
        if not isinstance(value, (str, list, tuple)):
            raise ValidationError(f'{key} must be a list of strings')
        return sanitize_list(value)
    raise ValueError(kind)


def parse_property_data(data, partial=False):
    """Translate a request body into model attributes.

    Unknown keys are ignored. On create (``partial=False``) the required
    fields must be present and non-empty.
    """
    if not isinstance(data, dict):
        raise ValidationError('Invalid property data')

    fields = {}
    for key, (attr, kind) in PROPERTY_FIELDS.items():
        if key not in data:
            continue
        value = _convert(key, kind, data[key])
        if value is None and attr in DEFAULTS:
            value = DEFAULTS[attr]
        fields[attr] = value

    missing = [f for f in REQUIRED_FIELDS if f in fields and fields[f] in (None, '')]
    if not partial:
        missing += [f for f in REQUIRED_FIELDS if f not in fields]
    if missing:
        raise ValidationError('Invalid property data',
                              payload={'missing': sorted(set(missing))})

    return fields


class PropertyService:
    """Property repository: lookups, filtered listings and owner-checked writes"""

    def __init__(self, result_cache=None):
        self.cache = result_cache if result_cache is not None else get_result_cache()

    def get(self, property_id):
        """Property joined with its owner, or NotFoundError"""
        data = self.cache.get_or_set(property_key(property_id), lambda: self._load(property_id))
        if data is None:
            raise NotFoundError('Property not found')
        return data

    def _load(self, property_id):
        property = db.session.get(Property, property_id, options=[joinedload(Property.owner)])
        if property is None or property.owner is None:
            return None
        return property.to_dict()

    def list(self, filters):
        return self.cache.get_or_set(listing_key(filters.to_dict()), lambda: self._query(filters))

    def _query(self, filters):
        query = filters.apply(Property.query.options(joinedload(Property.owner)))
        pagination = query.order_by(*filters.ordering()).paginate(
            page=filters.page, per_page=filters.limit, max_per_page=MAX_LIMIT, error_out=False
        )
        return {
            'properties': [p.to_dict() for p in pagination.items],
            'total': pagination.total,
            'page': filters.page,
            'totalPages': pagination.pages,
        }

    def list_owned(self, user_id):
        """All properties created by a user, newest first"""
        properties = Property.query.filter_by(created_by=user_id).options(
            joinedload(Property.owner)
        ).order_by(Property.created_at.desc(), Property.id.desc()).all()
        return [p.to_dict() for p in properties]

    def create(self, data, owner_id):
        fields = parse_property_data(data)

        if db.session.get(User, owner_id) is None:
            raise NotFoundError('User not found')

        for attr, default in DEFAULTS.items():
            fields.setdefault(attr, default)

        property = Property(created_by=owner_id, **fields)
        db.session.add(property)
        db.session.commit()

        logger.info('Property %s created by user %s', property.id, owner_id)
        self.cache.flush()
        return property

    def _owned(self, property_id, requester_id):
        property = db.session.get(Property, property_id)
        if property is None or not property.is_owned_by(requester_id):
            raise NotFoundError('Property not found or unauthorized')
        return property

    def update(self, property_id, data, requester_id):
        property = self._owned(property_id, requester_id)
        fields = parse_property_data(data, partial=True)

        for attr, value in fields.items():
            setattr(property, attr, value)
        property.updated_at = datetime.utcnow()
        db.session.commit()

        logger.info('Property %s updated by user %s', property.id, requester_id)
        self.cache.flush()
        return property

    def delete(self, property_id, requester_id):
        property = self._owned(property_id, requester_id)

        # Remove dependents first
        Favorite.query.filter_by(property_id=property.id).delete(synchronize_session=False)
        Recommendation.query.filter_by(property_id=property.id).delete(synchronize_session=False)
        db.session.delete(property)
        db.session.commit()

        logger.info('Property %s deleted by user %s', property_id, requester_id)
        self.cache.flush()
        return True
