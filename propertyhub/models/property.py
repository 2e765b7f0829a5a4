from datetime import datetime
from propertyhub import db

LIST_DELIMITER = '|'
DEFAULT_COLOR_THEME = '#6ab45e'
DEFAULT_LISTED_BY = 'Owner'


def encode_list(values):
    """Join a sequence of strings into the stored pipe-delimited form"""
    if not values:
        return None
    return LIST_DELIMITER.join(v.strip() for v in values if v and v.strip())


def decode_list(text):
    """Split a stored pipe-delimited string back into a list"""
    if not text:
        return []
    return [v.strip() for v in text.split(LIST_DELIMITER) if v.strip()]


class Property(db.Model):
    __tablename__ = 'properties'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)

    # Pricing & Details
    price = db.Column(db.Numeric(12, 2), nullable=False, index=True)
    area = db.Column(db.Integer, nullable=True)  # in square feet
    bedrooms = db.Column(db.Integer, nullable=True)
    bathrooms = db.Column(db.Integer, nullable=True)

    # Location
    city = db.Column(db.String(100), nullable=False, index=True)
    state = db.Column(db.String(100), nullable=True)
    country = db.Column(db.String(100), nullable=True)

    # Listing terms
    type = db.Column(db.String(50), nullable=True)  # House, Apartment, Condo, Villa, Townhouse
    furnished = db.Column(db.String(20), nullable=True)  # Yes, No, Partially
    listed_by = db.Column(db.String(100), nullable=False, default=DEFAULT_LISTED_BY)
    listing_type = db.Column(db.String(20), nullable=True)  # Sale, Rent, Lease
    is_verified = db.Column(db.Boolean, nullable=False, default=False)
    rating = db.Column(db.Numeric(3, 2), nullable=False, default=0)

    # Pipe-delimited in storage, lists everywhere else
    amenities_text = db.Column('amenities', db.Text, nullable=True)
    tags_text = db.Column('tags', db.Text, nullable=True)

    available_from = db.Column(db.Date, nullable=True)
    image_url = db.Column(db.String(500), nullable=True)
    color_theme = db.Column(db.String(20), nullable=False, default=DEFAULT_COLOR_THEME)

    # Relationships
    created_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    owner = db.relationship('User', back_populates='properties', foreign_keys=[created_by])

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    @property
    def amenities(self):
        return decode_list(self.amenities_text)

    @amenities.setter
    def amenities(self, values):
        self.amenities_text = encode_list(values)

    @property
    def tags(self):
        return decode_list(self.tags_text)

    @tags.setter
    def tags(self, values):
        self.tags_text = encode_list(values)

    def is_owned_by(self, user_id):
        return self.created_by == user_id

    def owner_summary(self):
        """Owner identity, or a placeholder when the owner cannot be resolved"""
        if self.owner is None:
            return {'id': self.created_by, 'name': 'Unknown', 'email': ''}
        return {
            'id': self.owner.id,
            'name': self.owner.name,
            'email': self.owner.email,
        }

    def to_dict(self, include_owner=True):
        data = {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'price': float(self.price) if self.price is not None else None,
            'area': self.area,
            'bedrooms': self.bedrooms,
            'bathrooms': self.bathrooms,
            'city': self.city,
            'state': self.state,
            'country': self.country,
            'type': self.type,
            'furnished': self.furnished,
            'listedBy': self.listed_by,
            'listingType': self.listing_type,
            'isVerified': bool(self.is_verified),
            'rating': float(self.rating) if self.rating is not None else 0.0,
            'amenities': self.amenities,
            'tags': self.tags,
            'availableFrom': self.available_from.isoformat() if self.available_from else None,
            'imageUrl': self.image_url,
            'colorTheme': self.color_theme,
            'createdBy': self.created_by,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

        if include_owner:
            data['owner'] = self.owner_summary()

        return data

    def __repr__(self):
        return f'<Property {self.title}>'
