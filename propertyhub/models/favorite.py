from propertyhub import db
from datetime import datetime


class Favorite(db.Model):
    __tablename__ = 'favorites'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    property_id = db.Column(db.Integer, db.ForeignKey('properties.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Ensure a user can only favorite a property once
    __table_args__ = (db.UniqueConstraint('user_id', 'property_id', name='uq_user_property_favorite'),)

    property = db.relationship('Property')
    user = db.relationship('User', back_populates='favorites')

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'propertyId': self.property_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<Favorite user={self.user_id} property={self.property_id}>'
