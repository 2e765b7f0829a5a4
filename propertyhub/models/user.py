from datetime import datetime
from flask import current_app
from propertyhub import db
import bcrypt


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    properties = db.relationship('Property', back_populates='owner', lazy='dynamic',
                                 foreign_keys='Property.created_by')
    favorites = db.relationship('Favorite', back_populates='user', lazy='dynamic')

    def set_password(self, password):
        """Hash and set user password"""
        salt = bcrypt.gensalt(rounds=current_app.config.get('BCRYPT_ROUNDS', 10))
        self.password_hash = bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

    def check_password(self, password):
        """Check if provided password matches hash"""
        if not self.password_hash or not password:
            return False
        return bcrypt.checkpw(password.encode('utf-8'), self.password_hash.encode('utf-8'))

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
        }

    def __repr__(self):
        return f'<User {self.email}>'
