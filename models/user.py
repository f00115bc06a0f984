"""
User Model

Contains the User model for registered family members.
"""

from werkzeug.security import generate_password_hash, check_password_hash

from .base import db


class User(db.Model):
    """Registered user; owns recipes and favorites."""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    avatar_url = db.Column(db.String(500), nullable=True)
    is_admin = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, server_default=db.func.now())

    recipes = db.relationship(
        'Recipe', back_populates='author',
        cascade='all, delete-orphan', passive_deletes=True,
    )
    favorites = db.relationship(
        'Favorite', back_populates='user',
        cascade='all, delete-orphan', passive_deletes=True,
    )

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def to_dict(self, include_email=True):
        data = {
            'id': self.id,
            'username': self.username,
            'avatar_url': self.avatar_url,
            'is_admin': self.is_admin,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
        if include_email:
            data['email'] = self.email
        return data
