"""
Ingredient Model

Contains the shared Ingredient model. Names are stored normalized
(trimmed, lowercase) so one row serves every recipe that uses it.
"""

from .base import db


class Ingredient(db.Model):
    """Ingredient shared across recipes, unique by normalized name."""
    __tablename__ = 'ingredients'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), unique=True, nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, server_default=db.func.now())

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
