"""
Tag Models

Contains the Tag model and the RecipeTag join table.
"""

from .base import db


class Tag(db.Model):
    """Tag shared across recipes, unique by normalized name."""
    __tablename__ = 'tags'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, server_default=db.func.now())

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class RecipeTag(db.Model):
    """Join table linking recipes to tags; one row per (recipe, tag) pair."""
    __tablename__ = 'recipe_tags'

    recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id', ondelete='CASCADE'), primary_key=True)
    tag_id = db.Column(db.Integer, db.ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True, index=True)
    tag = db.relationship('Tag')
