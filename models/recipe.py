"""
Recipe Models

Contains the Recipe, RecipeIngredient and Step models for managing
recipes and their ordered ingredient and step lists.
"""

from .base import db


class Recipe(db.Model):
    """Recipe with metadata, owned by the user who created it."""
    __tablename__ = 'recipes'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)
    prep_time = db.Column(db.Integer, nullable=True)  # minutes
    cook_time = db.Column(db.Integer, nullable=True)  # minutes
    servings = db.Column(db.Integer, nullable=True)
    source = db.Column(db.String(500), nullable=True)
    notes = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(500), nullable=True)
    instructions = db.Column(db.Text, nullable=True)
    markdown_content = db.Column(db.Text, nullable=True)
    created_by = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=True, index=True)
    created_at = db.Column(db.DateTime, nullable=False, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, nullable=False, server_default=db.func.now(), onupdate=db.func.now())

    author = db.relationship('User', back_populates='recipes')
    ingredients = db.relationship(
        'RecipeIngredient', backref='recipe', lazy=True,
        order_by='RecipeIngredient.order_index',
        cascade='all, delete-orphan', passive_deletes=True,
    )
    steps = db.relationship(
        'Step', backref='recipe', lazy=True,
        order_by='Step.order_index',
        cascade='all, delete-orphan', passive_deletes=True,
    )
    recipe_tags = db.relationship(
        'RecipeTag', backref='recipe', lazy=True,
        cascade='all, delete-orphan', passive_deletes=True,
    )
    favorites = db.relationship(
        'Favorite', back_populates='recipe',
        cascade='all, delete-orphan', passive_deletes=True,
    )


class RecipeIngredient(db.Model):
    """Join table linking recipes to ingredients with amount, unit and position."""
    __tablename__ = 'recipe_ingredients'

    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False, index=True)
    ingredient_id = db.Column(db.Integer, db.ForeignKey('ingredients.id', ondelete='CASCADE'), nullable=False, index=True)
    amount = db.Column(db.Float, nullable=True)
    unit = db.Column(db.String(50), nullable=True)
    order_index = db.Column(db.Integer, nullable=False)
    ingredient = db.relationship('Ingredient')


class Step(db.Model):
    """One instruction of a recipe, positioned by order_index."""
    __tablename__ = 'steps'

    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False, index=True)
    instruction = db.Column(db.Text, nullable=False)
    order_index = db.Column(db.Integer, nullable=False)
