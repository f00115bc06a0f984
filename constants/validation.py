"""
Validation Constants

Contains field whitelists and limits for validating user input
before it reaches the database.
"""

# Recipe columns a client may set on create/update
RECIPE_TEXT_FIELDS = (
    'title', 'description', 'source', 'notes',
    'image_url', 'instructions', 'markdown_content',
)
RECIPE_INT_FIELDS = ('prep_time', 'cook_time', 'servings')

# User columns a profile edit may change
USER_PROFILE_FIELDS = ('username', 'email', 'avatar_url')

# Maximum field lengths
MAX_LENGTHS = {
    'title': 200,
    'description': 5000,
    'source': 500,
    'notes': 20000,
    'image_url': 500,
    'instructions': 50000,
    'markdown_content': 100000,
    'ingredient_name': 200,
    'unit': 50,
    'step': 10000,
    'tag_name': 100,
    'username': 80,
    'email': 255,
    'avatar_url': 500,
}

# Upper bound for minutes / servings style integers
MAX_INT_FIELD = 100000
