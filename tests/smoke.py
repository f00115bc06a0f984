"""
Smoke tests for the family recipes API.
Run with: python tests/smoke.py
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def test_app_imports():
    """Verify the app factory and database can be imported without errors."""
    from app import create_app
    from models import db
    assert callable(create_app)
    assert db is not None
    print("OK: App imports successfully")


def test_models_import():
    """Verify models can be imported."""
    from models import User, Recipe, RecipeIngredient, Step, Ingredient, Tag, RecipeTag, Favorite
    assert Recipe.__tablename__ == 'recipes'
    assert RecipeIngredient.__tablename__ == 'recipe_ingredients'
    assert all(model is not None for model in (User, Step, Ingredient, Tag, RecipeTag, Favorite))
    print("OK: Models import successfully")


def test_security_utils_import():
    """Verify sanitization and auth utilities can be imported."""
    from utils import sanitize_text, sanitize_url, issue_token, login_required
    assert callable(sanitize_text)
    assert callable(sanitize_url)
    assert callable(issue_token)
    assert callable(login_required)
    print("OK: Security utils import successfully")


def test_fraction_constants_unchanged():
    """Verify the fraction constants have expected values."""
    from constants import MAX_APPROX_DENOMINATOR, FRACTION_TOLERANCE, COMMON_FRACTIONS

    # These values must not change
    assert MAX_APPROX_DENOMINATOR == 16
    assert FRACTION_TOLERANCE == 1e-6
    assert (1, 2) in COMMON_FRACTIONS
    assert (7, 8) in COMMON_FRACTIONS
    print("OK: Fraction constants unchanged")


def test_app_runs():
    """Verify app can create test client and answer the health check."""
    from app import create_app
    app = create_app('testing')
    with app.test_client() as client:
        response = client.get('/health')
        assert response.status_code == 200
        assert response.get_json()['status'] == 'ok'
        print("OK: App serves health check")


if __name__ == '__main__':
    print("Running smoke tests...\n")

    tests = [
        test_app_imports,
        test_models_import,
        test_security_utils_import,
        test_fraction_constants_unchanged,
        test_app_runs,
    ]

    failed = 0
    for test in tests:
        try:
            test()
        except Exception as e:
            print(f"FAIL: {test.__name__} - {e}")
            failed += 1

    print(f"\n{'='*40}")
    if failed:
        print(f"FAILED: {failed}/{len(tests)} tests")
        sys.exit(1)
    else:
        print(f"PASSED: {len(tests)}/{len(tests)} tests")
        sys.exit(0)
