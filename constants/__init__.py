"""
Constants Package

Shared lookup tables and limits used by services and routes.
"""

from .fractions import (
    FRACTION_TOLERANCE,
    MAX_APPROX_DENOMINATOR,
    MAX_APPROX_ITERATIONS,
    COMMON_FRACTIONS,
    UNICODE_FRACTIONS,
    COMMON_FRACTION_PRESETS,
)

from .validation import (
    RECIPE_TEXT_FIELDS,
    RECIPE_INT_FIELDS,
    USER_PROFILE_FIELDS,
    MAX_LENGTHS,
    MAX_INT_FIELD,
)
