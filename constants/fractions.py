"""
Fraction Constants

Calibration table and limits for converting between stored decimal
amounts and the fractions cooks actually write.
"""

# Absolute tolerance when comparing a remainder against a fraction
FRACTION_TOLERANCE = 1.0e-6

# Continued-fraction approximation limits
MAX_APPROX_DENOMINATOR = 16
MAX_APPROX_ITERATIONS = 20

# Common cooking fractions as (numerator, denominator), checked in order
COMMON_FRACTIONS = [
    (1, 2), (1, 3), (2, 3), (1, 4), (3, 4),
    (1, 8), (3, 8), (5, 8), (7, 8),
    (1, 6), (5, 6),
]

# Unicode fraction characters -> ASCII fraction text
UNICODE_FRACTIONS = {
    '\u00bd': '1/2',  # ½
    '\u2153': '1/3',  # ⅓
    '\u2154': '2/3',  # ⅔
    '\u00bc': '1/4',  # ¼
    '\u00be': '3/4',  # ¾
    '\u2155': '1/5',  # ⅕
    '\u2156': '2/5',  # ⅖
    '\u2157': '3/5',  # ⅗
    '\u2158': '4/5',  # ⅘
    '\u2159': '1/6',  # ⅙
    '\u215a': '5/6',  # ⅚
    '\u215b': '1/8',  # ⅛
    '\u215c': '3/8',  # ⅜
    '\u215d': '5/8',  # ⅝
    '\u215e': '7/8',  # ⅞
}

# Quick-select amounts offered by recipe forms
COMMON_FRACTION_PRESETS = [
    ('1/4', 0.25),
    ('1/3', 0.333333),
    ('1/2', 0.5),
    ('2/3', 0.666667),
    ('3/4', 0.75),
    ('1', 1),
    ('1 1/4', 1.25),
    ('1 1/3', 1.333333),
    ('1 1/2', 1.5),
    ('1 2/3', 1.666667),
    ('1 3/4', 1.75),
    ('2', 2),
    ('2 1/2', 2.5),
    ('3', 3),
]
