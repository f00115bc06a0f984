import math

from flask import Blueprint, jsonify, request

from constants import COMMON_FRACTION_PRESETS
from services.errors import ValidationError
from services.fractions import decimal_to_fraction, fraction_to_decimal, normalize_fractions

bp = Blueprint('fractions', __name__)


@bp.route('/presets')
def fraction_presets():
    return jsonify([{'label': label, 'value': value} for label, value in COMMON_FRACTION_PRESETS])


@bp.route('/convert')
def fraction_convert():
    """?decimal=1.5 -> {"fraction": "1 1/2"}; ?fraction=1 1/2 -> {"decimal": 1.5}."""
    if 'decimal' in request.args:
        value = request.args.get('decimal', type=float)
        if value is None or not math.isfinite(value):
            raise ValidationError('decimal must be a number')
        return jsonify({'decimal': value, 'fraction': decimal_to_fraction(value)})
    if 'fraction' in request.args:
        text = request.args['fraction']
        return jsonify({'fraction': text, 'decimal': fraction_to_decimal(normalize_fractions(text))})
    raise ValidationError('Pass either decimal or fraction')
