import math

import pytest

from constants import COMMON_FRACTIONS
from services.errors import ValidationError
from services.fractions import (
    decimal_to_fraction, fraction_to_decimal, normalize_fractions, parse_amount,
)


@pytest.mark.parametrize('value, expected', [
    (0.5, '1/2'),
    (1.5, '1 1/2'),
    (0.25, '1/4'),
    (2.75, '2 3/4'),
    (0.333333, '1/3'),
    (0.666667, '2/3'),
    (1.125, '1 1/8'),
    (2, '2'),
    (2.0, '2'),
])
def test_decimal_to_fraction_common_values(value, expected):
    assert decimal_to_fraction(value) == expected


@pytest.mark.parametrize('value', [None, 0, 0.0])
def test_decimal_to_fraction_empty(value):
    assert decimal_to_fraction(value) == ''


def test_decimal_to_fraction_approximates_uncommon_values():
    assert decimal_to_fraction(0.1) == '1/10'
    assert decimal_to_fraction(0.3) == '3/10'
    assert decimal_to_fraction(1.2) == '1 1/5'


def test_decimal_to_fraction_rounds_to_whole_numbers():
    # 0.99 would need a denominator of 100, so it rounds up and carries
    assert decimal_to_fraction(0.99) == '1'
    assert decimal_to_fraction(2.99) == '3'
    assert decimal_to_fraction(2.01) == '2'


def test_decimal_to_fraction_negative():
    assert decimal_to_fraction(-1.5) == '-1 1/2'
    assert decimal_to_fraction(-0.25) == '-1/4'


@pytest.mark.parametrize('text, expected', [
    ('1 1/2', 1.5),
    ('3/4', 0.75),
    ('2', 2.0),
    ('0.5', 0.5),
    ('  1/4 ', 0.25),
    ('10 3/8', 10.375),
])
def test_fraction_to_decimal(text, expected):
    assert fraction_to_decimal(text) == pytest.approx(expected)


HUGE = '9' * 400


@pytest.mark.parametrize('text', [
    None, '', '   ', 'abc', '1/0', '1 1/0', '12.34.56', '1/2/3', 'one half',
    HUGE, HUGE + '/1', '1 ' + HUGE + '/1',
])
def test_fraction_to_decimal_rejects(text):
    assert fraction_to_decimal(text) is None


def test_common_fractions_round_trip():
    for whole in range(4):
        for n, d in COMMON_FRACTIONS:
            value = whole + n / d
            text = decimal_to_fraction(value)
            assert math.isclose(fraction_to_decimal(text), value, abs_tol=1e-6), text


def test_normalize_fractions():
    assert normalize_fractions('1½') == '1 1/2'
    assert normalize_fractions('1 ¼') == '1 1/4'
    assert normalize_fractions('¾') == '3/4'
    assert normalize_fractions('2') == '2'


def test_parse_amount_accepts_numbers_and_fraction_text():
    assert parse_amount(2) == 2.0
    assert parse_amount(0.75) == 0.75
    assert parse_amount('1 1/2') == 1.5
    assert parse_amount('1½') == 1.5
    assert parse_amount(None) is None
    assert parse_amount('  ') is None


@pytest.mark.parametrize('value', [
    'abc', '1/0', -1, True, float('nan'), float('inf'), [1], HUGE, HUGE + '/1', 10 ** 400,
])
def test_parse_amount_rejects(value):
    with pytest.raises(ValidationError):
        parse_amount(value)


def test_convert_endpoint(client):
    res = client.get('/api/fractions/convert?decimal=1.5')
    assert res.status_code == 200
    assert res.get_json() == {'decimal': 1.5, 'fraction': '1 1/2'}

    res = client.get('/api/fractions/convert', query_string={'fraction': '3/4'})
    assert res.get_json() == {'fraction': '3/4', 'decimal': 0.75}

    res = client.get('/api/fractions/convert', query_string={'fraction': '1/0'})
    assert res.get_json()['decimal'] is None


def test_convert_endpoint_rejects_bad_input(client):
    assert client.get('/api/fractions/convert?decimal=abc').status_code == 400
    assert client.get('/api/fractions/convert?decimal=nan').status_code == 400
    res = client.get('/api/fractions/convert')
    assert res.status_code == 400
    assert 'error' in res.get_json()


def test_presets(client):
    presets = client.get('/api/fractions/presets').get_json()
    assert presets[0] == {'label': '1/4', 'value': 0.25}
    assert {'label': '1 1/2', 'value': 1.5} in presets


@pytest.mark.parametrize('value', [float('inf'), float('-inf'), float('nan'), 10 ** 400])
def test_decimal_to_fraction_non_finite(value):
    assert decimal_to_fraction(value) == ''


def test_convert_endpoint_with_oversized_fraction(client):
    res = client.get('/api/fractions/convert', query_string={'fraction': HUGE + '/1'})
    assert res.status_code == 200
    assert res.get_json()['decimal'] is None
