import pytest

import bigint_mpn as mpn
from bigint import BigInt, from_string, to_string
from bigint_decimal import format_decimal, parse_decimal


@pytest.mark.parametrize('text', [
    '0', '1', '-1', '999999999', '1000000000', '-1000000000',
    '123456789', '1234567891', '123456789123456789', '12345678912345678',
    '4294967295', '4294967296', '18446744073709551616',
    '-9223372036854775808', '1000000000000000000000000000001',
    '-' + '9' * 81, '7' * 90, '10' + '0' * 99,
])
def test_round_trip(xp, text):
    x = from_string(text, _xp=xp)
    assert to_string(x) == text
    assert int(x) == int(text)
    assert from_string(to_string(x), _xp=xp) == x

@pytest.mark.parametrize('text, canonical', [
    ('-0', '0'), ('+0', '0'), ('000', '0'), ('-000000000000', '0'),
    ('+5', '5'), ('0000000001', '1'), ('-0000000000123', '-123'),
])
def test_canonical_form(xp, text, canonical):
    x = BigInt(text, _xp=xp)
    assert str(x) == canonical
    if canonical == '0':
        assert x.sign is False

def test_scenario_zero(xp):
    assert to_string(from_string('0', _xp=xp)) == '0'
    assert from_string('-0', _xp=xp) == from_string('0', _xp=xp)

@pytest.mark.parametrize('text', ['', '-', '+', '12a', ' 1', '1 ', '--1', '+-1', '1-',
                                  '1_000', '0x10', '٣', '1.0', '１'])
def test_malformed(xp, text):
    with pytest.raises(ValueError):
        from_string(text, _xp=xp)

def test_malformed_reports_position(xp):
    with pytest.raises(ValueError, match='position 3'):
        parse_decimal(xp, '-12x4')

def test_not_a_string(xp):
    with pytest.raises(TypeError):
        parse_decimal(xp, b'123')

def test_inner_groups_are_zero_padded(xp):
    limbs, negative = parse_decimal(xp, '5000000000000000007')
    assert format_decimal(limbs, negative) == '5000000000000000007'
    assert format_decimal(mpn.from_list(xp, [1000000000]), True) == '-1000000000'
    assert format_decimal(mpn.zero(xp), True) == '0'

def test_parse_limbs(xp):
    limbs, negative = parse_decimal(xp, '-18446744073709551616')
    assert mpn.tolist(limbs) == [0, 0, 1]
    assert negative is True
