# decimal text <-> magnitude, nine digits (one uint32 chunk) at a time

import bigint_mpn as mpn

CHUNK_DIGITS = 9
CHUNK_BASE = 10 ** CHUNK_DIGITS
DIGITS = frozenset('0123456789')


def parse_decimal(xp, s):
    '''Parse an optionally signed string of ASCII digits.

    Returns (limbs, negative). "-0" and friends give unsigned zero.
    Raises ValueError for empty input, a lone sign or any non-digit.
    '''
    if not isinstance(s, str):
        raise TypeError(f'expected str, not {type(s).__name__}')
    if not s:
        raise ValueError('non-empty string expected')
    if s in ('-', '+'):
        raise ValueError('BigInt cannot consist only of a sign')
    start = 1 if s[0] in '-+' else 0
    for i in range(start, len(s)):
        if s[i] not in DIGITS:
            raise ValueError(f'invalid BigInt literal {s!r}: {s[i]!r} at position {i}')

    limbs = mpn.zero(xp)
    for i in range(start, len(s), CHUNK_DIGITS):
        chunk = s[i:i+CHUNK_DIGITS]
        limbs = mpn.mul_1(limbs, 10 ** len(chunk))
        limbs = mpn.add_1(limbs, int(chunk))
    return limbs, s[0] == '-' and not mpn.is_zero(limbs)


def format_decimal(limbs, negative):
    if mpn.is_zero(limbs):
        return '0'
    groups = []
    while not mpn.is_zero(limbs):
        limbs, r = mpn.divrem_1(limbs, CHUNK_BASE)
        groups.append(r)
    # only the most significant group goes without zero padding
    text = str(groups[-1]) + ''.join(f'{g:0{CHUNK_DIGITS}d}' for g in reversed(groups[:-1]))
    return '-' + text if negative else text
