import pytest

import bigint_mpn as mpn


@pytest.fixture(scope='session', params=['numpy', 'array_api_strict'])
def xp(request):
    return pytest.importorskip(request.param)


def to_limbs(xp, n):
    '''python int >= 0 -> magnitude'''
    limbs = []
    while True:
        limbs.append(n & mpn.NUMB_MASK)
        n >>= mpn.LIMB_BITS
        if not n:
            break
    return mpn.from_list(xp, limbs)

def from_limbs(up):
    return sum(limb << (mpn.LIMB_BITS * i) for i, limb in enumerate(mpn.tolist(up)))
