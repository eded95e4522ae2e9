# NOTE: LIMBS are the mp term for WORDS. They mean basically the same thing.

# magnitudes ("mpn", natural numbers) are 1-d uint32 arrays from any array api
# namespace, least significant limb first. every function here returns a new
# array and leaves its arguments untouched, so callers may share them freely.
#
# a magnitude is normalized when it has no zero limb above the most
# significant one. zero is the single limb [0]. cmp, sub_n and tdiv_q expect
# normalized arguments; everything returns normalized results.

import logging
import os

log = logging.getLogger(__name__)

WANT_ASSERT = os.environ.get('BIGINT_WANT_ASSERT', '1') != '0'
LIMB_BITS = 32
NUMB_MASK = (1 << LIMB_BITS) - 1
NUMB_MAX = NUMB_MASK
BASE = 1 << LIMB_BITS


def ASSERT_NORMALIZED(up):
    if WANT_ASSERT:
        n = up.shape[0]
        assert n >= 1
        assert n == 1 or int(up[n-1]) != 0


def zero(xp, n=1):
    return xp.zeros(n, dtype=xp.uint32)

def from_list(xp, limbs):
    if not limbs:
        return zero(xp)
    return normalize(xp.asarray(limbs, dtype=xp.uint32))

def tolist(up):
    return [int(up[i]) for i in range(up.shape[0])]

def getlimb(up, i, default=0):
    return int(up[i]) if 0 <= i < up.shape[0] else default

def is_zero(up):
    return up.shape[0] == 1 and int(up[0]) == 0

def normalize(up):
    '''Drop zero limbs above the most significant nonzero limb.
    All-zero (or empty) input collapses to the single limb [0].'''
    xp = up.__array_namespace__()
    if up.shape[0] == 0:
        return zero(xp)
    nz = xp.nonzero(up)[0]
    n = int(nz[-1]) + 1 if nz.shape[0] else 1
    if n == up.shape[0]:
        return up
    return up[:n]

def pad(up, n, fill=0):
    # extend to n limbs with fill above the top; never truncates
    xp = up.__array_namespace__()
    extra = n - up.shape[0]
    if extra <= 0:
        return xp.asarray(up, copy=True)
    return xp.concat([up, xp.full(extra, fill, dtype=xp.uint32)])

def _widen(up, n):
    xp = up.__array_namespace__()
    w = xp.astype(up, xp.uint64)
    extra = n - up.shape[0]
    if extra > 0:
        w = xp.concat([w, xp.zeros(extra, dtype=xp.uint64)])
    return w

def _propagate(w):
    # fold the high half of every uint64 position into the next one until
    # each position fits a limb. the top position must not carry out.
    xp = w.__array_namespace__()
    carry = w >> LIMB_BITS
    while xp.any(carry):
        if WANT_ASSERT:
            assert int(carry[-1]) == 0, 'carry out of the top limb'
        w = w & NUMB_MASK
        w[1:] += carry[:-1]
        carry = w >> LIMB_BITS
    return normalize(xp.astype(w, xp.uint32))


def cmp(up, vp):
    un = up.shape[0]
    vn = vp.shape[0]
    if un != vn:
        return -1 if un < vn else 1
    xp = up.__array_namespace__()
    ne = xp.nonzero(up != vp)[0]
    if ne.shape[0] == 0:
        return 0
    i = int(ne[-1])
    return -1 if int(up[i]) < int(vp[i]) else 1


def add_n(up, vp):
    n = max(up.shape[0], vp.shape[0]) + 1
    return _propagate(_widen(up, n) + _widen(vp, n))

def add_1(up, v):
    xp = up.__array_namespace__()
    return add_n(up, from_list(xp, [v]))

def sub_n(up, vp):
    # up - vp, requires up >= vp
    xp = up.__array_namespace__()
    if WANT_ASSERT:
        assert cmp(up, vp) >= 0, 'sub_n: subtrahend exceeds minuend'
    n = max(up.shape[0], vp.shape[0])
    w = xp.astype(pad(up, n), xp.int64) - xp.astype(pad(vp, n), xp.int64)
    borrow = w < 0
    while xp.any(borrow):
        w = xp.where(borrow, w + BASE, w)
        w[1:] -= xp.astype(borrow[:-1], xp.int64)
        borrow = w < 0
    return normalize(xp.astype(w, xp.uint32))

def sub_1(up, v):
    xp = up.__array_namespace__()
    return sub_n(up, from_list(xp, [v]))


def mul_1(up, v):
    assert 0 <= v <= NUMB_MAX
    # each product is at most (2**32-1)**2, which leaves room in uint64 for
    # the carry folded in by _propagate
    return _propagate(_widen(up, up.shape[0] + 1) * v)

def divrem_1(up, d):
    '''Divide by the single limb d. Returns (quotient, remainder limb).'''
    xp = up.__array_namespace__()
    if d == 0:
        raise ZeroDivisionError('division by zero')
    assert 0 < d <= NUMB_MAX
    q = tolist(up)
    r = 0
    for i in reversed(range(len(q))):
        r = (r << LIMB_BITS) | q[i]
        q[i], r = divmod(r, d)
    return from_list(xp, q), r

def mul_basecase(up, vp):
    # schoolbook: one row per limb of up, low and high halves of the partial
    # products accumulate in uint64 and carries are resolved once at the end.
    # the accumulators stay below 2**64 for fewer than 2**31 rows.
    xp = up.__array_namespace__()
    un = up.shape[0]
    vn = vp.shape[0]
    acc = xp.zeros(un + vn + 1, dtype=xp.uint64)
    v64 = xp.astype(vp, xp.uint64)
    for i, u in enumerate(tolist(up)):
        if u == 0:
            continue
        p = v64 * u
        acc[i:i+vn] += p & NUMB_MASK
        acc[i+1:i+vn+1] += p >> LIMB_BITS
    return _propagate(acc)


def lshift_limbs(up, k):
    xp = up.__array_namespace__()
    if k == 0 or is_zero(up):
        return xp.asarray(up, copy=True)
    return xp.concat([zero(xp, k), up])

def rshift_limbs(up, k):
    '''Drop the k low limbs. Returns (shifted, whether a nonzero limb was dropped).'''
    xp = up.__array_namespace__()
    n = up.shape[0]
    if k == 0:
        return xp.asarray(up, copy=True), False
    if k >= n:
        return zero(xp), not is_zero(up)
    lost = bool(xp.any(up[:k]))
    return xp.asarray(up[k:], copy=True), lost

def com(up):
    # limb-wise complement. the result is a limb pattern, not a normalized
    # magnitude: high limbs may be zero.
    return ~up


def tdiv_q(np_, dp):
    '''Truncating quotient of two magnitudes.

    Both operands are scaled by f = BASE // (top limb of dp + 1) so that the
    divisor's top limb is at least BASE/2. Each quotient limb is then
    estimated from the top two limbs of the running remainder divided by the
    divisor's top limb; the estimate is never too small and is stepped down
    until the shifted product fits under the remainder.
    '''
    xp = np_.__array_namespace__()
    if is_zero(dp):
        raise ZeroDivisionError('division by zero')
    ASSERT_NORMALIZED(np_)
    ASSERT_NORMALIZED(dp)
    n = np_.shape[0]
    m = dp.shape[0]
    if n < m:
        return zero(xp)
    if m == 1:
        return divrem_1(np_, int(dp[0]))[0]

    f = BASE // (int(dp[m-1]) + 1)
    rp = mul_1(np_, f)
    dp = mul_1(dp, f)
    if WANT_ASSERT:
        assert dp.shape[0] == m
    dtop = int(dp[m-1])

    qn = n - m + 1
    q = [0] * qn
    corrections = 0
    for i in reversed(range(qn)):
        top = (getlimb(rp, i + m) << LIMB_BITS) | getlimb(rp, i + m - 1)
        qhat = min(top // dtop, NUMB_MAX)
        ds = lshift_limbs(dp, i)
        t = mul_1(ds, qhat)
        while cmp(rp, t) < 0:
            qhat -= 1
            t = sub_n(t, ds)
            corrections += 1
        rp = sub_n(rp, t)
        q[i] = qhat
    log.debug('tdiv_q: %d by %d limbs, scale %d, %d corrections', n, m, f, corrections)
    return from_list(xp, q)
