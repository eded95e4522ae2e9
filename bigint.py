# representation:
#  sign-magnitude. _limbs is a normalized 1-d uint32 array (see bigint_mpn),
#  least significant limb first; _sign is True for negative values.
#  zero is exactly limbs [0] with _sign False, so equal values have equal
#  representations.
#  bitwise operators work on the infinite two's complement encoding, which is
#  only ever built transiently by to_twos_complement / from_twos_complement.
#
# the in-place operators mutate and return the receiver, like other mutable
# python objects; the binary operators copy the left operand first.

import collections
import importlib
import logging
import operator
import os

import bigint_decimal
import bigint_mpn as mpn

log = logging.getLogger(__name__)

DEFAULT_NAMESPACE = os.environ.get('BIGINT_NAMESPACE', 'numpy')

# range accepted from native integers: any signed or unsigned 64 bit value
NATIVE_MIN = -(1 << 63)
NATIVE_MAX = (1 << 64) - 1

_namespaces = {}

def default_namespace():
    xp = _namespaces.get(DEFAULT_NAMESPACE)
    if xp is None:
        xp = _namespaces[DEFAULT_NAMESPACE] = importlib.import_module(DEFAULT_NAMESPACE)
        log.debug('default array namespace: %s', DEFAULT_NAMESPACE)
    return xp


# limbs of the two's complement encoding, sign extended forever above the
# top limb with all ones when negative and zeros otherwise.
TwosComplement = collections.namedtuple('TwosComplement', ['limbs', 'negative'])


class BigInt:
    __hash__ = None

    def __init__(self, data=0, *, _xp=None):
        if isinstance(data, BigInt):
            xp = self.xp = data.xp if _xp is None else _xp
            if xp is data.xp:
                self._limbs = xp.asarray(data._limbs, copy=True)
            else:
                self._limbs = mpn.from_list(xp, mpn.tolist(data._limbs))
            self._sign = data._sign
            return
        if _xp is None:
            _xp = default_namespace()
        xp = self.xp = _xp
        if isinstance(data, str):
            self._limbs, self._sign = bigint_decimal.parse_decimal(xp, data)
            return
        try:
            value = operator.index(data)
        except TypeError:
            raise TypeError(f'cannot make a BigInt from {type(data).__name__}') from None
        if not NATIVE_MIN <= value <= NATIVE_MAX:
            raise OverflowError(f'{value} is outside the 64 bit range; construct from a decimal string')
        self._sign = value < 0
        value = abs(value)
        self._limbs = mpn.from_list(xp, [value & mpn.NUMB_MASK, value >> mpn.LIMB_BITS])

    @classmethod
    def _from_limbs(cls, xp, limbs, sign):
        x = cls.__new__(cls)
        x.xp = xp
        x._limbs = limbs
        x._sign = sign
        x._normalize()
        return x

    def _normalize(x):
        x._limbs = mpn.normalize(x._limbs)
        if mpn.is_zero(x._limbs):
            x._sign = False
        mpn.ASSERT_NORMALIZED(x._limbs)
        return x

    def _operand(x, y):
        # coerce a right hand operand into x's namespace, None if unsupported
        if isinstance(y, BigInt):
            return y if y.xp is x.xp else BigInt(y, _xp=x.xp)
        if isinstance(y, str):
            return None
        try:
            value = operator.index(y)
        except TypeError:
            return None
        if not NATIVE_MIN <= value <= NATIVE_MAX:
            # wider than the native constructor takes
            return BigInt(str(value), _xp=x.xp)
        return BigInt(value, _xp=x.xp)

    @property
    def sign(self):
        return self._sign
    @property
    def limbs(self):
        return self._limbs.shape[0]
    def magnitude(self):
        return tuple(mpn.tolist(self._limbs))
    def getlimb(self, i):
        if i < 0:
            raise ValueError(f'negative limb index {i}')
        return mpn.getlimb(self._limbs, i)
    def setlimb(x, i, value):
        if i < 0:
            raise ValueError(f'negative limb index {i}')
        if not 0 <= value <= mpn.NUMB_MAX:
            raise ValueError(f'limb value {value} out of range')
        limbs = mpn.pad(x._limbs, i + 1)
        limbs[i] = value
        x._limbs = limbs
        return x._normalize()
    def is_zero(self):
        return mpn.is_zero(self._limbs)

    # magnitude kernels; the sign of the result is x's unless the subtraction
    # had to swap operands
    def _add(x, y):
        x._limbs = mpn.add_n(x._limbs, y._limbs)
        return x._normalize()
    def _subtract(x, y):
        if mpn.cmp(x._limbs, y._limbs) >= 0:
            x._limbs = mpn.sub_n(x._limbs, y._limbs)
        else:
            x._limbs = mpn.sub_n(y._limbs, x._limbs)
            x._sign = not x._sign
        return x._normalize()

    def __iadd__(x, y):
        y = x._operand(y)
        if y is None:
            return NotImplemented
        if x._sign == y._sign:
            return x._add(y)
        return x._subtract(y)
    def __isub__(x, y):
        y = x._operand(y)
        if y is None:
            return NotImplemented
        if x._sign != y._sign:
            return x._add(y)
        return x._subtract(y)
    def __imul__(x, y):
        y = x._operand(y)
        if y is None:
            return NotImplemented
        x._limbs = mpn.mul_basecase(x._limbs, y._limbs)
        x._sign = x._sign != y._sign
        return x._normalize()
    def __itruediv__(x, y):
        # truncates toward zero
        y = x._operand(y)
        if y is None:
            return NotImplemented
        if y.is_zero():
            raise ZeroDivisionError('BigInt division by zero')
        x._limbs = mpn.tdiv_q(x._limbs, y._limbs)
        x._sign = x._sign != y._sign
        return x._normalize()
    def __imod__(x, y):
        # remainder of the truncating division, so it takes the dividend's sign
        y = x._operand(y)
        if y is None:
            return NotImplemented
        if y.is_zero():
            raise ZeroDivisionError('BigInt modulo by zero')
        x -= (x / y) * y
        return x

    def incr(x):
        x += 1
        return x
    def decr(x):
        x -= 1
        return x
    def postincr(x):
        old = BigInt(x)
        x += 1
        return old
    def postdecr(x):
        old = BigInt(x)
        x -= 1
        return old

    def __pos__(x):
        return BigInt(x)
    def __neg__(x):
        z = BigInt(x)
        if not z.is_zero():
            z._sign = not z._sign
        return z
    def __abs__(x):
        z = BigInt(x)
        z._sign = False
        return z
    def __invert__(x):
        z = BigInt(x)
        z += 1
        return -z

    def to_twos_complement(x):
        if not x._sign:
            return TwosComplement(x.xp.asarray(x._limbs, copy=True), False)
        return TwosComplement(mpn.com(mpn.sub_1(x._limbs, 1)), True)
    @classmethod
    def from_twos_complement(cls, tc, *, _xp=None):
        limbs, negative = tc
        xp = limbs.__array_namespace__() if _xp is None else _xp
        if not negative:
            return cls._from_limbs(xp, xp.asarray(limbs, copy=True), False)
        return cls._from_limbs(xp, mpn.add_1(mpn.normalize(mpn.com(limbs)), 1), True)

    def _bitwise(x, y, func):
        a = x.to_twos_complement()
        b = y.to_twos_complement()
        n = max(a.limbs.shape[0], b.limbs.shape[0])
        # each operand is sign extended with its own fill
        a_limbs = mpn.pad(a.limbs, n, mpn.NUMB_MASK if a.negative else 0)
        b_limbs = mpn.pad(b.limbs, n, mpn.NUMB_MASK if b.negative else 0)
        tc = TwosComplement(func(a_limbs, b_limbs), bool(func(a.negative, b.negative)))
        z = BigInt.from_twos_complement(tc, _xp=x.xp)
        x._limbs = z._limbs
        x._sign = z._sign
        return x

    def __ilshift__(x, k):
        k = _shift_count(k)
        limbs = mpn.lshift_limbs(x._limbs, k // mpn.LIMB_BITS)
        x._limbs = mpn.mul_1(limbs, 1 << (k % mpn.LIMB_BITS))
        return x._normalize()
    def __irshift__(x, k):
        # floor division by 2**k: negative values round toward -infinity
        k = _shift_count(k)
        negative = x._sign
        limbs, lost = mpn.rshift_limbs(x._limbs, k // mpn.LIMB_BITS)
        limbs, rem = mpn.divrem_1(limbs, 1 << (k % mpn.LIMB_BITS))
        x._limbs = limbs
        x._normalize()
        if negative and (lost or rem):
            x -= 1
        return x

    def _cmp(x, y):
        if x._sign != y._sign:
            return -1 if x._sign else 1
        c = mpn.cmp(x._limbs, y._limbs)
        return -c if x._sign else c

    def __bool__(self):
        return not self.is_zero()
    def __int__(self):
        accum = 0
        for limb in reversed(mpn.tolist(self._limbs)):
            accum <<= mpn.LIMB_BITS
            accum += limb
        return -accum if self._sign else accum
    def __str__(self):
        return bigint_decimal.format_decimal(self._limbs, self._sign)
    def __repr__(self):
        return f"BigInt('{self}')"


def _shift_count(k):
    try:
        k = operator.index(k)
    except TypeError:
        raise TypeError(f'shift count must be an integer, not {type(k).__name__}') from None
    if k < 0:
        raise ValueError('negative shift count')
    return k


def __BigIntOpBitwiseInplace(func):
    def op(x, y):
        y = x._operand(y)
        if y is None:
            return NotImplemented
        return x._bitwise(y, func)
    return op
def __BigIntOpBinary(iopname):
    def op(x, y):
        return getattr(BigInt(x), iopname)(y)
    return op
def __BigIntOpReflected(iopname):
    def op(x, y):
        y = x._operand(y)
        if y is None:
            return NotImplemented
        return getattr(BigInt(y), iopname)(x)
    return op
def __BigIntOpCompare(func):
    def op(x, y):
        y = x._operand(y)
        if y is None:
            return NotImplemented
        return func(x._cmp(y), 0)
    return op

for opname, func in [('and', operator.and_), ('or', operator.or_), ('xor', operator.xor)]:
    setattr(BigInt, f'__i{opname}__', __BigIntOpBitwiseInplace(func))
for opname in ['add', 'sub', 'mul', 'truediv', 'mod', 'and', 'or', 'xor', 'lshift', 'rshift']:
    setattr(BigInt, f'__{opname}__', __BigIntOpBinary(f'__i{opname}__'))
for opname in ['add', 'sub', 'mul', 'truediv', 'mod', 'and', 'or', 'xor']:
    setattr(BigInt, f'__r{opname}__', __BigIntOpReflected(f'__i{opname}__'))
for opname in ['eq', 'ne', 'lt', 'le', 'gt', 'ge']:
    setattr(BigInt, f'__{opname}__', __BigIntOpCompare(getattr(operator, opname)))


def from_string(s, *, _xp=None):
    return BigInt(s, _xp=_xp)

def to_string(x):
    return str(x)
