from fractions import Fraction
from typing import Tuple, TypeVar, Union

from pyzx.utils import EdgeType, VertexType

__all__ = [
    'EdgeType',
    'VertexType',
    'FractionLike',
    'FloatInt',
    'normalize_phase',
    'phase_to_s',
    'upair',
    'vertex_is_spider',
]

FractionLike = Union[Fraction, int]
FloatInt = Union[float, int]

T = TypeVar('T', int, str)


def normalize_phase(phase: FractionLike) -> Fraction:
    """Wraps a phase, given as a rational multiple of pi, into the range (-1, 1]."""
    p = Fraction(phase) % 2
    if p > 1:
        p -= 2
    return p


def phase_to_s(phase: FractionLike) -> str:
    """Pretty prints a phase, e.g. ``-1/2`` becomes ``-π/2``."""
    p = normalize_phase(phase)
    if p == 0:
        return '0'
    sign = '-' if p < 0 else ''
    num, den = abs(p.numerator), p.denominator
    ns = 'π' if num == 1 else '%dπ' % num
    ds = '' if den == 1 else '/%d' % den
    return sign + ns + ds


def upair(v1: T, v2: T) -> Tuple[T, T]:
    """Returns the unordered pair associated to the pair of vertices,
    i.e. the pair with the smallest id first."""
    return (v1, v2) if v1 <= v2 else (v2, v1)


def vertex_is_spider(ty: VertexType) -> bool:
    """Z and X spiders carry a phase and take part in fusion."""
    return ty == VertexType.Z or ty == VertexType.X

