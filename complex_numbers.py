"""
Complex number support for AC analysis.

Two interchangeable representations are provided:

    ComplexC  cartesian form (real, imaginary)
    ComplexP  polar form (magnitude, angle), angle kept in (-pi, pi]

Both satisfy the scalar contract used by matrix.Matrix: +, -, *, /, ==
against themselves and against bare reals, and construction from the
literals 0 and 1. Operations with a real on the left are delegated to the
right-hand complex value.

Polar magnitudes are allowed to go negative (multiplying by a negative real
keeps the angle and flips the magnitude sign). The sign is carried through
printing and equality as-is.
"""
import numbers

import numpy as np

from constants import TWO_PI


def _is_real(value):
    return isinstance(value, numbers.Real)


def normalise_argument(angle):
    """
    Reduce an angle (radians) into the (-pi, pi] range.

    The angle is first taken modulo 2pi (keeping its sign), then folded by
    one full turn if the reduced value still lies outside [-pi, pi].
    """
    angle = np.fmod(angle, TWO_PI)
    if abs(angle) > np.pi:
        angle -= np.copysign(TWO_PI, angle)
    if angle == -np.pi:
        angle = np.pi
    return float(angle)


# =============================================================================
# CARTESIAN FORM
# =============================================================================
class ComplexC:
    """Complex number stored as real and imaginary parts."""

    __hash__ = None
    # numpy scalars defer to the reflected operators below
    __array_ufunc__ = None

    def __init__(self, real=0.0, imaginary=0.0):
        self.real = float(real)
        self.imaginary = float(imaginary)

    @classmethod
    def from_complex(cls, value):
        value = complex(value)
        return cls(value.real, value.imag)

    # -------------------------------------------------------------------------
    # Named operations
    # -------------------------------------------------------------------------
    def add(self, other):
        other = _as_cart(other)
        return ComplexC(self.real + other.real, self.imaginary + other.imaginary)

    def subtract(self, other):
        other = _as_cart(other)
        return ComplexC(self.real - other.real, self.imaginary - other.imaginary)

    def multiply(self, other):
        if _is_real(other):
            return ComplexC(self.real * other, self.imaginary * other)
        other = _as_cart(other)
        return ComplexC(
            self.real * other.real - self.imaginary * other.imaginary,
            self.real * other.imaginary + self.imaginary * other.real,
        )

    def divide(self, other):
        if _is_real(other):
            return ComplexC(self.real / other, self.imaginary / other)
        other = _as_cart(other)
        div = other.real ** 2 + other.imaginary ** 2
        return ComplexC(
            (self.real * other.real + self.imaginary * other.imaginary) / div,
            (self.imaginary * other.real - self.real * other.imaginary) / div,
        )

    def conjugate(self):
        return ComplexC(self.real, -self.imaginary)

    def absolute(self):
        """Euclidean norm of the number."""
        return float(np.sqrt(self.real ** 2 + self.imaginary ** 2))

    def argument(self):
        """
        Angle of the number in radians, in the (-pi, pi] range.

        The zero value has an argument of 0 by convention. Arctangent only
        covers quadrants I and IV, so values with a negative real part are
        rotated by half a turn.
        """
        if self.real == 0 and self.imaginary == 0:
            return 0.0

        if self.real == 0:
            return np.pi / 2 if self.imaginary > 0 else -np.pi / 2

        angle = float(np.arctan(self.imaginary / self.real))
        if self.real < 0:
            angle += np.pi if self.imaginary >= 0 else -np.pi
        return angle

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------
    def __add__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        # + is commutative so use the other arrangement
        return self.__add__(other)

    def __sub__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other):
        if not _is_real(other):
            return NotImplemented
        return ComplexC(other - self.real, -self.imaginary)

    def __mul__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other):
        if not _is_real(other):
            return NotImplemented
        return ComplexC(other).divide(self)

    def __pow__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return pow_complex(self, _as_cart(other))

    def __neg__(self):
        return ComplexC(-self.real, -self.imaginary)

    def __abs__(self):
        return self.absolute()

    def __eq__(self, other):
        if _is_real(other):
            return self.real == other and self.imaginary == 0
        if isinstance(other, ComplexP):
            other = polar_to_cart(other)
        if not isinstance(other, ComplexC):
            return NotImplemented
        return self.real == other.real and self.imaginary == other.imaginary

    def __complex__(self):
        return complex(self.real, self.imaginary)

    def __repr__(self):
        return f"ComplexC({self.real!r}, {self.imaginary!r})"

    def __str__(self):
        real_sign = '-' if self.real < 0 else '+'
        imag_sign = '-' if self.imaginary < 0 else '+'
        return f"{real_sign}{abs(self.real):f}{imag_sign}{abs(self.imaginary):f}i"


# =============================================================================
# POLAR FORM
# =============================================================================
class ComplexP:
    """
    Complex number stored as magnitude and angle (radians).

    The angle is normalised into (-pi, pi] whenever it is set. Products and
    quotients of two polar values only touch magnitudes and angles; sums and
    differences go through the cartesian form.
    """

    __hash__ = None
    # numpy scalars defer to the reflected operators below
    __array_ufunc__ = None

    def __init__(self, magnitude=0.0, angle=0.0):
        self.magnitude = float(magnitude)
        self.angle = angle

    @classmethod
    def from_complex(cls, value):
        return cart_to_polar(ComplexC.from_complex(value))

    @property
    def angle(self):
        return self._angle

    @angle.setter
    def angle(self, value):
        self._angle = normalise_argument(value)

    @property
    def real(self):
        return float(self.magnitude * np.cos(self._angle))

    @property
    def imaginary(self):
        return float(self.magnitude * np.sin(self._angle))

    # -------------------------------------------------------------------------
    # Named operations
    # -------------------------------------------------------------------------
    def add(self, other):
        return cart_to_polar(polar_to_cart(self).add(other))

    def subtract(self, other):
        return cart_to_polar(polar_to_cart(self).subtract(other))

    def multiply(self, other):
        if _is_real(other):
            return ComplexP(self.magnitude * other, self._angle)
        other = _as_polar(other)
        return ComplexP(self.magnitude * other.magnitude, self._angle + other.angle)

    def divide(self, other):
        if _is_real(other):
            return ComplexP(self.magnitude / other, self._angle)
        other = _as_polar(other)
        return ComplexP(self.magnitude / other.magnitude, self._angle - other.angle)

    def conjugate(self):
        return ComplexP(self.magnitude, -self._angle)

    def absolute(self):
        return abs(self.magnitude)

    def argument(self):
        """Angle of the point itself, accounting for a negative magnitude."""
        if self.magnitude < 0:
            return normalise_argument(self._angle + np.pi)
        return self._angle

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------
    def __add__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other):
        if not _is_real(other):
            return NotImplemented
        return ComplexP(other).subtract(self)

    def __mul__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other):
        if not _is_real(other):
            return NotImplemented
        return ComplexP(other).divide(self)

    def __neg__(self):
        return ComplexP(-self.magnitude, self._angle)

    def __abs__(self):
        return self.absolute()

    def __eq__(self, other):
        if _is_real(other):
            other = ComplexP(other)
        elif isinstance(other, ComplexC):
            return polar_to_cart(self) == other
        elif not isinstance(other, ComplexP):
            return NotImplemented

        # The origin is a single point whatever angle it carries
        if self.magnitude == 0 and other.magnitude == 0:
            return True
        return self.magnitude == other.magnitude and self._angle == other.angle

    def __complex__(self):
        return complex(self.real, self.imaginary)

    def __repr__(self):
        return f"ComplexP({self.magnitude!r}, {self._angle!r})"

    def __str__(self):
        mag_sign = '-' if self.magnitude < 0 else '+'
        arg_sign = '-' if self._angle < 0 else '+'
        return f"{mag_sign}{abs(self.magnitude):f}∠ {arg_sign}{abs(self._angle) / np.pi:f}π"


# =============================================================================
# CONVERSIONS
# =============================================================================
def _is_scalar(value):
    return _is_real(value) or isinstance(value, (ComplexC, ComplexP))


def _as_cart(value):
    if isinstance(value, ComplexC):
        return value
    if isinstance(value, ComplexP):
        return polar_to_cart(value)
    if _is_real(value):
        return ComplexC(value)
    raise TypeError(f"Cannot use {type(value).__name__} as a complex number")


def _as_polar(value):
    if isinstance(value, ComplexP):
        return value
    return cart_to_polar(_as_cart(value))


def polar_to_cart(polar):
    return ComplexC(polar.real, polar.imaginary)


def cart_to_polar(cart):
    return ComplexP(cart.absolute(), cart.argument())


# =============================================================================
# EXPONENTIATION
# =============================================================================
def raise_e_complex(com):
    """e^(b+ic) = e^b * (cos c + i sin c)"""
    eb = np.exp(com.real)
    return ComplexC(eb * np.cos(com.imaginary), eb * np.sin(com.imaginary))


def pow_complex(base, raise_to):
    """
    Raise a complex base to a complex power.

    (a+ib)^(c+id) = e^(ln(r)*(c+id) + i*theta*(c+id)), with r = |a+ib| and
    theta = arg(a+ib).
    """
    base = _as_cart(base)
    raise_to = _as_cart(raise_to)
    log_abs = np.log(base.absolute())
    theta = base.argument()

    return raise_e_complex(ComplexC(
        log_abs * raise_to.real - raise_to.imaginary * theta,
        log_abs * raise_to.imaginary + raise_to.real * theta,
    ))
