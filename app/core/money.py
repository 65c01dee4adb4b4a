"""
Money representation.

Balances and amounts are stored as an integer number of minor units
("cents"), so $12.34 is held as 1234. Floating point never enters the
balance path; ``as_float`` exists for presentation only.
"""
from sqlalchemy import BigInteger
from sqlalchemy.types import TypeDecorator


def _minor_units(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"cannot combine Cents with {type(value).__name__}")
    return int(value)


class Cents(int):
    """Integer amount of minor currency units"""

    def __new__(cls, value=0):
        if isinstance(value, bool) or isinstance(value, float):
            raise TypeError(f"Cents requires integral minor units, got {value!r}")
        if not isinstance(value, (int, str)):
            # Decimal, Fraction and friends would otherwise be truncated
            integral = int(value)
            if integral != value:
                raise ValueError(f"Cents requires integral minor units, got {value!r}")
            value = integral
        return super().__new__(cls, value)

    def __add__(self, other):
        return Cents(int(self) + _minor_units(other))

    __radd__ = __add__

    def __sub__(self, other):
        return Cents(int(self) - _minor_units(other))

    def __rsub__(self, other):
        return Cents(_minor_units(other) - int(self))

    def __neg__(self):
        return Cents(-int(self))

    def __str__(self) -> str:
        sign = "-" if self < 0 else ""
        whole, minor = divmod(abs(int(self)), 100)
        return f"{sign}{whole}.{minor:02d}"

    def __repr__(self) -> str:
        return f"Cents({int(self)})"

    def as_float(self) -> float:
        """Lossy conversion to major units, for display only"""
        return int(self) / 100


class CentsType(TypeDecorator):
    """Stores Cents as BIGINT and loads it back as Cents"""

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return int(Cents(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Cents(value)
