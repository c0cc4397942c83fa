import enum
from typing import Final

EM: Final[float] = 0.00054858  # electron mass
DEFAULT_PPM: Final[float] = 50.0
CHEMCALC_URL: Final[str] = "https://www.chemcalc.org/chemcalc/mf"
CHEMCALC_TIMEOUT: Final[float] = 10.0


class ChargeType(enum.Enum):
    """Sign of a charge state."""

    POSITIVE = "+"
    NEGATIVE = "-"
    NEUTRAL = ""

    @classmethod
    def from_symbol(cls, symbol: str) -> "ChargeType":
        for charge_type in cls:
            if charge_type.value == symbol:
                return charge_type
        msg = "No charge type for symbol: {!r}".format(symbol)
        raise ValueError(msg)

    @property
    def sign(self) -> int:
        if self is ChargeType.POSITIVE:
            return 1
        elif self is ChargeType.NEGATIVE:
            return -1
        return 0

    @classmethod
    def from_charge(cls, q: int) -> "ChargeType":
        if q > 0:
            return cls.POSITIVE
        elif q < 0:
            return cls.NEGATIVE
        return cls.NEUTRAL


# formula type labels
CHNOPS: Final[frozenset] = frozenset({"C", "H", "N", "O", "P", "S"})
CHLORINE: Final[str] = "Cl"
DEUTERIUM: Final[str] = "D"
