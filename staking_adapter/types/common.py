"""
Common type definitions and amount helpers
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any, Dict, Iterable, Optional, Union

from ..errors import InvalidParameterError


AmountLike = Union[Decimal, int, str]

# Enough digits for 18-decimal fixed point values of any realistic supply
AMOUNT_PRECISION = 78


@dataclass(frozen=True)
class StakingOptions:
    """
    Optional per-chain parameters needed to disambiguate an operation

    Attributes:
        denom: Coin denomination (account-based chains, e.g. "uom")
        public_key: Hex encoded delegator public key (pool-delegation chains)
    """
    denom: Optional[str] = None
    public_key: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "StakingOptions":
        """Build from wire form ({"denom": ..., "publicKey": ...})"""
        if not data:
            return cls()
        return cls(
            denom=data.get("denom") or None,
            public_key=data.get("publicKey") or data.get("public_key") or None,
        )


@dataclass(frozen=True)
class Validator:
    """
    Delegation target

    Attributes:
        address: Validator operator address (or pool contract principal)
        name: Display name / moniker
        tokens: Bonded tokens in base units, when the chain reports it
        jailed: Whether the validator is currently jailed
    """
    address: str
    name: str = ""
    tokens: Optional[Decimal] = None
    jailed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"address": self.address, "name": self.name}
        if self.tokens is not None:
            data["tokens"] = format_decimal(self.tokens)
        if self.jailed:
            data["jailed"] = True
        return data


def to_decimal(value: AmountLike, parameter: str = "amount") -> Decimal:
    """
    Convert an amount to Decimal without passing through float

    Args:
        value: Decimal, int or base-10 string
        parameter: Parameter name used in error messages

    Returns:
        Finite Decimal

    Raises:
        InvalidParameterError: If value is a float, not numeric, or not finite
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise InvalidParameterError.invalid(parameter, value, "use Decimal, int or str, not float")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise InvalidParameterError.invalid(parameter, value, "not a decimal number")
    if not result.is_finite():
        raise InvalidParameterError.invalid(parameter, value, "must be finite")
    return result


def format_decimal(value: Decimal) -> str:
    """
    Serialize Decimal as a plain base-10 string (no exponent, no trailing zeros)

    Examples:
        Decimal("2.000") -> "2"
        Decimal("5E-3")  -> "0.005"
    """
    if value == 0:
        return "0"
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def to_base_units(amount: AmountLike, decimals: int, parameter: str = "amount") -> int:
    """
    Convert a display amount into integer base units (amount * 10**decimals)

    Raises:
        InvalidParameterError: If amount is negative or has more precision than
            the base unit can represent
    """
    value = to_decimal(amount, parameter)
    if value < 0:
        raise InvalidParameterError.invalid(parameter, amount, "must not be negative")
    with localcontext() as ctx:
        ctx.prec = AMOUNT_PRECISION
        scaled = value.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise InvalidParameterError.invalid(
            parameter, amount, f"exceeds {decimals} decimal places of precision"
        )
    return int(scaled)


def from_base_units(raw: AmountLike, decimals: int) -> Decimal:
    """Convert integer base units into a display amount"""
    value = to_decimal(raw, "raw amount")
    with localcontext() as ctx:
        ctx.prec = AMOUNT_PRECISION
        return value.scaleb(-decimals)


def sum_decimals(values: Iterable[Decimal]) -> Decimal:
    """Exact sum of Decimals (no rounding at the default 28 digit precision)"""
    with localcontext() as ctx:
        ctx.prec = AMOUNT_PRECISION
        total = Decimal(0)
        for value in values:
            total += value
        return total
