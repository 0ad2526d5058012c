"""
Display formatting for token amounts and symbols.
"""
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

from app.models.farcaster_models import ProfileInfo
from app.models.token_models import TokenHolding

FID_SYMBOL_PATTERN = re.compile(r"^fid:(\d+)$")

Number = Union[int, float, str, Decimal]


def format_balance(balance: Number, decimals: int = 18) -> str:
    """
    Convert a wei-denominated amount to whole tokens with 2 decimals.

    Args:
        balance: Raw integer amount as a string or number
        decimals: Token decimals

    Returns:
        e.g. "1.00" for "1000000000000000000"
    """
    amount = Decimal(str(balance)) / (Decimal(10) ** decimals)
    return f"{amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)}"


def format_number(value: Optional[Number]) -> str:
    """
    Render a value with K/M/B suffixes.

    Values strictly between 0 and 0.01 use scientific notation with two
    significant digits. None, unparsable and non-finite input render as 'N/A'.
    """
    if value is None:
        return "N/A"
    try:
        num = float(value)
    except (TypeError, ValueError):
        return "N/A"
    if num != num or num in (float("inf"), float("-inf")):
        return "N/A"

    if num >= 1e9:
        return f"{num / 1e9:.2f}B"
    if num >= 1e6:
        return f"{num / 1e6:.2f}M"
    if num >= 1e3:
        return f"{num / 1e3:.2f}K"
    if 0 < num < 0.01:
        return f"{num:.1e}"
    return f"{num:.2f}"


def extract_token_fid(symbol: Optional[str]) -> Optional[str]:
    """Return the FID from a user token symbol like 'fid:123', else None."""
    if not symbol:
        return None
    match = FID_SYMBOL_PATTERN.match(symbol)
    return match.group(1) if match else None


def token_owner_name(holding: TokenHolding, profile: Optional[ProfileInfo] = None) -> str:
    """Name to show for a holding: the owner's display name, or the token name for channels."""
    if profile is not None and profile.display_name:
        return profile.display_name
    return holding.subjectToken.name


def to_decimal(value: Optional[str]) -> Decimal:
    """Parse an upstream numeric string; missing or malformed values count as 0."""
    try:
        return Decimal(value) if value is not None else Decimal(0)
    except (InvalidOperation, TypeError):
        return Decimal(0)


def format_count(value: Optional[int]) -> str:
    """Whole counts below 1000 print as-is, larger ones use K/M/B suffixes."""
    if value is None:
        return "N/A"
    if abs(value) < 1000:
        return str(int(value))
    return format_number(value)
