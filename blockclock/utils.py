"""Numeric helpers shared by the display screen builders."""

from __future__ import annotations

NUM_SCREENS = 7
"""Default number of display panels on the clock."""

_HALVING_INTERVAL = 210_000
_INITIAL_BLOCK_REWARD = 50
_FINAL_SUPPLY = 20999999.9769
_LAST_SUBSIDY_BLOCK = 33 * _HALVING_INTERVAL

_SUFFIXES = (
    (1_000_000_000_000_000, "Q"),
    (1_000_000_000_000, "T"),
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
)

_SATS_PER_UNIT = {
    "m": (100_000, 1),
    "u": (100, 1),
    "n": (1, 10),
    "p": (1, 10_000),
}


def modulo(x: int, n: int) -> int:
    """Return ``x`` modulo ``n`` with the sign of ``n``."""
    return x % n


def supply_at_block(block_nr: int) -> float:
    """Return the number of bitcoin in circulation after ``block_nr`` blocks."""
    if block_nr < 0:
        raise ValueError("block number must not be negative")
    if block_nr >= _LAST_SUBSIDY_BLOCK:
        return _FINAL_SUPPLY

    halvings, remainder = divmod(block_nr, _HALVING_INTERVAL)
    total = sum(
        _HALVING_INTERVAL * _INITIAL_BLOCK_REWARD * 0.5**era for era in range(halvings)
    )
    total += remainder * _INITIAL_BLOCK_REWARD * 0.5**halvings
    return total


def format_number_with_suffix(num: int, num_characters: int = 4) -> str:
    """Shorten ``num`` with a K/M/B/T/Q suffix, using spare room for decimals."""
    if num < 0:
        raise ValueError("number must not be negative")
    for scale, suffix in _SUFFIXES:
        if num >= scale:
            value = float(num) / scale
            break
    else:
        return str(num)

    text = f"{value:.0f}{suffix}"
    if len(text) < num_characters:
        decimals = num_characters - len(text) - 1
        text = f"{value:.{decimals}f}{suffix}"
    return text


def amount_in_satoshis(bolt11: str) -> int:
    """Return the amount in satoshis encoded in a BOLT11 invoice string.

    Raises ValueError when no amount or no known multiplier is present.
    """
    start = next((i for i, ch in enumerate(bolt11) if ch.isdigit()), None)
    if start is None:
        raise ValueError("invoice carries no amount")

    end = start
    while end < len(bolt11) and bolt11[end].isdigit():
        end += 1
    number = int(bolt11[start:end])

    multiplier = next((ch for ch in bolt11[end:] if ch.isalpha()), None)
    if multiplier is None:
        raise ValueError("invoice amount has no multiplier")
    try:
        factor, divisor = _SATS_PER_UNIT[multiplier]
    except KeyError:
        raise ValueError(f"unknown amount multiplier {multiplier!r}") from None
    return number * factor // divisor