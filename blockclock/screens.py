"""Builders for the per-panel text of the price, block and fee screens."""

from __future__ import annotations

import math
import struct

from blockclock.utils import NUM_SCREENS, format_number_with_suffix, supply_at_block

CURRENCY_USD = "$"
CURRENCY_EUR = "["
CURRENCY_GBP = "]"
CURRENCY_JPY = "^"
CURRENCY_AUD = "_"
CURRENCY_CAD = "`"

_CODES = {
    CURRENCY_USD: "USD",
    CURRENCY_EUR: "EUR",
    CURRENCY_GBP: "GBP",
    CURRENCY_JPY: "JPY",
    CURRENCY_AUD: "AUD",
    CURRENCY_CAD: "CAD",
}
_CHARS = {code: char for char, code in _CODES.items()}
_DOLLAR_CURRENCIES = {CURRENCY_USD, CURRENCY_AUD, CURRENCY_CAD}

_HALVING_INTERVAL = 210_000
_MINUTES_PER_YEAR = 525_600
_MINUTES_PER_DAY = 24 * 60


def currency_symbol(currency: str) -> str:
    """Return the display glyph for a currency character."""
    return "$" if currency in _DOLLAR_CURRENCIES else currency


def currency_code(currency: str) -> str:
    """Return the three-letter code for a currency character, USD by default."""
    return _CODES.get(currency, "USD")


def currency_char(code: str) -> str:
    """Return the currency character for a three-letter code, USD by default."""
    return _CHARS.get(code, CURRENCY_USD)


def _spread(text: str, screens: list[str], first: int, last: int) -> None:
    for i in range(first, last):
        screens[i] = text[i]


def _labelled(text: str, label: str, num_screens: int) -> list[str]:
    screens = [""] * num_screens
    first = 0
    if len(text) < num_screens:
        text = text.rjust(num_screens)
        screens[0] = label
        first = 1
    _spread(text, screens, first, num_screens)
    return screens


def parse_price_data(
    price: int,
    currency: str,
    use_suffix_format: bool = False,
    num_screens: int = NUM_SCREENS,
) -> list[str]:
    """Lay out the BTC price in the given currency across the panels."""
    symbol = currency_symbol(currency)
    if len(str(price)) >= num_screens or use_suffix_format:
        text = symbol + format_number_with_suffix(price, num_screens - 2)
    else:
        text = symbol + str(price)
    return _labelled(text, "BTC/" + currency_code(currency), num_screens)


def _float32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _round_half_away(value: float) -> int:
    whole = math.floor(value)
    return whole + 1 if value - whole >= 0.5 else whole


def parse_sats_per_currency(
    price: int,
    currency: str,
    with_sats_symbol: bool,
    num_screens: int = NUM_SCREENS,
) -> list[str]:
    """Lay out how many satoshis one unit of currency buys."""
    if price <= 0:
        raise ValueError("price must be positive")
    reciprocal = _float32(1.0 / _float32(float(price)))
    text = str(_round_half_away(reciprocal * 1e8))

    screens = [""] * num_screens
    if len(text) < num_screens:
        symbol_index = num_screens - len(text) - 1
        padded = text.rjust(num_screens)
        screens[0] = "SATS/" + currency_code(currency)
        _spread(padded, screens, 1, num_screens)
        if with_sats_symbol:
            screens[symbol_index] = "STS"
    return screens


def parse_block_height(block_height: int, num_screens: int = NUM_SCREENS) -> list[str]:
    """Lay out the current block height."""
    return _labelled(str(block_height), "BLOCK/HEIGHT", num_screens)


def parse_block_fees(block_fees: int, num_screens: int = NUM_SCREENS) -> list[str]:
    """Lay out the fee rate, with the unit on the last panel."""
    text = str(block_fees)
    screens = [""] * num_screens
    first = 0
    if len(text) < num_screens:
        text = text.rjust(num_screens - 1)
        screens[0] = "FEE/RATE"
        first = 1
    _spread(text, screens, first, num_screens - 1)
    screens[num_screens - 1] = "sat/vB"
    return screens


def parse_halving_countdown(
    block_height: int, as_blocks: bool, num_screens: int = NUM_SCREENS
) -> list[str]:
    """Lay out the distance to the next halving in blocks or in time."""
    blocks_left = _HALVING_INTERVAL - block_height % _HALVING_INTERVAL
    if as_blocks:
        return _labelled(str(blocks_left), "HAL/VING", num_screens)

    minutes = blocks_left * 10
    years, minutes = divmod(minutes, _MINUTES_PER_YEAR)
    days, minutes = divmod(minutes, _MINUTES_PER_DAY)
    hours, mins = divmod(minutes, 60)

    screens = [""] * num_screens
    screens[0] = "BIT/COIN"
    screens[1] = "HAL/VING"
    screens[num_screens - 5] = f"{years}/YRS"
    screens[num_screens - 4] = f"{days}/DAYS"
    screens[num_screens - 3] = f"{hours}/HRS"
    screens[num_screens - 2] = f"{mins}/MINS"
    screens[num_screens - 1] = "TO/GO"
    return screens


def parse_market_cap(
    block_height: int,
    price: int,
    currency: str,
    big_chars: bool,
    num_screens: int = NUM_SCREENS,
) -> list[str]:
    """Lay out the market cap, either shortened or in groups of three digits."""
    market_cap = int(supply_at_block(block_height) * float(price))
    screens = [""] * num_screens
    screens[0] = currency_code(currency) + "/MCAP"

    if big_chars:
        text = (currency + format_number_with_suffix(market_cap, num_screens - 2)).rjust(
            num_screens
        )
        _spread(text, screens, 1, num_screens)
        return screens

    digits = str(market_cap)
    digits = " " * ((3 - len(digits) % 3) % 3) + digits
    groups = [digits[i : i + 3] for i in range(0, len(digits), 3)]
    if len(groups) >= num_screens:
        raise ValueError("market cap has too many digits for the display")

    symbol_index = num_screens - len(groups) - 1
    screens[symbol_index] = f" {currency} "
    screens[symbol_index + 1 :] = groups
    return screens