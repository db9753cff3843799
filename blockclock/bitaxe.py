"""Screen layouts for statistics reported by a Bitaxe miner."""

from __future__ import annotations

from blockclock.utils import NUM_SCREENS


def parse_bitaxe_hash_rate(text: str, num_screens: int = NUM_SCREENS) -> list[str]:
    """Lay out a hash rate, one digit per panel, ending with the unit."""
    start = num_screens - 1 - len(text)
    if start < 0:
        raise ValueError("hash rate text is too long for the display")

    screens = [""] * num_screens
    if start > 0:
        screens[start - 1] = "mdi:pickaxe"
    screens[start : start + len(text)] = list(text)
    screens[num_screens - 1] = "GH/S"
    screens[0] = "BIT/AXE"
    return screens


def parse_bitaxe_best_diff(text: str, num_screens: int = NUM_SCREENS) -> list[str]:
    """Lay out the best difficulty, one character per panel."""
    screens = [""] * num_screens
    first = 0
    if len(text) < num_screens:
        text = text.rjust(num_screens)
        screens[0] = "BIT/AXE"
        screens[1] = "mdi:rocket"
        first = 2
    screens[first:] = list(text[first:num_screens])
    return screens