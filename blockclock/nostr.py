"""Screen layout for incoming Nostr zap notifications."""

from __future__ import annotations

from blockclock.utils import NUM_SCREENS


def parse_zap_notify(
    amount: int, with_sats_symbol: bool, num_screens: int = NUM_SCREENS
) -> list[str]:
    """Lay out a zap amount, one digit per panel, right aligned."""
    if amount < 0:
        raise ValueError("zap amount must not be negative")
    text = str(amount)
    start = num_screens - len(text)
    if start < 0:
        raise ValueError("zap amount is too long for the display")

    screens = ["ZAP", "mdi-lnbolt"] + [""] * (num_screens - 2)
    if start > 0 and with_sats_symbol:
        screens[start - 1] = "STS"
    screens[start:] = list(text)
    return screens