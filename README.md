# blockclock

Text layouts for a row of small displays that together show Bitcoin
figures: price, sats per unit of currency, block height, fee rate, halving
countdown, market cap, Bitaxe miner stats and Lightning zap notices. Each
layout is a list of strings, one per screen. The package also holds a QR
Code encoder with no outside dependencies.

## Install

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Screen layouts

Every layout function takes `num_screens`, the number of panels in the row.
It defaults to `blockclock.utils.NUM_SCREENS`, which is 7. The first entries
carry a label, and the rest carry one character or a short caption each.

```python
from blockclock.screens import parse_block_height, parse_price_data, currency_char

parse_block_height(840000)
# ['BLOCK/HEIGHT', '8', '4', '0', '0', '0', '0']

parse_price_data(65000, currency_char("EUR"))
```

`blockclock.screens` provides:

- `parse_price_data(price, currency, use_suffix_format=False, num_screens=7)`
- `parse_sats_per_currency(price, currency, with_sats_symbol, num_screens=7)`:
  raises `ValueError` for a price that is not positive
- `parse_block_height(block_height, num_screens=7)`
- `parse_block_fees(block_fees, num_screens=7)`: the last panel reads `sat/vB`
- `parse_halving_countdown(block_height, as_blocks, num_screens=7)`: blocks
  left, or years, days, hours and minutes left
- `parse_market_cap(block_height, price, currency, big_chars, num_screens=7)`:
  either a shortened figure or groups of three digits. Raises `ValueError`
  when the groups do not fit the panels.

Currencies are single characters: `CURRENCY_USD` (`$`), `CURRENCY_EUR`,
`CURRENCY_GBP`, `CURRENCY_JPY`, `CURRENCY_AUD` and `CURRENCY_CAD`. The helpers
are `currency_symbol` (the glyph shown on screen), `currency_code` (the
three-letter code, USD for anything unknown) and `currency_char` (the
reverse of `currency_code`, `$` for anything unknown).

`blockclock.bitaxe` offers `parse_bitaxe_hash_rate(text)` and
`parse_bitaxe_best_diff(text)`. `parse_bitaxe_hash_rate` raises `ValueError`
when the text is too long for the panels. `blockclock.nostr` offers
`parse_zap_notify(amount, with_sats_symbol)`, which raises `ValueError` for
a negative amount or one with too many digits.

## Helpers

`blockclock.utils` holds:

- `supply_at_block(block_nr)`: the coins issued up to a block height
- `format_number_with_suffix(num, num_characters=4)`: shortens a number with
  a K, M, B, T or Q suffix and uses any spare width for decimals. For
  example, `1500000` becomes `"1.5M"`.
- `amount_in_satoshis(bolt11)`: the amount in a Lightning invoice string.
  Raises `ValueError` when there is no amount or the multiplier
  (`m`, `u`, `n`, `p`) is missing or unknown.
- `modulo(x, n)`: the remainder of `x` by `n`, taking the sign of `n`

## QR Codes

```python
from blockclock.qrencode import encode_text
from blockclock.qrecc import Ecc
from blockclock.qrmatrix import Mask

qr = encode_text("HELLO WORLD", Ecc.MEDIUM, 1, 40, Mask.AUTO, True)
for y in range(qr.size):
    print("".join("##" if qr.get_module(x, y) else "  " for x in range(qr.size)))
```

The result is a `QrCode` with these attributes:

- `version`, `ecl` and `mask`: the values that were chosen
- `modules`: rows of booleans, where True is a dark module
- `size`: the side length

`get_module` returns False outside the symbol.

Other encoders:

- `encode_binary` encodes raw bytes.
- `encode_segments` and `encode_segments_advanced` encode segments built with
  `make_numeric`, `make_alphanumeric`, `make_bytes` or `make_eci` from
  `blockclock.qrsegment`.

`DataTooLongError`, a subclass of `ValueError`, is raised when the data does
not fit any version in the allowed range.

The lower-level building blocks are public as well:

- `blockclock.qrecc`: Reed-Solomon and block interleaving
- `blockclock.qrmatrix`: function patterns, codeword placement, masks and
  penalty scoring

## What it does not do

The package only computes what each panel should say and which QR modules
are dark. It does not drive any display hardware or render fonts. It also
does not fetch prices, blocks, miner statistics or zaps from the network.
The caller supplies those figures.