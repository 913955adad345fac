"""Unit tests for the generate_shortcode function in shortener.py.

Test coverage includes:

1. Basic functionality
   - Ensures the function returns a string of the expected length.

2. Output format
   - All characters in the shortcode must belong to the Base62 alphabet.

3. Distribution
   - 10,000 shortcodes use every symbol, roughly uniformly.

4. Seeding
   - The random source is reseeded from the nanosecond clock on every call.

5. Error handling
   - Ensures invalid lengths raise appropriate exceptions.
"""

import string
from collections import Counter
from types import SimpleNamespace

import pytest

from urlshort.utils import generate_shortcode
from urlshort.utils import shortener


BASE62 = set(string.ascii_letters + string.digits)


# -------------------------------
# 1. Basic functionality and type
# -------------------------------


def test_generate_shortcode_returns_six_characters():
    """Ensure generate_shortcode() returns a 6-character string by default."""
    result = generate_shortcode()
    assert isinstance(result, str)
    assert len(result) == 6


@pytest.mark.parametrize('length', [1, 6, 10, 32])
def test_generate_shortcode_respects_length(length):
    assert len(generate_shortcode(length=length)) == length


# -------------------------------
# 2. Output format validation
# -------------------------------


def test_alphabet_is_base62():
    assert set(shortener.ALPHABET) == BASE62
    assert shortener.BASE == 62


def test_generate_shortcode_is_base62_safe():
    """Ensure 10,000 shortcodes contain only Base62-safe characters."""
    for _ in range(10_000):
        result = generate_shortcode()
        assert len(result) == 6
        assert set(result) <= BASE62


# -------------------------------
# 3. Distribution
# -------------------------------


def test_generate_shortcode_distribution_is_roughly_uniform():
    """Every symbol shows up about 60,000 / 62 ~= 968 times.

    NOTE: The bounds sit ~8 standard deviations away from the mean, so this
          only catches a broken sampler (missing symbols, heavy bias).
    """
    counts = Counter(''.join(generate_shortcode() for _ in range(10_000)))

    assert set(counts) == BASE62
    assert all(700 < count < 1250 for count in counts.values())


# -------------------------------
# 4. Seeding
# -------------------------------


def test_generate_shortcode_reseeds_from_clock_on_every_call(monkeypatch):
    """Two calls observing the same clock value produce the same shortcode."""
    monkeypatch.setattr(shortener, 'time', SimpleNamespace(time_ns=lambda: 1_700_000_000_000_000_000))
    assert generate_shortcode() == generate_shortcode()


def test_generate_shortcode_changes_with_clock(monkeypatch):
    ticks = iter(range(1_700_000_000_000_000_000, 1_700_000_000_000_000_100))
    monkeypatch.setattr(shortener, 'time', SimpleNamespace(time_ns=lambda: next(ticks)))
    results = {generate_shortcode() for _ in range(50)}
    assert len(results) > 1


# -------------------------------
# 5. Error handling
# -------------------------------


@pytest.mark.parametrize('length', [None, '6', 6.0])
def test_invalid_length_type_raises_error(length):
    with pytest.raises(TypeError):
        generate_shortcode(length=length)


@pytest.mark.parametrize('length', [0, -1])
def test_invalid_length_value_raises_error(length):
    with pytest.raises(ValueError):
        generate_shortcode(length=length)
