"""Building the ordered sequence of text units recited by a miner.

A recitation is made of three parts: an optional preparation, the mantras and
an optional conclusion. Each part is split into units, and one unit is appended
to the buffer per tick.

Units are whitespace-delimited words. No attempt is made at linguistic
syllabification; diacritics and non-Latin scripts are kept as written. Callers
that need finer units (e.g. "om ma ni pad me hum") either space them out in the
text or pass an explicit syllable list.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mantra_miner.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mantra_miner.config import MantraConfig, MinerConfig

type TextUnit = str
type Sequence = tuple[TextUnit, ...]


def split_units(text: str | None) -> Sequence:
    """Split text into whitespace-delimited units. ``None`` yields no units."""
    if not text:
        return ()
    return tuple(text.split())


def _syllable_units(syllables: Iterable[str]) -> Sequence:
    units = tuple(syllable.strip() for syllable in syllables)
    if any(not unit for unit in units):
        raise ConfigurationError("Mantra syllables must not be blank")
    return units


def _repeat(units: Sequence, repeats: int) -> Sequence:
    if repeats < 1:
        raise ConfigurationError(f"Mantra repeats must be at least 1, got {repeats}")
    return units * repeats


def build_sequence(
    mantra_text: str,
    preparation: str | None = None,
    conclusion: str | None = None,
    mantra_repeats: int = 1,
) -> Sequence:
    """Build the units of one recitation from plain texts.

    Args:
        mantra_text: The mantra; must contain at least one unit.
        preparation: Text recited before the mantra.
        conclusion: Text recited after the mantra.
        mantra_repeats: How many times the mantra is recited within one recitation.

    Raises:
        ConfigurationError: If the mantra is empty or ``mantra_repeats`` < 1.
    """
    units = split_units(mantra_text)
    if not units:
        raise ConfigurationError("Mantra text must not be empty")
    body = _repeat(units, mantra_repeats)
    return split_units(preparation) + body + split_units(conclusion)


def mantra_units(mantra: MantraConfig) -> Sequence:
    """Units of a configured mantra, before repetition."""
    if mantra.syllables:
        return _syllable_units(mantra.syllables)
    units = split_units(mantra.text)
    if not units:
        raise ConfigurationError("Mantra text must not be empty")
    return units


def build_session_sequence(config: MinerConfig) -> Sequence:
    """Build the units of one recitation from a full miner configuration."""
    if not config.mantras:
        raise ConfigurationError("At least one mantra is required")

    body: Sequence = ()
    for mantra in config.mantras:
        body += _repeat(mantra_units(mantra), mantra.repeats)
    return split_units(config.preparation) + body + split_units(config.conclusion)


__all__ = [
    "Sequence",
    "TextUnit",
    "build_sequence",
    "build_session_sequence",
    "mantra_units",
    "split_units",
]
