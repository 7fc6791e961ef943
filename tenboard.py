'''
Tenboard keyboards: every character is typed with a single chord picked at random.

Three variants differ in which chords are allowed and how the thumbs are used:

TenboardUnconstrained
    any typable character on any chord of the all-states space (110 chords)
TenboardThumbs
    space and newline are the bare thumb chords, everything else is on the
    with-thumbs space (108 chords)
TenboardModifiers
    one thumb is the whitespace/shift modifier, the other is the newline/punctuation
    modifier; lowercase letters and digits use the no-thumbs space (36 chords),
    uppercase letters add the shift thumb, punctuation adds the punctuation thumb
'''

import logging
import random
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from hands import Chord, LEFT_THUMB, RIGHT_THUMB, all_states, no_thumbs, with_thumbs
from keyboard import (
    DIGIT_CHARS,
    LOWERCASE_CHARS,
    PUNCTUATION_CHARS,
    TYPABLE_CHARS,
    NoSuchChar,
    SkippingKeyboard,
)

logger = logging.getLogger(__name__)

SPACE = ' '
NEWLINE = '\n'


class LayoutCapacityError(ValueError):
    """The character set does not fit in the chord space of a layout."""


def _unique(chars: Iterable[str]) -> list[str]:
    """Keep the first occurrence of every character, in order."""
    return list(dict.fromkeys(chars))


def _rng(rng: random.Random | None, seed: int | None) -> random.Random:
    if rng is not None and seed is not None:
        raise ValueError("Specify either rng or seed, not both")
    return rng if rng is not None else random.Random(seed)


def _random_assignment(chars: list[str], space: Iterator[Chord], rng: random.Random, name: str) -> dict[str, Chord]:
    """
    Assign each character a distinct chord from a shuffled copy of the chord space.
    """
    chords = list(space)
    if len(chars) > len(chords):
        raise LayoutCapacityError(
            f"{len(chars)} characters do not fit in the {len(chords)} chords of the {name} space"
        )
    rng.shuffle(chords)
    return dict(zip(chars, chords))


def _check_injective(layout: Mapping[str, Chord]) -> None:
    inverted = {chord: ch for ch, chord in layout.items()}
    if len(inverted) != len(layout):
        raise ValueError(
            f"Layout assigns {len(layout)} characters to only {len(inverted)} distinct chords"
        )


class Tenboard(SkippingKeyboard):
    """
    Base class of the Tenboard keyboards.

    Attributes
    ----------
    layout : Mapping[str, Chord]
        Read-only character to chord table, excluding reserved chords.
    """

    def __init__(self, layout: Mapping[str, Chord]):
        _check_injective(self._full_table(layout))
        self.layout = MappingProxyType(dict(layout))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self.table())} chars)"

    def _full_table(self, layout: Mapping[str, Chord]) -> dict[str, Chord]:
        return dict(layout)

    def table(self) -> dict[str, Chord]:
        """
        Return one entry per typable character, reserved chords included. The order is
        deterministic: the order in which characters were assigned.
        """
        return self._full_table(self.layout)

    def try_type_char(self, ch: str) -> Chord:
        try:
            return self.layout[ch]
        except KeyError:
            raise NoSuchChar(ch) from None

    @classmethod
    def from_table(cls, table: Mapping[str, Chord | str]) -> 'Tenboard':
        """
        Rebuild a keyboard from the output of ``table``. Chords may be given as strings.
        """
        return cls._from_table({ch: chord if isinstance(chord, Chord) else Chord.parse(chord) for ch, chord in table.items()})

    @classmethod
    def _from_table(cls, table: dict[str, Chord]) -> 'Tenboard':
        keyboard = cls.__new__(cls)
        Tenboard.__init__(keyboard, table)
        return keyboard


class TenboardUnconstrained(Tenboard):
    """
    Any character can be mapped to any chord.
    """

    def __init__(
        self,
        chars: Iterable[str] = TYPABLE_CHARS,
        rng: random.Random | None = None,
        seed: int | None = None,
    ):
        chars = _unique(chars)
        layout = _random_assignment(chars, all_states(), _rng(rng, seed), 'all-states')
        super().__init__(layout)
        logger.debug("built unconstrained tenboard with %d chars", len(layout))


class TenboardThumbs(Tenboard):
    """
    Space and newline are reserved for the bare left and right thumb chords.
    """

    reserved = MappingProxyType({SPACE: LEFT_THUMB, NEWLINE: RIGHT_THUMB})

    def __init__(
        self,
        chars: Iterable[str] = TYPABLE_CHARS,
        rng: random.Random | None = None,
        seed: int | None = None,
    ):
        chars = [ch for ch in _unique(chars) if ch not in self.reserved]
        layout = _random_assignment(chars, with_thumbs(), _rng(rng, seed), 'with-thumbs')
        super().__init__(layout)
        logger.debug("built thumbs tenboard with %d chars + %d reserved", len(layout), len(self.reserved))

    def _full_table(self, layout: Mapping[str, Chord]) -> dict[str, Chord]:
        return {**layout, **self.reserved}

    def try_type_char(self, ch: str) -> Chord:
        if ch in self.reserved:
            return self.reserved[ch]
        return super().try_type_char(ch)

    @classmethod
    def _from_table(cls, table: dict[str, Chord]) -> 'TenboardThumbs':
        for ch, chord in cls.reserved.items():
            if table.get(ch) != chord:
                raise ValueError(f"Table must map {ch!r} to {chord}")
        return super()._from_table({ch: chord for ch, chord in table.items() if ch not in cls.reserved})


class TenboardModifiers(Tenboard):
    """
    The thumbs act as modifiers.

    Attributes
    ----------
    whitespace : Chord
        The thumb chord typed for space, also added to a lowercase chord to type its
        uppercase letter.
    newline : Chord
        The thumb chord typed for newline, also pressed with every punctuation chord.
    """

    def __init__(
        self,
        base_chars: Iterable[str] = LOWERCASE_CHARS + DIGIT_CHARS,
        punctuation_chars: Iterable[str] = PUNCTUATION_CHARS,
        rng: random.Random | None = None,
        seed: int | None = None,
    ):
        rng = _rng(rng, seed)
        if rng.random() < 0.5:
            self.whitespace, self.newline = LEFT_THUMB, RIGHT_THUMB
        else:
            self.whitespace, self.newline = RIGHT_THUMB, LEFT_THUMB

        base_chars = _unique(base_chars)
        punctuation_chars = [ch for ch in _unique(punctuation_chars) if ch not in (SPACE, NEWLINE)]

        base = _random_assignment(base_chars, no_thumbs(), rng, 'no-thumbs')
        punctuation = _random_assignment(
            punctuation_chars,
            (chord.combine(self.newline) for chord in no_thumbs()),
            rng,
            'punctuation',
        )
        overlap = set(base) & set(punctuation)
        if overlap:
            raise ValueError(f"Characters {sorted(overlap)} are both base and punctuation characters")

        self.punctuation = MappingProxyType(punctuation)
        super().__init__({**base, **punctuation})
        logger.debug(
            "built modifiers tenboard with %d base and %d punctuation chars, whitespace thumb %s",
            len(base), len(punctuation), self.whitespace,
        )

    def _full_table(self, layout: Mapping[str, Chord]) -> dict[str, Chord]:
        return {**layout, SPACE: self.whitespace, NEWLINE: self.newline}

    def try_type_char(self, ch: str) -> Chord:
        if ch == SPACE:
            return self.whitespace
        if ch == NEWLINE:
            return self.newline
        if ch.isupper():
            lower = ch.lower()
            if lower not in self.layout or lower in self.punctuation:
                raise NoSuchChar(ch)
            return self.layout[lower].combine(self.whitespace)
        return super().try_type_char(ch)

    @classmethod
    def _from_table(cls, table: dict[str, Chord]) -> 'TenboardModifiers':
        try:
            whitespace, newline = table[SPACE], table[NEWLINE]
        except KeyError:
            raise ValueError("Table must contain both space and newline") from None
        if {whitespace, newline} != {LEFT_THUMB, RIGHT_THUMB}:
            raise ValueError("Space and newline must be the two bare thumb chords")

        keyboard = cls.__new__(cls)
        keyboard.whitespace, keyboard.newline = whitespace, newline
        layout = {ch: chord for ch, chord in table.items() if ch not in (SPACE, NEWLINE)}
        keyboard.punctuation = MappingProxyType({ch: chord for ch, chord in layout.items() if chord.combine(newline) == chord})
        Tenboard.__init__(keyboard, layout)
        return keyboard


VARIANTS: dict[str, type[Tenboard]] = {
    'unconstrained': TenboardUnconstrained,
    'thumbs': TenboardThumbs,
    'modifiers': TenboardModifiers,
}


if __name__ == "__main__":
    for name, variant in VARIANTS.items():
        keyboard = variant(seed=0)
        print(f'{name}:')
        for ch, chord in keyboard.table().items():
            print(f'  {ch!r:6} {chord}')
        print()
