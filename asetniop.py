r'''
ASETNIOP keyboard: a fixed chorded layout with two layers, letters and symbols.

Every character is looked up in the current layer, then the keyboard switches to the
other layer and looks it up again:

 1. if the current layer has the character, its chord is typed;
 2. the layer is swapped (this happens for every character);
 3. if the new layer has the character, the switch chord and the character's chord are
    typed, otherwise the character cannot be typed and the whole text fails.

So a character that only exists in the current layer cannot be typed, and a character
that exists in both layers is typed twice. Typing "1a" works (symbols then letters) but
typing "a" on its own does not.

Chords are written as left hand then right hand, pinky to thumb:

 a  |.... .....   (left pinky)
 A  |...| .....   (shift is the left thumb)
'''

import logging
from dataclasses import dataclass
from enum import Enum, unique
from functools import cache
from types import MappingProxyType
from typing import Iterable, Mapping

from hands import Chord, Finger, LEFT_THUMB
from keyboard import Keyboard, NoSuchChar

logger = logging.getLogger(__name__)

# left pinky and right thumb pressed together
SWITCH_CHORD = Chord.from_fingers(Finger.LP, Finger.RT)

SHIFT = LEFT_THUMB

LETTERS = {
    'a': '|.... .....',
    'b': '...|. .|...',
    'c': '.|.|. .....',
    'd': '.||.. .....',
    'e': '..|.. .....',
    'f': '|..|. .....',
    'g': '...|. ...|.',
    'h': '..... .||..',
    'i': '..... ..|..',
    'j': '.|... .|...',
    'k': '.|... ..|..',
    'l': '..... ..||.',
    'm': '..... .|..|',
    'n': '..... .|...',
    'o': '..... ...|.',
    'p': '..... ....|',
    'q': '|.... .|...',
    'r': '..||. .....',
    's': '.|... .....',
    't': '...|. .....',
    'u': '..... .|.|.',
    'v': '...|. ..|..',
    'w': '||... .....',
    'x': '|.|.. .....',
    'y': '..|.. .|...',
    'z': '|.... ..|..',
    '!': '..... ..|.|',
    "'": '..|.. ....|',
    ';': '..... ...||',
    ',': '..|.. ..|..',
    '.': '.|... ...|.',
    '?': '|.... ....|',
    '(': '|.... ...|.',
    ')': '.|... ....|',
    '-': '..|.. ...|.',
    '\t': '||||. .....',
    '\n': '..... .||||',
}

# shifted character -> the character whose chord it shares
LETTERS_SHIFTED = {
    **{upper: lower for lower, upper in zip('abcdefghijklmnopqrstuvwxyz', 'ABCDEFGHIJKLMNOPQRSTUVWXYZ')},
    '@': '!',
    '"': "'",
    ':': ';',
    '<': ',',
    '>': '.',
    '/': '?',
    '[': '(',
    ']': ')',
    '_': '-',
}

SYMBOLS = {
    '1': '|.... .....',
    '`': '|.|.. .....',
    '[': '|..|. .....',
    '(': '|.... ...|.',
    '?': '|.... ....|',
    '2': '.|... .....',
    '-': '.||.. .....',
    '=': '.|... ..|..',
    '.': '.|... ...|.',
    ')': '.|... ....|',
    '3': '..|.. .....',
    ',': '..|.. ...|.',
    "'": '..|.. ....|',
    '4': '...|. .....',
    '5': '..||. .....',
    '6': '..... .||..',
    '7': '..... .|...',
    ']': '..... .|..|',
    '8': '..... ..|..',
    '9': '..... ...|.',
    ';': '..... ...||',
}

# shifted symbols that share a chord with an unshifted one
SYMBOLS_SHIFTED = {
    '~': '`',
    '{': '[',
    '/': '?',
    '@': '2',
    '_': '-',
    '+': '=',
    '>': '.',
    '#': '3',
    '%': '5',
    '<': ',',
    '$': '4',
    '&': '7',
    '^': '6',
    '}': ']',
    '*': '8',
    ':': ';',
}

# shifted symbols without an unshifted counterpart in the layer
SYMBOLS_SHIFT_ONLY = {
    '!': '|.... ..|..',
}


def _build_table(
    unshifted: Mapping[str, str],
    shifted: Mapping[str, str],
    shift_only: Mapping[str, str] | None = None,
) -> Mapping[str, Chord]:
    table = {ch: Chord.parse(chord) for ch, chord in unshifted.items()}
    for ch, base in shifted.items():
        table[ch] = table[base].combine(SHIFT)
    for ch, chord in (shift_only or {}).items():
        table[ch] = Chord.parse(chord).combine(SHIFT)
    return MappingProxyType(table)


@unique
class Layer(Enum):
    LETTERS = 0
    SYMBOLS = 1

    def swap(self) -> 'Layer':
        """Return the other layer."""
        return Layer.SYMBOLS if self is Layer.LETTERS else Layer.LETTERS

    def table(self, tables: 'AsetniopTables') -> Mapping[str, Chord]:
        return tables.letters if self is Layer.LETTERS else tables.symbols


@dataclass(frozen=True)
class AsetniopTables:
    """
    The read-only character to chord tables of both layers.
    """
    letters: Mapping[str, Chord]
    symbols: Mapping[str, Chord]

    @classmethod
    def from_dicts(cls, letters: Mapping[str, Chord], symbols: Mapping[str, Chord]) -> 'AsetniopTables':
        return cls(MappingProxyType(dict(letters)), MappingProxyType(dict(symbols)))


@cache
def default_tables() -> AsetniopTables:
    """The standard ASETNIOP tables, built on first use."""
    return AsetniopTables(
        letters=_build_table(LETTERS, LETTERS_SHIFTED),
        symbols=_build_table(SYMBOLS, SYMBOLS_SHIFTED, SYMBOLS_SHIFT_ONLY),
    )


class Asetniop(Keyboard):
    """
    The two-layer ASETNIOP keyboard.

    Every text starts in the letters layer, and the layer alternates with every typed
    character. The keyboard itself never changes after construction.
    """

    def __init__(self, tables: AsetniopTables | None = None):
        self.tables = tables if tables is not None else default_tables()

    def __repr__(self) -> str:
        return f"Asetniop(letters={len(self.tables.letters)}, symbols={len(self.tables.symbols)})"

    def try_type_chars(self, text: Iterable[str]) -> list[Chord]:
        chords: list[Chord] = []
        layer = Layer.LETTERS
        for ch in text:
            chord = layer.table(self.tables).get(ch)
            if chord is not None:
                chords.append(chord)

            layer = layer.swap()

            chord = layer.table(self.tables).get(ch)
            if chord is None:
                logger.debug("char %r is not in the %s layer", ch, layer.name.lower())
                raise NoSuchChar(ch)
            chords.append(SWITCH_CHORD)
            chords.append(chord)
        return chords


if __name__ == "__main__":
    tables = default_tables()
    for layer in Layer:
        print(f'{layer.name.lower()}:')
        for ch, chord in layer.table(tables).items():
            print(f'  {ch!r:6} {chord}')
