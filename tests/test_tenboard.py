import random
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from hands import LEFT_THUMB, RIGHT_THUMB, Chord, all_states, no_thumbs, with_thumbs
from keyboard import DIGIT_CHARS, LOWERCASE_CHARS, PUNCTUATION_CHARS, TYPABLE_CHARS, NoSuchChar
from tenboard import (
    VARIANTS,
    LayoutCapacityError,
    TenboardModifiers,
    TenboardThumbs,
    TenboardUnconstrained,
)

TEXT = "The quick brown fox, jumps over the lazy dog!\n42 times.\n"


def assert_injective(table: dict[str, Chord]) -> None:
    inverted = {chord: ch for ch, chord in table.items()}
    assert len(inverted) == len(table)


@pytest.mark.parametrize("variant", list(VARIANTS.values()), ids=list(VARIANTS))
@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_layouts_are_injective(variant, seed):
    keyboard = variant(seed=seed)
    assert_injective(keyboard.table())


@pytest.mark.parametrize("variant", list(VARIANTS.values()), ids=list(VARIANTS))
def test_same_seed_same_layout(variant):
    assert variant(seed=7).table() == variant(seed=7).table()
    assert variant(rng=random.Random(7)).table() == variant(seed=7).table()


@pytest.mark.parametrize("variant", list(VARIANTS.values()), ids=list(VARIANTS))
def test_rng_and_seed_are_exclusive(variant):
    with pytest.raises(ValueError):
        variant(rng=random.Random(1), seed=1)


@pytest.mark.parametrize("variant", list(VARIANTS.values()), ids=list(VARIANTS))
def test_table_round_trip(variant):
    keyboard = variant(seed=11)
    as_strings = {ch: str(chord) for ch, chord in keyboard.table().items()}
    rebuilt = variant.from_table(as_strings)
    assert rebuilt.table() == keyboard.table()
    assert rebuilt.try_type_chars(TEXT) == keyboard.try_type_chars(TEXT)


def test_unconstrained_is_total():
    keyboard = TenboardUnconstrained(seed=0)
    table = keyboard.table()
    assert list(table) == list(TYPABLE_CHARS)
    assert set(table.values()) <= set(all_states())
    for ch in TYPABLE_CHARS:
        assert keyboard.try_type_char(ch) == table[ch]


def test_unconstrained_no_such_char():
    keyboard = TenboardUnconstrained(seed=0)
    with pytest.raises(NoSuchChar) as excinfo:
        keyboard.try_type_chars("café")
    assert excinfo.value.ch == 'é'
    assert len(keyboard.type_chars_skip("café")) == 3


def test_unconstrained_capacity():
    chars = [chr(0x100 + i) for i in range(110)]
    assert len(TenboardUnconstrained(chars=chars, seed=0).table()) == 110
    with pytest.raises(LayoutCapacityError) as excinfo:
        TenboardUnconstrained(chars=chars + ['x'], seed=0)
    assert isinstance(excinfo.value, ValueError)
    assert not isinstance(excinfo.value, NoSuchChar)


def test_different_seeds_differ():
    assert TenboardUnconstrained(seed=1).table() != TenboardUnconstrained(seed=2).table()


def test_thumbs_reserved_chords():
    keyboard = TenboardThumbs(seed=0)
    table = keyboard.table()
    assert table[' '] == LEFT_THUMB
    assert table['\n'] == RIGHT_THUMB
    assert keyboard.try_type_char(' ') == LEFT_THUMB
    assert keyboard.try_type_char('\n') == RIGHT_THUMB
    assert len(table) == len(TYPABLE_CHARS)
    others = [chord for ch, chord in table.items() if ch not in ' \n']
    assert set(others) <= set(with_thumbs())
    assert LEFT_THUMB not in others and RIGHT_THUMB not in others


def test_thumbs_capacity():
    chars = [chr(0x100 + i) for i in range(109)]
    with pytest.raises(LayoutCapacityError):
        TenboardThumbs(chars=chars, seed=0)
    assert len(TenboardThumbs(chars=chars[:108], seed=0).table()) == 110


def test_thumbs_from_table_requires_reserved_chords():
    table = TenboardThumbs(seed=0).table()
    table[' '], table['\n'] = table['\n'], table[' ']
    with pytest.raises(ValueError):
        TenboardThumbs.from_table(table)


def test_from_table_rejects_duplicate_chords():
    table = TenboardUnconstrained(seed=0).table()
    table['a'] = table['b']
    with pytest.raises(ValueError, match="distinct chords"):
        TenboardUnconstrained.from_table(table)


def test_modifiers_thumbs():
    keyboard = TenboardModifiers(seed=5)
    assert {keyboard.whitespace, keyboard.newline} == {LEFT_THUMB, RIGHT_THUMB}
    assert keyboard.try_type_char(' ') == keyboard.whitespace
    assert keyboard.try_type_char('\n') == keyboard.newline


def test_modifiers_thumb_choice_is_random():
    choices = {TenboardModifiers(seed=seed).whitespace for seed in range(50)}
    assert choices == {LEFT_THUMB, RIGHT_THUMB}


def test_modifiers_table():
    keyboard = TenboardModifiers(seed=5)
    table = keyboard.table()
    base_chars = LOWERCASE_CHARS + DIGIT_CHARS
    punctuation_chars = [ch for ch in PUNCTUATION_CHARS if ch not in ' \n']
    assert len(table) == len(base_chars) + len(punctuation_chars) + 2
    assert_injective(table)

    bare = set(no_thumbs())
    for ch in base_chars:
        assert table[ch] in bare
    for ch in punctuation_chars:
        chord = table[ch]
        assert chord.combine(keyboard.newline) == chord
        assert chord != keyboard.newline
        assert not chord.combine(keyboard.whitespace) == chord


def test_modifiers_uppercase():
    keyboard = TenboardModifiers(seed=5)
    for ch in LOWERCASE_CHARS:
        assert keyboard.try_type_char(ch.upper()) == keyboard.try_type_char(ch) | keyboard.whitespace


def test_modifiers_no_such_char():
    keyboard = TenboardModifiers(seed=5)
    with pytest.raises(NoSuchChar) as excinfo:
        keyboard.try_type_char('É')
    assert excinfo.value.ch == 'É'
    with pytest.raises(NoSuchChar):
        keyboard.try_type_char('é')


def test_modifiers_capacity():
    with pytest.raises(LayoutCapacityError):
        TenboardModifiers(base_chars=[chr(0x100 + i) for i in range(37)], seed=0)


def test_modifiers_types_text():
    keyboard = TenboardModifiers(seed=5)
    chords = keyboard.try_type_chars(TEXT)
    assert len(chords) == len(TEXT)
    assert chords[3] == keyboard.whitespace
