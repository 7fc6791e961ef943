'''
The typing protocol: turning text into the sequence of chords that types it.
'''

import logging
from abc import ABC, abstractmethod
from typing import Iterable

from hands import Chord

logger = logging.getLogger(__name__)

LOWERCASE_CHARS = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DIGIT_CHARS = "0123456789"
PUNCTUATION_CHARS = "`-=[]\\;',./~!@#$%^&*()_+{}|:\"<>? \t\n"
TYPABLE_CHARS = (
    LOWERCASE_CHARS
    + UPPERCASE_CHARS
    + "`1234567890-=[]\\;',./"
    + "~!@#$%^&*()_+{}|:\"<>?"
    + " \t\n"
)


class NoSuchChar(LookupError):
    """
    A character could not be typed with a keyboard.

    Attributes
    ----------
    ch : str
        The offending character.
    """
    def __init__(self, ch: str):
        super().__init__(ch)
        self.ch = ch

    def __str__(self) -> str:
        return f"char {self.ch!r} was not found in keyboard"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NoSuchChar) and other.ch == self.ch

    def __hash__(self) -> int:
        return hash(self.ch)


class TypingAborted(RuntimeError):
    """Raised by ``Keyboard.type_chars`` when the text cannot be typed at all."""


class Keyboard(ABC):
    """
    Anything that can type text as a sequence of chords.
    """

    @abstractmethod
    def try_type_chars(self, text: Iterable[str]) -> list[Chord]:
        """
        Return the chords that type ``text``, in order.

        Raises
        ------
        NoSuchChar
            For the first character, in input order, that cannot be typed. Nothing
            is returned for the characters before it.
        """

    def type_chars(self, text: Iterable[str]) -> list[Chord]:
        """
        Like ``try_type_chars`` but treats an untypeable character as fatal.

        Raises
        ------
        TypingAborted
            If any character cannot be typed. Use ``try_type_chars`` to recover instead.
        """
        try:
            return self.try_type_chars(text)
        except NoSuchChar as exc:
            raise TypingAborted(str(exc)) from exc


class SkippingKeyboard(Keyboard):
    """
    A keyboard where every character is typed independently of the others, so an
    untypeable character can be dropped without affecting the rest of the text.
    """

    @abstractmethod
    def try_type_char(self, ch: str) -> Chord:
        """Return the chord for ``ch`` or raise ``NoSuchChar``."""

    def try_type_chars(self, text: Iterable[str]) -> list[Chord]:
        return [self.try_type_char(ch) for ch in text]

    def type_chars_skip(self, text: Iterable[str]) -> list[Chord]:
        """
        Return the chords for the typeable characters of ``text``, silently dropping
        the others.
        """
        chords = []
        skipped = 0
        for ch in text:
            try:
                chords.append(self.try_type_char(ch))
            except NoSuchChar:
                skipped += 1
        if skipped:
            logger.debug("skipped %d untypeable characters", skipped)
        return chords
