"""Morse code dataset: dot/dash sequences mapped to one-hot characters."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from ..exceptions import ValidationError

LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DIGITS = "0123456789"
SPACE = " "
ALPHABET = LETTERS + DIGITS + SPACE
NUM_CLASSES = len(ALPHABET)

# "/" separates words.
CHAR_TO_MORSE: dict[str, str] = {
    "A": ".-", "B": "-...", "C": "-.-.", "D": "-..", "E": ".", "F": "..-.",
    "G": "--.", "H": "....", "I": "..", "J": ".---", "K": "-.-", "L": ".-..",
    "M": "--", "N": "-.", "O": "---", "P": ".--.", "Q": "--.-", "R": ".-.",
    "S": "...", "T": "-", "U": "..-", "V": "...-", "W": ".--", "X": "-..-",
    "Y": "-.--", "Z": "--..",
    "0": "-----", "1": ".----", "2": "..---", "3": "...--", "4": "....-",
    "5": ".....", "6": "-....", "7": "--...", "8": "---..", "9": "----.",
    " ": "/",
}
MORSE_TO_CHAR: dict[str, str] = {code: char for char, code in CHAR_TO_MORSE.items()}

MAX_CODE_LENGTH = max(len(code) for code in CHAR_TO_MORSE.values())


def encode_morse(code: str, max_length: int = MAX_CODE_LENGTH) -> List[float]:
    """Encode ``code`` as ``max_length`` values: ``.`` is 1, ``-`` is -1, anything else 0."""

    vector = [0.0] * max_length
    for index, symbol in enumerate(code[:max_length]):
        if symbol == ".":
            vector[index] = 1.0
        elif symbol == "-":
            vector[index] = -1.0
    return vector


def character_index(char: str) -> int:
    if len(char) != 1:
        raise ValidationError(f"Input must be a single character, got: {char!r}")
    index = ALPHABET.find(char.upper())
    if index < 0:
        raise ValidationError(f"Invalid character: {char!r}")
    return index


def encode_character(char: str) -> List[float]:
    vector = [0.0] * NUM_CLASSES
    vector[character_index(char)] = 1.0
    return vector


def decode_output(outputs: Sequence[float]) -> str:
    """Character whose output unit is most active."""

    if len(outputs) != NUM_CLASSES:
        raise ValidationError(f"Expected {NUM_CLASSES} outputs, got: {len(outputs)}")
    return ALPHABET[int(np.argmax(outputs))]


@dataclass
class MorseDataset:
    """One ``(encoded_code, one_hot_character)`` pair per Morse symbol."""

    max_length: int = MAX_CODE_LENGTH
    inputs: List[List[float]] = field(init=False)
    targets: List[List[float]] = field(init=False)
    labels: List[str] = field(init=False)

    def __post_init__(self) -> None:
        self.labels = list(CHAR_TO_MORSE)
        self.inputs = [encode_morse(CHAR_TO_MORSE[char], self.max_length) for char in self.labels]
        self.targets = [encode_character(char) for char in self.labels]

    def __len__(self) -> int:
        return len(self.labels)

    def __iter__(self) -> Iterator[Tuple[List[float], List[float]]]:
        return iter(zip(self.inputs, self.targets))

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Inputs and targets stacked as ``(n, max_length)`` and ``(n, NUM_CLASSES)`` arrays."""

        return np.asarray(self.inputs, dtype=float), np.asarray(self.targets, dtype=float)


__all__ = [
    "ALPHABET",
    "CHAR_TO_MORSE",
    "MAX_CODE_LENGTH",
    "MORSE_TO_CHAR",
    "MorseDataset",
    "NUM_CLASSES",
    "character_index",
    "decode_output",
    "encode_character",
    "encode_morse",
]
