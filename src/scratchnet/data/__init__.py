"""Datasets used by the example training scripts."""

from .morse import MorseDataset, decode_output, encode_character, encode_morse

__all__ = ["MorseDataset", "decode_output", "encode_character", "encode_morse"]
