"""
Game Configuration Constants Module

This module defines the game rules and loads the bundled word list.
All game parameters are centralized here to enable easy modification.
"""

import json
import os
import string
from typing import List, Final, Optional

# Core Game Configuration Constants
GUESS_LIMIT: Final[int] = 6
"""
Maximum number of counted guesses allowed per session.
Type: Final[int] - Immutable to prevent accidental modification
"""

WORD_LENGTH: Final[int] = 5

ALPHABET: Final[str] = string.ascii_lowercase

DEFAULT_WORD_LIST_PATH: Final[str] = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), 'wordles.json'
)


def load_word_list(json_file_path: Optional[str] = None) -> List[str]:
    """
    Load a word list from a JSON file.

    Args:
        json_file_path: Path to a JSON array of words. Defaults to the
            bundled wordles.json.

    Returns:
        List[str]: List of lowercase 5-letter words

    Raises:
        FileNotFoundError: If the JSON file is not found
        ValueError: If the JSON is malformed, the list is empty or contains invalid words
    """
    if json_file_path is None:
        json_file_path = DEFAULT_WORD_LIST_PATH

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            word_list = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {json_file_path}: {e}")

    if not isinstance(word_list, list):
        raise ValueError("JSON file must contain an array of words")

    if not word_list:
        raise ValueError("Word list cannot be empty")

    lowercase_words = [str(word).strip().lower() for word in word_list]

    for word in lowercase_words:
        if len(word) != WORD_LENGTH:
            raise ValueError(f"Word '{word}' is not {WORD_LENGTH} characters long")
        if not word.isalpha():
            raise ValueError(f"Word '{word}' contains non-alphabetic characters")

    return lowercase_words


def validate_word_list_integrity(words: List[str]) -> bool:
    """
    Validates the integrity and consistency of a word list.

    Checks that every word is exactly WORD_LENGTH lowercase ASCII letters
    and that there are no duplicate entries.

    Returns:
        bool: True if word list passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not words:
        raise ValueError("Word list cannot be empty")

    for index, word in enumerate(words):
        if len(word) != WORD_LENGTH:
            raise ValueError(f"Word at index {index} '{word}' is not {WORD_LENGTH} characters long")

        if not all(char in ALPHABET for char in word):
            raise ValueError(f"Word at index {index} '{word}' is not lowercase ASCII")

    if len(words) != len(set(words)):
        seen = set()
        duplicates = sorted({word for word in words if word in seen or seen.add(word)})
        raise ValueError(f"Duplicate words found in word list: {duplicates}")

    return True
