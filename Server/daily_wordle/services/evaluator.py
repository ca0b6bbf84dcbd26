"""
Guess Evaluator

Implements the Wordle letter evaluation algorithm, including correct
handling of repeated letters.
"""

from collections import Counter
from typing import List, Set

from ..models.game import LetterResult, LetterStatus


def evaluate(secret: str,
             guess: str,
             included: Set[str],
             excluded: Set[str],
             available: Set[str]) -> List[LetterResult]:
    """
    Evaluates a guess against the secret word.

    Exact matches are resolved first so that they take priority over
    misplaced matches, and each letter of the secret can be credited at most
    as many times as it occurs there.

    Args:
        secret: The lowercase secret word
        guess: The lowercase guessed word, same length as the secret
        included: Letters known to be in the secret; updated in place
        excluded: Letters known to be absent from the secret; updated in place
        available: Letters not yet tried; updated in place

    Returns:
        List[LetterResult]: One result per position, none UNRESOLVED
    """
    if len(secret) != len(guess):
        raise ValueError(f"Guess length {len(guess)} does not match secret length {len(secret)}")

    if guess == secret:
        included.update(guess)
        available.difference_update(guess)
        return [LetterResult(letter, LetterStatus.CORRECT_POSITION) for letter in guess]

    remaining = Counter(secret)
    results: List[LetterResult] = []

    # First pass: exact positions
    for letter, target in zip(guess, secret):
        available.discard(letter)
        if letter == target:
            remaining[letter] -= 1
            included.add(letter)
            results.append(LetterResult(letter, LetterStatus.CORRECT_POSITION))
        else:
            results.append(LetterResult(letter, LetterStatus.UNRESOLVED))

    # Second pass: misplaced and absent letters
    for result in results:
        if result.status is not LetterStatus.UNRESOLVED:
            continue

        letter = result.letter
        if remaining[letter] > 0:
            remaining[letter] -= 1
            included.add(letter)
            result.status = LetterStatus.WRONG_POSITION
        else:
            result.status = LetterStatus.NOT_IN_WORD
            # A surplus copy of a letter the secret does contain is not "excluded".
            if letter not in secret:
                excluded.add(letter)

    return results
