"""Input validation for the word list handed to the generator.

Validation is a pure function of its input: no randomness and no logging
side effects that change the outcome, so the same words always produce the
same errors and warnings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ..core.constants import CAPACITY, MIN_SPANGRAM_LENGTH
from ..core.exceptions import InputValidationError
from ..core.models import GenerateInput
from .normalization import sanitize_words

EMPTY_WORDS_ERROR = "ERROR: Can not have empty words."
SHORT_SPANGRAM_ERROR = f"ERROR: Spangram must be at least {MIN_SPANGRAM_LENGTH} letters."


@dataclass
class InputValidation:
    words: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    letters_used: int = 0
    spangram_remaining: int = 0
    need_message: str = ""

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def spangram(self) -> str:
        return self.words[0] if self.words else ""

    def raise_for_errors(self) -> None:
        if self.errors:
            raise InputValidationError("; ".join(self.errors))


def letter_count_message(letters_used: int, capacity: int = CAPACITY) -> str:
    to_go = capacity - letters_used
    if to_go > 0:
        return f"You need {to_go} more."
    if to_go < 0:
        return f"Over by {-to_go}."
    return f"Perfect {capacity} letters!"


def validate_input(
    data: GenerateInput,
    *,
    strict_spangram: bool = True,
    capacity: int = CAPACITY,
) -> InputValidation:
    """Sanitize ``data.words`` and check them against the grid capacity.

    The first surviving word is the spangram. With ``strict_spangram`` a
    spangram shorter than the minimum is an error, otherwise it only warns.
    """

    words = sanitize_words(data.words or [])
    letters_used = sum(len(word) for word in words)
    spangram = words[0] if words else ""
    spangram_remaining = max(0, MIN_SPANGRAM_LENGTH - len(spangram))

    errors: List[str] = []
    warnings: List[str] = []

    if not words:
        errors.append(EMPTY_WORDS_ERROR)
    if letters_used != capacity:
        errors.append(f"Total letters must equal {capacity}. Currently {letters_used}.")
    if words and spangram_remaining > 0:
        if strict_spangram:
            errors.append(SHORT_SPANGRAM_ERROR)
        else:
            warnings.append(f"Spangram needs {spangram_remaining} more letters.")

    for label, value in (("title", data.title), ("theme", data.theme), ("author", data.author)):
        if not (value or "").strip():
            warnings.append(f"WARNING: Consider modifying the {label}.")

    return InputValidation(
        words=words,
        errors=errors,
        warnings=warnings,
        letters_used=letters_used,
        spangram_remaining=spangram_remaining,
        need_message=letter_count_message(letters_used, capacity),
    )


__all__ = [
    "InputValidation",
    "validate_input",
    "letter_count_message",
    "EMPTY_WORDS_ERROR",
    "SHORT_SPANGRAM_ERROR",
]
