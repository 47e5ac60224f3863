"""Shared helpers for word normalization."""

from __future__ import annotations

import re
from typing import Iterable, List

WORD_RE = re.compile(r"[^A-Za-z]")


def sanitize_word(text: str) -> str:
    """Return ``text`` stripped to ASCII letters and lowercased."""

    if not text:
        return ""
    return WORD_RE.sub("", text).lower()


def sanitize_words(words: Iterable[str]) -> List[str]:
    """Sanitize every entry, dropping the ones that end up empty."""

    cleaned = (sanitize_word(word or "") for word in words)
    return [word for word in cleaned if word]


__all__ = ["sanitize_word", "sanitize_words", "WORD_RE"]
