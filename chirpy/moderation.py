from typing import FrozenSet

from .config import PROFANE_MASK


PROFANE_WORDS: FrozenSet[str] = frozenset({"kerfuffle", "sharbert", "fornax"})


def clean_profanity(text: str) -> str:
    # only single spaces separate words; "kerfuffle!" is left alone
    words = text.split(" ")
    for i, word in enumerate(words):
        if word.lower() in PROFANE_WORDS:
            words[i] = PROFANE_MASK
    return " ".join(words)
