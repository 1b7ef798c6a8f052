"""Free-text answer matching.

normalize() folds case and punctuation so "The Godfather!" and
"the godfather" compare equal. matches_answer() then tries, in order:
exact match, match without a leading "the ", and loose containment for
strings of at least LOOSE_MATCH_MIN_LENGTH characters.

"Rosebud." → "rosebud"
"Don’t Look Up" → "dont look up"
"""

from __future__ import annotations

import re

from cue_the_line.models import Quote

LOOSE_MATCH_MIN_LENGTH = 8

_APOSTROPHES = re.compile(r"[’']")
_DISALLOWED = re.compile(r"[^a-z0-9 :\-]")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: str | None) -> str:
    text = (text or "").lower().strip()
    text = _APOSTROPHES.sub("'", text)
    text = _DISALLOWED.sub("", text)
    return _WHITESPACE.sub(" ", text)


def matches_answer(raw_input: str | None, quote: Quote) -> bool:
    guess = normalize(raw_input)
    if not guess:
        return False
    answers = [normalize(a) for a in quote.answers]

    if guess in answers:
        return True

    if guess.startswith("the ") and guess[4:] in answers:
        return True

    # Short guesses like "it" would otherwise match nearly every title
    if len(guess) >= LOOSE_MATCH_MIN_LENGTH:
        for answer in answers:
            if len(answer) >= LOOSE_MATCH_MIN_LENGTH and (guess in answer or answer in guess):
                return True
    return False
