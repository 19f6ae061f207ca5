import re
from typing import List

# Keeps word chars, whitespace and the characters that make up emails and hyphenated words
_STRIP_RE = re.compile(r"[^\w\s@.-]")
_SPACE_RE = re.compile(r"\s+")
_NON_DIGIT_RE = re.compile(r"[^0-9]")
# Anything that can appear inside a written phone number
_PHONE_RUN_RE = re.compile(r"[0-9\s\-()+]+")


def normalize(text: str) -> str:
    """Lower-case, drop punctuation except @ . - and collapse whitespace."""
    text = _STRIP_RE.sub("", text.lower())
    return _SPACE_RE.sub(" ", text).strip()


def words(text: str) -> List[str]:
    return [w for w in normalize(text).split(" ") if w]


def contains(document_text: str, candidate: str) -> bool:
    """
    Decide whether `candidate` is present in `document_text`.

    Email-like candidates (containing '@') must appear verbatim after normalization.
    Anything else is split into words and every word must occur somewhere in the
    document as a substring, in any order. Matching is deliberately loose: "cat" is
    found inside "category". A candidate with no words is always found.
    """
    normalized_text = normalize(document_text)
    normalized_candidate = normalize(candidate)

    if "@" in normalized_candidate:
        return normalized_candidate in normalized_text

    return all(w in normalized_text for w in words(normalized_candidate))


def digits_only(text: str) -> str:
    return _NON_DIGIT_RE.sub("", text)


def phone_matches(document_text: str, phone: str, suffix_length: int = 7) -> bool:
    """
    True when the trailing digits of `phone` overlap a number written in the document.

    Every run of phone-like characters in the raw text is reduced to its digits; the
    phone is found if the last `suffix_length` digits of either side occur in the other.
    """
    phone_digits = digits_only(phone)
    if not phone_digits:
        return False

    phone_suffix = phone_digits[-suffix_length:]
    for run in _PHONE_RUN_RE.findall(document_text):
        match_digits = digits_only(run)
        if not match_digits:
            continue
        if phone_suffix in match_digits or match_digits[-suffix_length:] in phone_digits:
            return True
    return False
