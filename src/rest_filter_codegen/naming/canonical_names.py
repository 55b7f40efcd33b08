"""Conversions between delimited and capitalized word sequences."""

from __future__ import annotations

WORD_DELIMITER = "_"


def to_capitalized(name: str) -> str:
    """Join delimited words with each word's first letter capitalized.

    A word that starts with a digit run keeps the run and capitalizes the letter right
    after it, so ``last_24h`` becomes ``Last24H`` and ``50ms_chunked`` becomes
    ``50MsChunked``. Empty words produced by doubled, leading or trailing delimiters are
    dropped.
    """
    words = [word for word in name.split(WORD_DELIMITER) if word]
    return "".join(_capitalize_word(word) for word in words)


def _capitalize_word(word: str) -> str:
    index = 0
    while index < len(word) and word[index].isdigit():
        index += 1
    if index >= len(word):
        return word
    return word[:index] + word[index].upper() + word[index + 1 :]


def to_delimited(name: str, *, split_digits: bool = True) -> str:
    """Split a capitalized word sequence into lowercase delimited words.

    A delimiter goes before an uppercase letter that follows a lowercase letter, and before
    an uppercase letter that starts a new word after an acronym (``HTTPServer`` becomes
    ``http_server`` while ``ID`` stays ``id``); the same rule splits ``50Ms`` into
    ``50_ms``. With ``split_digits`` a letter followed by a digit run also starts a new word
    (``Last24H`` becomes ``last_24h``); without it a digit never introduces a boundary on
    its own.
    """
    characters: list[str] = []
    for index, char in enumerate(name):
        if index > 0 and _starts_new_word(name, index, split_digits=split_digits):
            characters.append(WORD_DELIMITER)
        characters.append(char)
    return "".join(characters).lower()


def _starts_new_word(name: str, index: int, *, split_digits: bool) -> bool:
    char = name[index]
    previous = name[index - 1]
    following = name[index + 1] if index + 1 < len(name) else ""
    if previous == WORD_DELIMITER:
        return False
    if char.isdigit():
        return split_digits and previous.isalpha()
    if not char.isupper():
        return False
    if previous.islower():
        return True
    return following.islower()


def fix_capitalization(name: str) -> str:
    """Uppercase every lowercase letter that directly follows a digit."""
    characters = list(name)
    for index in range(1, len(characters)):
        if characters[index - 1].isdigit() and characters[index].islower():
            characters[index] = characters[index].upper()
    return "".join(characters)


def strip_package(type_name: str) -> str:
    """Return the last segment of a dotted, optionally rooted type name."""
    return type_name.rsplit(".", 1)[-1]
