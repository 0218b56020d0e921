"""HTML entity decoding and lexical tag stripping."""

import re

_NAMED_ENTITIES = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
}

_ENTITY_RE = re.compile(r"&(?:#[xX]([0-9a-fA-F]+)|#(\d+)|([a-zA-Z]+));")
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")


def _replace_entity(match: "re.Match[str]") -> str:
    hex_code, dec_code, name = match.groups()
    if name is not None:
        return _NAMED_ENTITIES.get(name, match.group(0))
    try:
        return chr(int(hex_code, 16) if hex_code is not None else int(dec_code))
    except (ValueError, OverflowError):
        return match.group(0)


def decode_entities(text: str) -> str:
    """Decode the common named entities plus decimal/hex character references.

    Unknown entities and invalid code points are left as-is. The scan is a single
    pass, so ``&amp;lt;`` becomes ``&lt;`` and not ``<``.
    """
    if not text or "&" not in text:
        return text or ""
    return _ENTITY_RE.sub(_replace_entity, text)


def strip_tags(html: str) -> str:
    return decode_entities(_TAG_RE.sub("", html or "")).strip()


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text or "").strip()
