# search_normalize.py
import re
import unicodedata

# Letters whose NFD form has no acceptable ASCII base
FOLD_MAP = {
    "æ": "ae",
    "ø": "o",
    "å": "a",
    "œ": "oe",
    "ä": "a",
    "ö": "o",
    "ü": "u",
}
_FOLD_RE = re.compile("|".join(FOLD_MAP))
_WS_RE = re.compile(r"\s+")


def strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def fold(text) -> str:
    """
    Canonical comparison form for catalog text and queries:
      1) lower-case,
      2) NFD + drop combining marks,
      3) explicit substitutions (æ->ae, ø->o, ...).
    None becomes "".
    """
    if text is None:
        return ""
    s = strip_diacritics(str(text).lower())
    return _FOLD_RE.sub(lambda m: FOLD_MAP[m.group(0)], s)


def query_terms(query) -> list[str]:
    """Fold and split on whitespace; empty pieces are dropped."""
    return [t for t in _WS_RE.split(fold(query)) if t]
