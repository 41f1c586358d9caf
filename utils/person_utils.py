from typing import Iterable, List, Optional, Set, Tuple


def normalize_id(raw) -> str:
    """
    Canonical matching key for a student identifier.

    Numeric-looking identifiers lose their leading zeros, so "02" and "2"
    denote the same student. Anything else is compared literally after trimming.
    """
    text = str(raw).strip()
    if text.isdigit():
        return str(int(text))
    return text


def parse_numeric_id(raw) -> Optional[int]:
    """Return the integer value of an identifier, or None if it is not numeric."""
    text = str(raw).strip()
    if text.isdigit():
        return int(text)
    return None


def id_sort_key(raw) -> Tuple[int, int, str]:
    """Numbers first in numeric order, then other identifiers alphabetically."""
    key = normalize_id(raw)
    if key.isdigit():
        return (0, int(key), "")
    return (1, 0, key)


def to_key_set(ids: Iterable) -> Set[str]:
    """Normalized keys of a list of identifiers, blanks dropped."""
    return {normalize_id(i) for i in ids if str(i).strip()}


def dedupe_ids(ids: Iterable) -> List[str]:
    """Trim identifiers and drop blanks and repeats (by normalized key), keeping first spelling."""
    seen = set()
    out = []
    for raw in ids:
        text = str(raw).strip()
        if not text:
            continue
        key = normalize_id(text)
        if key in seen:
            continue
        seen.add(key)
        out.append(text)
    return out
