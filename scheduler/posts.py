from collections import OrderedDict
from typing import Iterable, List, Optional, Sequence

from core.state import DutyRow, PostDefinition
from utils.constants import CYCLE_LENGTH, CYCLE_REDUCED_POSITIONS, ROW_SEPARATOR

"""
This module turns post definitions into duty rows and decides, day by day,
which rows are open and in which order they are filled.
"""


def normalize_post_name(name: str) -> str:
    return str(name).strip().upper()


def build_post_definitions(
    names: Sequence[str],
    slots: Sequence[int],
    restricted_posts: Iterable[str] = (),
    short_labels: Sequence[str] = (),
) -> List[PostDefinition]:
    """Pair post names with slot counts. Lengths are checked by validate_config beforehand."""
    restricted = {normalize_post_name(p) for p in restricted_posts}
    definitions = []
    for i, (name, count) in enumerate(zip(names, slots)):
        base = normalize_post_name(name)
        label = short_labels[i] if i < len(short_labels) and short_labels[i] else None
        definitions.append(PostDefinition(base, int(count), base in restricted, label))
    return definitions


def expand_posts(definitions: Sequence[PostDefinition], separator: str = ROW_SEPARATOR) -> List[DutyRow]:
    """
    One DutyRow per slot, in configuration order.

    A single-slot post keeps its bare name; a post with n > 1 slots becomes
    rows "NAME<sep>1" .. "NAME<sep>n". Posts with zero slots produce no rows.
    """
    rows = []
    for post in definitions:
        if post.slots == 1:
            rows.append(DutyRow(post.name, post.name, 1, 1, post.restricted))
            continue
        for index in range(1, post.slots + 1):
            label = f"{post.name}{separator}{index}"
            rows.append(DutyRow(label, post.name, index, post.slots, post.restricted))
    return rows


def is_reduced_day(day: int) -> bool:
    """Reduction cycle of period CYCLE_LENGTH; the configured positions are reduced."""
    return (day - 1) % CYCLE_LENGTH in CYCLE_REDUCED_POSITIONS


def active_rows(rows: Sequence[DutyRow], day: int, cycle_post: Optional[str]) -> List[DutyRow]:
    """Rows open on a day in class-rotation mode; the cycle post disappears on reduced days."""
    if cycle_post is None or not is_reduced_day(day):
        return list(rows)
    return [r for r in rows if r.base != cycle_post]


def interleave_rows(rows: Sequence[DutyRow]) -> List[DutyRow]:
    """
    Round-robin across base posts: one row of each post in turn, then loop.

    [A, B1, B2, B3, C1, C2] -> [A, B1, C1, B2, C2, B3]
    """
    by_post: "OrderedDict[str, List[DutyRow]]" = OrderedDict()
    for row in rows:
        by_post.setdefault(row.base, []).append(row)

    ordered = []
    depth = 0
    while len(ordered) < len(rows):
        for post_rows in by_post.values():
            if depth < len(post_rows):
                ordered.append(post_rows[depth])
        depth += 1
    return ordered


def daily_fill_order(
    rows: Sequence[DutyRow],
    cut_post: Optional[str] = None,
    short_staffed: bool = False,
) -> List[DutyRow]:
    """Restricted posts first (few can take them); on short days the cut target goes last."""
    order = sorted(rows, key=lambda r: not r.restricted)
    if short_staffed and cut_post is not None:
        order = [r for r in order if r.base != cut_post] + [r for r in order if r.base == cut_post]
    return order
