from utils.person_utils import dedupe_ids, id_sort_key, normalize_id, parse_numeric_id, to_key_set


def test_numeric_ids_lose_leading_zeros() -> None:
    assert normalize_id("02") == "2"
    assert normalize_id(" 007 ") == "7"
    assert normalize_id("0") == "0"
    assert normalize_id(12) == "12"


def test_non_numeric_ids_compare_literally() -> None:
    assert normalize_id(" Ana ") == "Ana"
    assert normalize_id("A02") == "A02"
    assert parse_numeric_id("A02") is None
    assert parse_numeric_id("031") == 31


def test_dedupe_keeps_first_spelling() -> None:
    assert dedupe_ids(["02", "2", " 3", "", "Ana", "Ana"]) == ["02", "3", "Ana"]


def test_sort_key_orders_numbers_numerically_before_names() -> None:
    ids = ["10", "Bea", "2", "Ana", "01"]
    assert sorted(ids, key=id_sort_key) == ["01", "2", "10", "Ana", "Bea"]


def test_key_set_drops_blanks() -> None:
    assert to_key_set(["05", " ", "x"]) == {"5", "x"}
