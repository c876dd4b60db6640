from datetime import date
from types import SimpleNamespace

from pta_dashboard.core.cache import CacheManager
from pta_dashboard.utils.listing import matches_query, natural_key, paginate, search, sort_records

FIELDS = (lambda r: r.name, lambda r: r.email)


def row(name, email=None, paid_on=None):
    return SimpleNamespace(name=name, email=email, paid_on=paid_on)


def test_matches_query_ignores_case_and_missing_fields():
    record = row("Jane Doe")
    assert matches_query(record, "jANE", FIELDS)
    assert matches_query(record, None, FIELDS)
    assert not matches_query(record, "example.com", FIELDS)


def test_search_applies_predicate_then_query():
    rows = [row("Jane Doe", "jane@example.com"), row("John Doe"), row("Mark Cruz")]

    result = search(rows, "doe", FIELDS, predicate=lambda r: r.email is None)

    assert [r.name for r in result] == ["John Doe"]


def test_sort_puts_missing_keys_last_in_both_directions():
    rows = [row("a", paid_on=date(2024, 1, 2)), row("b"), row("c", paid_on=date(2024, 3, 1))]

    ascending = sort_records(rows, lambda r: r.paid_on)
    descending = sort_records(rows, lambda r: r.paid_on, descending=True)

    assert [r.name for r in ascending] == ["a", "c", "b"]
    assert [r.name for r in descending] == ["c", "a", "b"]


def test_paginate_last_page():
    page = paginate(list(range(45)), page=3, size=20)

    assert page["items"] == list(range(40, 45))
    assert page["total_pages"] == 3
    assert page["has_next"] is False
    assert page["has_previous"] is True


async def test_disabled_cache_is_a_no_op():
    cache = CacheManager("redis://unused:6379/0", enabled=False)

    assert await cache.set(cache.make_key("statistics"), {"total": 1}) is False
    assert await cache.get("pta:statistics") is None
    assert await cache.delete_pattern("pta:*") == 0
    assert cache.make_key("statistics") == "pta:statistics"


def test_natural_key_orders_numbers_by_value():
    grades = ["Grade 10", "grade 9", "Kinder", "Grade 1"]

    assert sorted(grades, key=natural_key) == ["Grade 1", "grade 9", "Grade 10", "Kinder"]
    assert natural_key(None) is None
