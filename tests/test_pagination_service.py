"""Tests for paginated retrieval."""

from __future__ import annotations

import pytest

from credit_pricing.db.base import Base
from credit_pricing.services.errors import StoreError
from credit_pricing.services.ingestion_service import upload
from credit_pricing.services.pagination_service import get_page


def _seed(db_session, count: int) -> None:
    lines = ["CreditScore,CreditLines"] + [f"{600 + i},{i}" for i in range(count)]
    upload(db_session, ("\n".join(lines) + "\n").encode())


def test_first_page_holds_both_rows(db_session, sample_csv):
    upload(db_session, sample_csv)

    page = get_page(db_session, page=1, limit=10)

    assert page["totalPages"] == 1
    assert page["total"] == 2
    assert [(r["creditScore"], r["creditLines"]) for r in page["data"]] == [(700, 3), (650, 5)]


def test_second_page_of_one(db_session, sample_csv):
    upload(db_session, sample_csv)

    page = get_page(db_session, page=2, limit=1)

    assert page["totalPages"] == 2
    assert [r["email"] for r in page["data"]] == ["bob@example.com"]


@pytest.mark.parametrize("limit, expected_pages", [(1, 7), (3, 3), (7, 1), (10, 1)])
def test_total_pages_is_ceiling(db_session, limit, expected_pages):
    _seed(db_session, 7)

    page = get_page(db_session, page=1, limit=limit)

    assert page["totalPages"] == expected_pages
    assert len(page["data"]) == min(limit, 7)


def test_pages_follow_insertion_order(db_session):
    _seed(db_session, 5)

    seen = []
    for number in range(1, 4):
        seen.extend(r["creditLines"] for r in get_page(db_session, page=number, limit=2)["data"])

    assert seen == [0, 1, 2, 3, 4]


def test_page_past_end_is_empty(db_session, sample_csv):
    upload(db_session, sample_csv)

    page = get_page(db_session, page=5, limit=10)

    assert page["data"] == []
    assert page["totalPages"] == 1


def test_empty_store_has_zero_pages(db_session):
    assert get_page(db_session) == {"data": [], "totalPages": 0, "page": 1, "limit": 10, "total": 0}


def test_out_of_range_arguments_are_clamped(db_session, sample_csv):
    upload(db_session, sample_csv)

    page = get_page(db_session, page=0, limit=-4)

    assert page["page"] == 1
    assert page["limit"] == 1
    assert len(page["data"]) == 1


def test_limit_capped_by_max_limit(db_session):
    _seed(db_session, 5)

    page = get_page(db_session, page=1, limit=50, max_limit=2)

    assert page["limit"] == 2
    assert page["totalPages"] == 3


def test_missing_table_raises_store_error(db_session, engine):
    Base.metadata.drop_all(bind=engine)

    with pytest.raises(StoreError):
        get_page(db_session)


def test_huge_page_number_is_empty(db_session, sample_csv):
    upload(db_session, sample_csv)

    page = get_page(db_session, page=10**18, limit=10)

    assert page["data"] == []
    assert page["totalPages"] == 1
