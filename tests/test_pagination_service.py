"""
Tests for page size bounds and pagination metadata
"""
from types import SimpleNamespace

import pytest

from services.pagination_service import PaginationService


def page_url(page):
    return f'http://localhost/api/hotels?page={page}'


def fake_pagination(page, per_page, total, items):
    pages = (total + per_page - 1) // per_page if total else 0
    first = (page - 1) * per_page + 1
    return SimpleNamespace(
        page=page,
        per_page=per_page,
        total=total,
        items=items,
        pages=pages,
        first=first,
        last=first + len(items) - 1,
        has_prev=page > 1,
        prev_num=page - 1 if page > 1 else None,
        has_next=page < pages,
        next_num=page + 1 if page < pages else None,
    )


class TestClamp:

    @pytest.mark.parametrize('requested, expected', [
        (None, 15),
        (1, 5),
        (5, 5),
        (20, 20),
        (100, 100),
        (500, 100),
        (-3, 5),
    ])
    def test_clamp(self, requested, expected):
        assert PaginationService().clamp(requested) == expected


class TestDescribe:

    def test_middle_page(self):
        meta = PaginationService().describe(fake_pagination(2, 5, 12, ['x'] * 5), page_url)

        assert meta['current_page'] == 2
        assert meta['last_page'] == 3
        assert meta['per_page'] == 5
        assert meta['total'] == 12
        assert meta['from'] == 6
        assert meta['to'] == 10
        assert meta['links'] == {
            'first': page_url(1),
            'last': page_url(3),
            'prev': page_url(1),
            'next': page_url(3),
        }

    def test_last_partial_page(self):
        meta = PaginationService().describe(fake_pagination(3, 5, 12, ['x'] * 2), page_url)

        assert meta['from'] == 11
        assert meta['to'] == 12
        assert meta['links']['next'] is None

    def test_empty_result(self):
        """No rows: last_page stays 1 and the item range is null"""
        meta = PaginationService().describe(fake_pagination(1, 15, 0, []), page_url)

        assert meta['last_page'] == 1
        assert meta['from'] is None
        assert meta['to'] is None
        assert meta['links']['prev'] is None
        assert meta['links']['next'] is None
        assert meta['links']['last'] == page_url(1)

    def test_page_past_the_end(self):
        meta = PaginationService().describe(fake_pagination(9, 5, 7, []), page_url)

        assert meta['current_page'] == 9
        assert meta['total'] == 7
        assert meta['from'] is None
        assert meta['to'] is None


class TestClampPage:

    def test_lower_bound(self):
        assert PaginationService().clamp_page(0, 15) == 1
        assert PaginationService().clamp_page(-7, 15) == 1

    def test_offset_stays_within_64_bits(self):
        page = PaginationService().clamp_page(99999999999999999999, 15)
        assert (page - 1) * 15 <= 2 ** 63 - 1
        assert PaginationService().clamp_page(3, 15) == 3
