"""
Tests for query-string filtering and sort resolution
"""
from datetime import datetime
from decimal import Decimal

from models import Hotel, HotelStatus, Currency
from services.hotel_filter import HotelFilter, resolve_sort, apply_sort


class TestPredicates:
    """Each recognized key yields at most one predicate"""

    def test_no_inputs_no_predicates(self):
        assert HotelFilter().predicates({}) == []

    def test_blank_values_are_skipped(self):
        raw = {'status': '', 'currency': '   ', 'price_min': None, 'search': ''}
        assert HotelFilter().predicates(raw) == []

    def test_invalid_enum_values_are_skipped(self):
        raw = {'status': 'archived', 'currency': 'GBP'}
        assert HotelFilter().predicates(raw) == []

    def test_non_numeric_prices_are_skipped(self):
        raw = {'price_min': 'cheap', 'price_max': '12,5'}
        assert HotelFilter().predicates(raw) == []

    def test_malformed_dates_are_skipped(self, caplog):
        raw = {'date_from': '2025-13-45', 'date_to': 'yesterday'}
        assert HotelFilter().predicates(raw) == []
        assert 'malformed date_from' in caplog.text

    def test_unknown_keys_are_ignored(self):
        raw = {'user_id': '2', 'deleted_at': '2025-01-01', 'status': 'active'}
        assert len(HotelFilter().predicates(raw)) == 1

    def test_every_valid_filter_contributes(self):
        raw = {
            'status': 'active',
            'currency': 'EUR',
            'price_min': '50',
            'price_max': '150.5',
            'search': 'paradise',
            'date_from': '2025-01-01',
            'date_to': '2025-12-31',
        }
        assert len(HotelFilter().predicates(raw)) == 7


class TestAppliedFilters:

    def test_echoes_recognized_keys_unmodified(self):
        raw = {'status': 'bogus', 'search': ' sea ', 'sort_field': 'price', 'page': '2', 'foo': 'bar'}
        assert HotelFilter().applied_filters(raw) == {
            'status': 'bogus',
            'search': ' sea ',
            'sort_field': 'price',
        }


class TestResolveSort:

    def test_default_when_absent(self):
        assert resolve_sort(None, None) == ('created_at', 'desc')

    def test_unknown_field_falls_back_to_default_pair(self):
        """An unknown field resets the direction too"""
        assert resolve_sort('password_hash', 'asc') == ('created_at', 'desc')

    def test_invalid_direction_becomes_desc(self):
        assert resolve_sort('price', 'sideways') == ('price', 'desc')

    def test_direction_is_case_insensitive(self):
        assert resolve_sort('name', 'ASC') == ('name', 'asc')


class TestFilteredQueries:
    """Filters run against a real database"""

    def _names(self, query):
        return sorted(hotel.name for hotel in query.all())

    def test_price_range_is_inclusive(self, app_ctx, owner_id, make_hotel):
        make_hotel(owner_id, name='A', price=Decimal('50'))
        make_hotel(owner_id, name='B', price=Decimal('100'))
        make_hotel(owner_id, name='C', price=Decimal('150'))
        make_hotel(owner_id, name='D', price=Decimal('200'))

        query = HotelFilter().apply(Hotel.query, {'price_min': '100', 'price_max': '150'})
        assert self._names(query) == ['B', 'C']

    def test_inverted_price_range_yields_nothing(self, app_ctx, owner_id, make_hotel):
        make_hotel(owner_id, name='A', price=Decimal('100'))

        query = HotelFilter().apply(Hotel.query, {'price_min': '200', 'price_max': '50'})
        assert query.all() == []

    def test_search_matches_any_text_column_case_insensitive(self, app_ctx, owner_id, make_hotel):
        make_hotel(owner_id, name='Hotel Paradise')
        make_hotel(owner_id, name='Sea View', address='1 paradise road')
        make_hotel(owner_id, name='Mail Match', email='contact@PARADISE.example')
        make_hotel(owner_id, name='Nothing', address='2 Main Street')

        query = HotelFilter().apply(Hotel.query, {'search': 'Paradise'})
        assert self._names(query) == ['Hotel Paradise', 'Mail Match', 'Sea View']

    def test_status_and_currency_are_anded(self, app_ctx, owner_id, make_hotel):
        make_hotel(owner_id, name='A', status=HotelStatus.ACTIVE, currency=Currency.EUR)
        make_hotel(owner_id, name='B', status=HotelStatus.INACTIVE, currency=Currency.EUR)
        make_hotel(owner_id, name='C', status=HotelStatus.ACTIVE, currency=Currency.USD)

        query = HotelFilter().apply(Hotel.query, {'status': 'active', 'currency': 'EUR'})
        assert self._names(query) == ['A']

    def test_date_to_includes_the_whole_day(self, app_ctx, owner_id, make_hotel):
        make_hotel(owner_id, name='Early', created_at=datetime(2025, 3, 1, 0, 0))
        make_hotel(owner_id, name='Late', created_at=datetime(2025, 3, 1, 23, 59, 59))
        make_hotel(owner_id, name='Next', created_at=datetime(2025, 3, 2, 0, 0))

        query = HotelFilter().apply(Hotel.query, {'date_from': '2025-03-01', 'date_to': '2025-03-01'})
        assert self._names(query) == ['Early', 'Late']

    def test_sort_ties_are_broken_by_id(self, app_ctx, owner_id, make_hotel):
        first = make_hotel(owner_id, name='Same', price=Decimal('10'))
        second = make_hotel(owner_id, name='Same', price=Decimal('10'))

        ascending = apply_sort(Hotel.query, 'price', 'asc').all()
        descending = apply_sort(Hotel.query, 'price', 'desc').all()
        assert [h.id for h in ascending] == [first, second]
        assert [h.id for h in descending] == [second, first]

    def test_like_wildcards_in_search_are_literal(self, app_ctx, owner_id, make_hotel):
        make_hotel(owner_id, name='Plain')
        make_hotel(owner_id, name='100% Fun')
        make_hotel(owner_id, name='Snake_Case Lodge')

        assert self._names(HotelFilter().apply(Hotel.query, {'search': '%'})) == ['100% Fun']
        assert self._names(HotelFilter().apply(Hotel.query, {'search': '_'})) == ['Snake_Case Lodge']
        assert self._names(HotelFilter().apply(Hotel.query, {'search': '0%'})) == ['100% Fun']
