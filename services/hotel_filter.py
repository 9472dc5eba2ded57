#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Hotel Filter - query-string filtering and sorting for hotel listings

Recognized filters are declared in a static key -> predicate builder map.
A builder returns a SQLAlchemy predicate, or None when the raw value is not
acceptable, in which case the filter is skipped.
"""

import logging

from sqlalchemy import or_

from models import Hotel, HotelStatus, Currency
from utils.decimal_utils import parse_decimal_input
from utils.timezone import parse_date, start_of_day, end_of_day

logger = logging.getLogger(__name__)

SORT_DIRECTIONS = ('asc', 'desc')
DEFAULT_SORT_FIELD = 'created_at'
DEFAULT_SORT_DIRECTION = 'desc'

SORTABLE_COLUMNS = {
    'name': Hotel.name,
    'price': Hotel.price,
    'status': Hotel.status,
    'currency': Hotel.currency,
    'created_at': Hotel.created_at,
    'updated_at': Hotel.updated_at,
}

SEARCH_COLUMNS = (Hotel.name, Hotel.address, Hotel.phone, Hotel.email)


def _is_blank(value):
    return value is None or str(value).strip() == ''


def _status_predicate(value):
    if value not in HotelStatus.values():
        return None
    return Hotel.status == HotelStatus(value)


def _currency_predicate(value):
    if value not in Currency.values():
        return None
    return Hotel.currency == Currency(value)


def _price_min_predicate(value):
    try:
        amount = parse_decimal_input(value, allow_negative=True)
    except ValueError:
        return None
    return Hotel.price >= amount


def _price_max_predicate(value):
    try:
        amount = parse_decimal_input(value, allow_negative=True)
    except ValueError:
        return None
    return Hotel.price <= amount


def _escape_like(text):
    return text.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


def _search_predicate(value):
    term = f'%{_escape_like(str(value).strip())}%'
    return or_(*[column.ilike(term, escape='\\') for column in SEARCH_COLUMNS])


def _date_from_predicate(value):
    try:
        day = parse_date(value)
    except ValueError:
        logger.warning(f'Ignoring malformed date_from filter: {value!r}')
        return None
    return Hotel.created_at >= start_of_day(day)


def _date_to_predicate(value):
    try:
        day = parse_date(value)
    except ValueError:
        logger.warning(f'Ignoring malformed date_to filter: {value!r}')
        return None
    return Hotel.created_at <= end_of_day(day)


class HotelFilter:
    """Translate raw query inputs into hotel predicates and ordering"""

    filters = {
        'status': _status_predicate,
        'currency': _currency_predicate,
        'price_min': _price_min_predicate,
        'price_max': _price_max_predicate,
        'search': _search_predicate,
        'date_from': _date_from_predicate,
        'date_to': _date_to_predicate,
    }

    sort_keys = ('sort_field', 'sort_direction')

    @property
    def allowed_keys(self):
        return tuple(self.filters) + self.sort_keys

    def predicates(self, raw_inputs):
        """
        Build the predicate fragments for every recognized, acceptable filter

        Args:
            raw_inputs: mapping of query parameter name to raw string value

        Returns:
            List of predicates in declaration order
        """
        result = []
        for key, build in self.filters.items():
            value = raw_inputs.get(key)
            if _is_blank(value):
                continue
            predicate = build(value)
            if predicate is not None:
                result.append(predicate)
        return result

    def apply(self, query, raw_inputs):
        """AND every accepted filter onto query"""
        for predicate in self.predicates(raw_inputs):
            query = query.filter(predicate)
        return query

    def applied_filters(self, raw_inputs):
        """Recognized keys present in the input, echoed back unmodified"""
        return {key: raw_inputs.get(key) for key in self.allowed_keys if key in raw_inputs}


def resolve_sort(requested_field, requested_direction=None):
    """
    Resolve the requested ordering against the allow-list

    Returns:
        (field, direction); unknown fields always fall back to (created_at, desc)
    """
    if requested_field not in SORTABLE_COLUMNS:
        return DEFAULT_SORT_FIELD, DEFAULT_SORT_DIRECTION

    direction = str(requested_direction or '').strip().lower()
    if direction not in SORT_DIRECTIONS:
        direction = DEFAULT_SORT_DIRECTION
    return requested_field, direction


def apply_sort(query, field, direction):
    """Order query by an already resolved (field, direction), id breaks ties"""
    column = SORTABLE_COLUMNS[field]
    if direction == 'asc':
        return query.order_by(column.asc(), Hotel.id.asc())
    return query.order_by(column.desc(), Hotel.id.desc())
