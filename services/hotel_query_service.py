#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Hotel Query Service - owner-scoped hotel listings

Composes ownership scope, HotelFilter, sort resolution and pagination into a
single query. Soft-deleted hotels are always part of the listing.
"""

import logging
from collections import namedtuple

from sqlalchemy.exc import SQLAlchemyError

from models import Hotel, HotelStatus, Currency
from services.exceptions import UnexpectedError
from services.hotel_filter import HotelFilter, SORTABLE_COLUMNS, resolve_sort, apply_sort
from services.pagination_service import PaginationService

logger = logging.getLogger(__name__)

HotelPage = namedtuple('HotelPage', ['items', 'pagination', 'filters', 'meta'])

SORT_FIELD_LABELS = {
    'name': 'Name',
    'price': 'Nightly price',
    'status': 'Status',
    'currency': 'Currency',
    'created_at': 'Creation date',
    'updated_at': 'Last update',
}


def _to_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class HotelQueryService:

    def __init__(self, hotel_filter=None, pagination_service=None):
        self.hotel_filter = hotel_filter or HotelFilter()
        self.pagination_service = pagination_service or PaginationService()

    def scoped_query(self, owner_id):
        """All hotels of owner_id, tombstones included"""
        return Hotel.with_trashed().filter(Hotel.user_id == owner_id)

    def build_query(self, owner_id, raw_inputs):
        query = self.hotel_filter.apply(self.scoped_query(owner_id), raw_inputs)
        field, direction = resolve_sort(raw_inputs.get('sort_field'), raw_inputs.get('sort_direction'))
        return apply_sort(query, field, direction)

    def list_hotels(self, owner_id, raw_inputs, page_url):
        """
        List one page of owner_id's hotels

        Args:
            owner_id: authenticated owner
            raw_inputs: query parameters (filters, sort_field, sort_direction, page, per_page)
            page_url: callable building the URL of a page number

        Returns:
            HotelPage(items, pagination, filters, meta)

        Raises:
            UnexpectedError when the datastore fails
        """
        per_page = self.pagination_service.clamp(_to_int(raw_inputs.get('per_page'), None))
        page = self.pagination_service.clamp_page(_to_int(raw_inputs.get('page'), 1), per_page)

        try:
            pagination = self.build_query(owner_id, raw_inputs).paginate(
                page=page, per_page=per_page, error_out=False
            )
        except SQLAlchemyError as e:
            logger.error(f'Error fetching hotels for user {owner_id}: {e}')
            raise UnexpectedError('Error while retrieving hotels') from e

        filters = self.hotel_filter.applied_filters(raw_inputs)
        meta = {
            'total': pagination.total,
            'current_count': len(pagination.items),
            'has_more': pagination.has_next,
        }

        logger.info(f'Hotels fetched for user {owner_id}: total={pagination.total} filters={filters}')

        return HotelPage(
            items=pagination.items,
            pagination=self.pagination_service.describe(pagination, page_url),
            filters=filters,
            meta=meta,
        )

    def filter_options(self):
        return {
            'statuses': [{'value': s.value, 'label': s.label} for s in HotelStatus],
            'currencies': [{'value': c.value, 'label': c.label, 'symbol': c.symbol} for c in Currency],
            'sort_fields': [{'value': f, 'label': SORT_FIELD_LABELS[f]} for f in SORTABLE_COLUMNS],
            'sort_directions': [
                {'value': 'asc', 'label': 'Ascending'},
                {'value': 'desc', 'label': 'Descending'},
            ],
        }

    def enums(self):
        return {
            'hotel_status': {s.name: s.value for s in HotelStatus},
            'currencies': {c.name: c.value for c in Currency},
        }
