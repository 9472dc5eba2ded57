#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Hotel Statistics Service - per-owner counts for the dashboard
"""

import logging
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from models import db, Hotel, HotelStatus
from services.exceptions import UnexpectedError

logger = logging.getLogger(__name__)


def _month_bucket(column):
    """YYYY-MM expression for the bound database dialect"""
    if db.engine.dialect.name == 'postgresql':
        return func.to_char(column, 'YYYY-MM')
    return func.strftime('%Y-%m', column)


class HotelStatisticsService:

    def statistics(self, owner_id):
        """
        Returns:
            dict with total_hotels, hotels_actifs, hotels_inactifs (non-deleted
            hotels) and hotels_supprimes (soft-deleted hotels)
        """
        try:
            present = Hotel.without_trashed().filter(Hotel.user_id == owner_id)
            return {
                'total_hotels': present.count(),
                'hotels_actifs': present.filter(Hotel.status == HotelStatus.ACTIVE).count(),
                'hotels_inactifs': present.filter(Hotel.status == HotelStatus.INACTIVE).count(),
                'hotels_supprimes': Hotel.only_trashed().filter(Hotel.user_id == owner_id).count(),
            }
        except SQLAlchemyError as e:
            logger.error(f'Error fetching statistics for user {owner_id}: {e}')
            raise UnexpectedError('Error while retrieving statistics') from e

    def statistics_by_month(self, owner_id):
        """Hotels created per calendar month, oldest month first"""
        month = _month_bucket(Hotel.created_at).label('month')
        try:
            rows = db.session.query(month, func.count(Hotel.id).label('total')).filter(
                Hotel.user_id == owner_id,
                Hotel.deleted_at.is_(None)
            ).group_by(month).order_by(month).all()
        except SQLAlchemyError as e:
            logger.error(f'Error fetching monthly statistics for user {owner_id}: {e}')
            raise UnexpectedError('Error while retrieving chart statistics') from e

        return [
            {
                'mois': datetime.strptime(row.month, '%Y-%m').strftime('%B %Y'),
                'total': row.total,
            }
            for row in rows
        ]
