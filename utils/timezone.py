#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Centralized time handling.
Timestamps are stored as naive UTC datetimes.
"""
from datetime import datetime, timezone, time

DATE_FORMAT = '%Y-%m-%d'


def utcnow():
    """Current UTC time as a naive datetime (storage format)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_date(value):
    """Parse a YYYY-MM-DD string, raising ValueError when malformed"""
    return datetime.strptime(str(value).strip(), DATE_FORMAT).date()


def start_of_day(day):
    return datetime.combine(day, time.min)


def end_of_day(day):
    return datetime.combine(day, time.max)


def isoformat(dt):
    """Serialize a stored naive UTC datetime, keeping None as None"""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()
