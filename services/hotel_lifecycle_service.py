#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Hotel Lifecycle Service - create, update, soft delete and restore

Every operation receives the authenticated owner id explicitly and checks it
against the hotel's user_id before touching the row. Status/tombstone
transitions are single UPDATE statements.
"""

import logging

from flask import current_app
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from models import db, Hotel, HotelStatus
from services.exceptions import AuthorizationError, NotFoundError, UnexpectedError
from services.file_upload_service import FileUploadService
from utils.timezone import utcnow
from utils.validators import FormValidator, validate_hotel_payload

logger = logging.getLogger(__name__)


class HotelLifecycleService:

    def __init__(self, file_upload_service=None):
        self.file_upload_service = file_upload_service or FileUploadService()

    @staticmethod
    def _photo_max_size_mb():
        return current_app.config.get('HOTEL_PHOTO_MAX_SIZE_MB', 10)

    @staticmethod
    def _check_owner(owner_id, hotel):
        if hotel.user_id != owner_id:
            logger.warning(f'User {owner_id} denied access to hotel {hotel.id} owned by {hotel.user_id}')
            raise AuthorizationError()

    def _commit(self, action, hotel_id=None, uploaded_photo=None):
        """Commit the unit of work; on failure drop the photo uploaded for it"""
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f'Error {action} hotel {hotel_id}: {e}')
            if uploaded_photo:
                self.file_upload_service.delete_file(uploaded_photo)
            raise UnexpectedError(f'Error while {action} the hotel') from e

    def get_hotel(self, owner_id, hotel_id):
        """Load a hotel (tombstones included) owned by owner_id"""
        hotel = db.session.get(Hotel, hotel_id)
        if hotel is None:
            raise NotFoundError()
        self._check_owner(owner_id, hotel)
        return hotel

    def _get_present_hotel(self, owner_id, hotel_id):
        """Soft-deleted hotels are not editable and answer as not found"""
        hotel = db.session.get(Hotel, hotel_id)
        if hotel is None or hotel.is_trashed:
            raise NotFoundError()
        self._check_owner(owner_id, hotel)
        return hotel

    def create_hotel(self, owner_id, data, photo=None):
        clean = validate_hotel_payload(data, photo=photo, photo_max_size_mb=self._photo_max_size_mb())
        if clean.get('status') is None:
            clean['status'] = HotelStatus.ACTIVE

        if photo is not None and photo.filename:
            clean['photo'] = self.file_upload_service.upload_hotel_photo(photo)

        hotel = Hotel(user_id=owner_id, **clean)
        db.session.add(hotel)
        self._commit('creating', uploaded_photo=clean.get('photo'))

        logger.info(f'Hotel {hotel.id} created by user {owner_id}')
        return hotel

    def update_hotel(self, owner_id, hotel_id, data, photo=None):
        """
        Partial update of the writable fields.
        A new photo is uploaded before the row changes; the previous photo is
        removed only once the row is committed.
        """
        hotel = self._get_present_hotel(owner_id, hotel_id)
        clean = validate_hotel_payload(data, photo=photo, partial=True,
                                       photo_max_size_mb=self._photo_max_size_mb())

        old_photo = hotel.photo
        new_photo = None
        if photo is not None and photo.filename:
            new_photo = self.file_upload_service.upload_hotel_photo(photo)
            clean['photo'] = new_photo

        for field, value in clean.items():
            if field in Hotel.WRITABLE_FIELDS:
                setattr(hotel, field, value)

        self._commit('updating', hotel.id, uploaded_photo=new_photo)

        if new_photo and old_photo:
            self.file_upload_service.delete_file(old_photo)

        logger.info(f'Hotel {hotel.id} updated by user {owner_id}')
        return hotel

    def update_photo(self, owner_id, hotel_id, photo):
        hotel = self._get_present_hotel(owner_id, hotel_id)

        validator = FormValidator({})
        validator.image('photo', photo, self._photo_max_size_mb(), required=True)
        validator.raise_if_errors()

        old_photo = hotel.photo

        photo_url = self.file_upload_service.upload_hotel_photo(photo)
        hotel.photo = photo_url
        self._commit('updating the photo of', hotel.id, uploaded_photo=photo_url)

        if old_photo:
            self.file_upload_service.delete_file(old_photo)

        logger.info(f'Hotel {hotel.id} photo updated by user {owner_id}')
        return hotel

    def soft_delete(self, owner_id, hotel_id):
        """
        Tombstone the hotel: status forced to inactive, deleted_at stamped.
        Deleting an already deleted hotel keeps its original deleted_at.
        """
        hotel = self.get_hotel(owner_id, hotel_id)
        if hotel.is_trashed:
            logger.info(f'Hotel {hotel.id} already deleted, nothing to do')
            return hotel

        now = utcnow()
        db.session.execute(
            update(Hotel)
            .where(Hotel.id == hotel.id, Hotel.deleted_at.is_(None))
            .values(status=HotelStatus.INACTIVE, deleted_at=now, updated_at=now)
        )
        self._commit('deleting', hotel.id)

        logger.info(f'Hotel {hotel.id} soft deleted by user {owner_id}')
        return hotel

    def restore(self, owner_id, hotel_id):
        """
        Bring a tombstoned hotel back as active.
        Restoring a hotel that is not deleted changes nothing.
        """
        hotel = self.get_hotel(owner_id, hotel_id)
        if not hotel.is_trashed:
            logger.info(f'Hotel {hotel.id} is not deleted, nothing to restore')
            return hotel

        db.session.execute(
            update(Hotel)
            .where(Hotel.id == hotel.id)
            .values(status=HotelStatus.ACTIVE, deleted_at=None, updated_at=utcnow())
        )
        self._commit('restoring', hotel.id)

        logger.info(f'Hotel {hotel.id} restored by user {owner_id}')
        return hotel
