#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
File Upload Service - Cloudinary media host
Hotel photos and user avatars are uploaded with folder and transformation hints
"""

import logging
import re

import cloudinary
import cloudinary.uploader
from flask import current_app

from services.exceptions import UpstreamError

logger = logging.getLogger(__name__)

AVATAR_FOLDER = 'hotel-app/avatars'
HOTEL_PHOTO_FOLDER = 'hotel-app/hotels'

AVATAR_TRANSFORMATION = {'width': 200, 'height': 200, 'crop': 'fill', 'gravity': 'face'}
HOTEL_PHOTO_TRANSFORMATION = {'width': 800, 'height': 600, 'crop': 'fill', 'quality': 'auto'}

PUBLIC_ID_PATTERNS = (
    re.compile(r'/image/upload/v\d+/(.+?)\.\w+$'),
    re.compile(r'/upload/v\d+/(.+?)\.\w+$'),
    re.compile(r'/v\d+/(.+?)\.\w+$'),
)


class FileUploadService:

    def _configure(self):
        config = current_app.config
        cloudinary.config(
            cloud_name=config.get('CLOUDINARY_CLOUD_NAME'),
            api_key=config.get('CLOUDINARY_API_KEY'),
            api_secret=config.get('CLOUDINARY_API_SECRET'),
            secure=True
        )

    def _upload(self, file, folder, transformation):
        """
        Upload an already validated FileStorage

        Returns:
            secure URL of the uploaded asset

        Raises:
            UpstreamError on any transport or media host failure
        """
        self._configure()
        try:
            file.stream.seek(0)
            result = cloudinary.uploader.upload(
                file.stream,
                folder=folder,
                transformation=[transformation]
            )
        except Exception as e:
            logger.error(f'Upload to {folder} failed for {file.filename}: {e}')
            raise UpstreamError(f'Upload to {folder} failed') from e

        secure_url = (result or {}).get('secure_url')
        if not secure_url:
            logger.error(f'Upload to {folder} returned no secure URL: {result}')
            raise UpstreamError(f'Upload to {folder} failed')

        logger.info(f'Uploaded {file.filename} to {folder}: {secure_url}')
        return secure_url

    def upload_avatar(self, file):
        return self._upload(file, AVATAR_FOLDER, AVATAR_TRANSFORMATION)

    def upload_hotel_photo(self, file):
        return self._upload(file, HOTEL_PHOTO_FOLDER, HOTEL_PHOTO_TRANSFORMATION)

    def delete_file(self, url):
        """Best-effort removal; never raises"""
        if not url:
            return False

        public_id = self.extract_public_id(url)
        if not public_id:
            logger.warning(f'Could not extract public_id from {url}')
            return False

        self._configure()
        try:
            result = cloudinary.uploader.destroy(public_id)
        except Exception as e:
            logger.error(f'Cloudinary delete failed for {url}: {e}')
            return False

        success = (result or {}).get('result') == 'ok'
        if success:
            logger.info(f'Deleted {public_id} from Cloudinary')
        else:
            logger.warning(f'Cloudinary delete not confirmed for {public_id}: {result}')
        return success

    @staticmethod
    def extract_public_id(url):
        for pattern in PUBLIC_ID_PATTERNS:
            match = pattern.search(url)
            if match:
                return match.group(1)
        return None

    def check_configuration(self):
        """Used by init_db.py to report missing media host credentials"""
        config = current_app.config
        missing = [key for key in ('CLOUDINARY_CLOUD_NAME', 'CLOUDINARY_API_KEY', 'CLOUDINARY_API_SECRET')
                   if not config.get(key)]
        if missing:
            logger.warning(f'Cloudinary configuration missing: {", ".join(missing)}')
            return False
        return True
