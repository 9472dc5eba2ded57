#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Auth Service - registration, bearer tokens, avatar and password reset
"""

import logging
from urllib.parse import urlencode

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from models import db, User, AccessToken, PasswordReset
from services.exceptions import AuthenticationError, BadRequestError, UnexpectedError
from services.file_upload_service import FileUploadService
from services.notification_service import NotificationService
from utils.validators import FormValidator

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = 'If your email exists in our system, you will receive a reset link.'


class AuthService:

    def __init__(self, file_upload_service=None, notification_service=None):
        self.file_upload_service = file_upload_service or FileUploadService()
        self.notification_service = notification_service or NotificationService()

    def _commit(self, action, uploaded_avatar=None):
        """Commit the unit of work; on failure drop the avatar uploaded for it"""
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f'Error while {action}: {e}')
            if uploaded_avatar:
                self.file_upload_service.delete_file(uploaded_avatar)
            raise UnexpectedError(f'Error while {action}') from e

    def _validate_password(self, validator):
        password = validator.string('password', required=True)
        if password is not None:
            validator.min_length('password', password, current_app.config.get('PASSWORD_MIN_LENGTH', 8))
            validator.confirmed('password', password)
        return password

    def register(self, data, avatar=None):
        """
        Create an account and log it in

        Returns:
            (user, plain_text_token)
        """
        validator = FormValidator(data)
        last_name = validator.string('last_name', required=True, max_length=255)
        first_name = validator.string('first_name', required=True, max_length=255)
        email = validator.email('email', required=True)
        password = self._validate_password(validator)
        validator.image('avatar', avatar, current_app.config.get('AVATAR_REGISTER_MAX_SIZE_MB', 2))

        if email and User.query.filter_by(email=email).first():
            validator.add_error('email', 'The email has already been taken.')
        validator.raise_if_errors()

        user = User(last_name=last_name, first_name=first_name, email=email)
        user.set_password(password)

        if avatar is not None and avatar.filename:
            user.avatar = self.file_upload_service.upload_avatar(avatar)

        db.session.add(user)
        db.session.flush()
        _, plain_text = AccessToken.issue(user)
        self._commit('registering the user', uploaded_avatar=user.avatar)

        logger.info(f'User {user.id} registered')
        self.notification_service.send_user_registered(user)
        return user, plain_text

    def login(self, data):
        validator = FormValidator(data)
        email = validator.email('email', required=True)
        password = validator.string('password', required=True)
        validator.raise_if_errors()

        user = User.query.filter_by(email=email).first()
        if user is None or not user.check_password(password):
            logger.warning(f'Failed login attempt for {email}')
            raise AuthenticationError('Invalid credentials')

        _, plain_text = AccessToken.issue(user)
        self._commit('logging in')

        logger.info(f'User {user.id} logged in')
        return user, plain_text

    def logout(self, token):
        if token is None:
            return
        user_id = token.user_id
        db.session.delete(token)
        self._commit('logging out')
        logger.info(f'User {user_id} logged out')

    def update_avatar(self, user, avatar):
        validator = FormValidator({})
        validator.image('avatar', avatar, current_app.config.get('AVATAR_UPDATE_MAX_SIZE_MB', 5), required=True)
        validator.raise_if_errors()

        old_avatar = user.avatar
        user.avatar = self.file_upload_service.upload_avatar(avatar)
        self._commit('updating the avatar', uploaded_avatar=user.avatar)

        if old_avatar:
            self.file_upload_service.delete_file(old_avatar)

        logger.info(f'User {user.id} avatar updated')
        return user.avatar

    def forgot_password(self, data, reset_base_url):
        """
        Email a reset link when the address is known.
        The answer is the same whether or not the email exists.
        """
        validator = FormValidator(data)
        email = validator.email('email', required=True)
        validator.raise_if_errors()

        user = User.query.filter_by(email=email).first()
        if user is None:
            logger.info(f'Password reset requested for unknown email {email}')
            return FORGOT_PASSWORD_MESSAGE

        plain_token = PasswordReset.create_for(user.email)
        self._commit('creating the password reset token')

        reset_url = f"{reset_base_url}?{urlencode({'token': plain_token, 'email': user.email})}"
        self.notification_service.send_password_reset(user, reset_url)
        return FORGOT_PASSWORD_MESSAGE

    def reset_password(self, data):
        validator = FormValidator(data)
        token = validator.string('token', required=True)
        email = validator.email('email', required=True)
        password = self._validate_password(validator)
        validator.raise_if_errors()

        user = User.query.filter_by(email=email).first()
        expire_minutes = current_app.config.get('PASSWORD_RESET_EXPIRE_MINUTES', 60)
        if user is None or not PasswordReset.is_valid(email, token, expire_minutes):
            logger.warning(f'Invalid password reset attempt for {email}')
            raise BadRequestError('This password reset token is invalid.')

        user.set_password(password)
        PasswordReset.delete_for(email)
        AccessToken.revoke_all_for(user.id)
        self._commit('resetting the password')

        logger.info(f'User {user.id} password reset')
        return 'Your password has been reset.'
