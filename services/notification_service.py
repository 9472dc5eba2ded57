#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Notification Service - transactional email through the Brevo HTTP API
Sending never raises: failures are logged and reported as False.
"""

import logging

import requests
from flask import current_app, render_template

from utils.timezone import utcnow

logger = logging.getLogger(__name__)


class NotificationService:

    def send_user_registered(self, user):
        app_name = current_app.config.get('APP_NAME')
        registered_at = (user.created_at or utcnow()).strftime('%d/%m/%Y at %H:%M')
        html = render_template(
            'emails/registered.html',
            user_name=user.first_name,
            app_name=app_name,
            registered_at=registered_at
        )
        sent = self._dispatch(user, f'Welcome to {app_name}', html)
        if sent:
            logger.info(f'Registration email sent to user {user.id}')
        return sent

    def send_password_reset(self, user, reset_url):
        app_name = current_app.config.get('APP_NAME')
        html = render_template(
            'emails/password_reset.html',
            user_name=user.first_name,
            app_name=app_name,
            reset_url=reset_url,
            expires_in=f"{current_app.config.get('PASSWORD_RESET_EXPIRE_MINUTES')} minutes"
        )
        sent = self._dispatch(user, f'Reset your password - {app_name}', html)
        if sent:
            logger.info(f'Password reset email sent to user {user.id}')
        return sent

    def _dispatch(self, user, subject, html):
        config = current_app.config
        api_key = config.get('BREVO_API_KEY')
        if not api_key:
            logger.warning(f'BREVO_API_KEY not configured, email "{subject}" to user {user.id} not sent')
            return False

        data = {
            'sender': {'name': config.get('MAIL_FROM_NAME'), 'email': config.get('MAIL_FROM_ADDRESS')},
            'to': [{'email': user.email, 'name': user.full_name}],
            'subject': subject,
            'htmlContent': html,
        }
        headers = {
            'api-key': api_key,
            'accept': 'application/json',
            'content-type': 'application/json',
        }

        try:
            response = requests.post(
                config.get('BREVO_API_URL'),
                headers=headers,
                json=data,
                timeout=config.get('MAIL_TIMEOUT', 10)
            )
        except requests.RequestException as e:
            logger.error(f'Failed to send email "{subject}" to user {user.id}: {e}')
            return False

        if response.status_code >= 400:
            logger.error(f'Brevo rejected email "{subject}" to user {user.id}: '
                         f'{response.status_code} {response.text}')
            return False
        return True
