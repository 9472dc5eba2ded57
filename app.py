#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Hotel Manager API
Flask Application Entry Point
"""

import os
import sqlite3
import logging
from datetime import datetime, timezone
from flask import Flask, jsonify, g
from flask_limiter.errors import RateLimitExceeded
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from config import Config
from extensions import limiter, login_manager
from models import db, User, AccessToken
from routes import register_blueprints
from services.exceptions import HotelAppError


class UTCFormatter(logging.Formatter):
    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.strftime('%Y-%m-%d %H:%M:%S')


formatter = UTCFormatter('%(asctime)s [UTC] - %(name)s - %(levelname)s - %(message)s')

console_handler = logging.StreamHandler()
console_handler.setFormatter(formatter)
handlers = [console_handler]

if Config.LOG_FILE:
    file_handler = logging.FileHandler(Config.LOG_FILE, encoding='utf-8')
    file_handler.setFormatter(formatter)
    handlers.append(file_handler)

logging.basicConfig(level=logging.INFO, handlers=handlers)
logger = logging.getLogger(__name__)


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    # ON DELETE CASCADE from users needs foreign keys enabled on SQLite
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def register_error_handlers(app):

    @app.errorhandler(HotelAppError)
    def handle_app_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        logger.error(f'Unhandled database error: {error}')
        return jsonify({'success': False, 'message': 'An unexpected error occurred'}), 500

    @app.errorhandler(RateLimitExceeded)
    def handle_rate_limit(error):
        return jsonify({'success': False, 'message': f'Too many requests: {error.description}'}), 429

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({'success': False, 'message': 'Route not found.'}), 404

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'success': False, 'message': error.description}), error.code


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///') and not app.config.get('TESTING'):
        db_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'database')
        if not os.path.exists(db_dir):
            os.makedirs(db_dir)

    db.init_app(app)
    limiter.init_app(app)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.request_loader
    def load_user_from_request(request):
        header = request.headers.get('Authorization', '')
        if not header.startswith('Bearer '):
            return None
        token = AccessToken.find_by_plain_text(header[len('Bearer '):].strip())
        if token is None:
            return None
        token.touch()
        db.session.commit()
        g.access_token = token
        return token.user

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'success': False, 'message': 'Unauthenticated.'}), 401

    register_blueprints(app)
    register_error_handlers(app)

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        response.headers['Cache-Control'] = 'no-store'
        return response

    return app


if __name__ == '__main__':
    app = create_app()
    flask_env = os.environ.get('FLASK_ENV', 'production')
    debug_mode = flask_env == 'development'

    logger.info(f"Application starting in {flask_env} mode")
    logger.info(f"Debug mode: {debug_mode}")

    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 8000)), debug=debug_mode)
