"""Pytest configuration and fixtures."""
import io
from contextlib import contextmanager
from decimal import Decimal

import pytest
from flask import has_app_context
from werkzeug.datastructures import FileStorage

from app import create_app
from config import Config
from models import db as _db, User, Hotel, HotelStatus, Currency, AccessToken
from services.file_upload_service import FileUploadService


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    RATELIMIT_ENABLED = False
    BREVO_API_KEY = None
    CLOUDINARY_CLOUD_NAME = 'demo'
    CLOUDINARY_API_KEY = 'key'
    CLOUDINARY_API_SECRET = 'secret'
    PASSWORD_RESET_URL = 'https://front.example/reset-password'


@contextmanager
def _context(app):
    if has_app_context():
        yield
    else:
        with app.app_context():
            yield


@pytest.fixture
def app():
    """Application with an empty in-memory database, no context left pushed"""
    app = create_app(TestConfig)
    with app.app_context():
        _db.create_all()

    yield app

    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def app_ctx(app):
    """Pushed application context for service-level tests"""
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make(email, password='secret123', first_name='Test', last_name='User'):
        with _context(app):
            user = User(first_name=first_name, last_name=last_name, email=email)
            user.set_password(password)
            _db.session.add(user)
            _db.session.commit()
            return user.id
    return _make


@pytest.fixture
def owner_id(make_user):
    return make_user('owner@example.com')


@pytest.fixture
def other_owner_id(make_user):
    return make_user('other@example.com')


@pytest.fixture
def make_hotel(app):
    """Insert a hotel and return its id; any column can be overridden"""
    def _make(owner_id, **fields):
        values = {
            'name': 'Test Hotel',
            'address': '1 Test Street',
            'email': 'hotel@example.com',
            'phone': '+221 33 000 00 00',
            'price': Decimal('100.00'),
            'currency': Currency.EUR,
            'status': HotelStatus.ACTIVE,
        }
        values.update(fields)
        with _context(app):
            hotel = Hotel(user_id=owner_id, **values)
            _db.session.add(hotel)
            _db.session.commit()
            return hotel.id
    return _make


@pytest.fixture
def make_token(app):
    def _make(user_id):
        with _context(app):
            user = _db.session.get(User, user_id)
            _, plain_text = AccessToken.issue(user)
            _db.session.commit()
            return plain_text
    return _make


@pytest.fixture
def auth_headers(owner_id, make_token):
    return {'Authorization': f'Bearer {make_token(owner_id)}'}


@pytest.fixture
def other_auth_headers(other_owner_id, make_token):
    return {'Authorization': f'Bearer {make_token(other_owner_id)}'}


@pytest.fixture
def image_file():
    def _make(filename='photo.jpg', content=b'\xff\xd8\xff\xe0fake-jpeg', content_type='image/jpeg'):
        return FileStorage(stream=io.BytesIO(content), filename=filename, content_type=content_type)
    return _make


@pytest.fixture
def fake_media(monkeypatch):
    """Replace the Cloudinary calls; records uploads and deletions"""
    calls = {'uploads': [], 'deleted': [], 'fail_upload': False}

    def fake_upload(self, file, folder, transformation):
        if calls['fail_upload']:
            from services.exceptions import UpstreamError
            raise UpstreamError(f'Upload to {folder} failed')
        url = f'https://res.cloudinary.com/demo/image/upload/v1/{folder}/{file.filename.rsplit(".", 1)[0]}-{len(calls["uploads"])}.jpg'
        calls['uploads'].append(url)
        return url

    def fake_delete(self, url):
        calls['deleted'].append(url)
        return True

    monkeypatch.setattr(FileUploadService, '_upload', fake_upload)
    monkeypatch.setattr(FileUploadService, 'delete_file', fake_delete)
    return calls


@pytest.fixture
def sent_emails(monkeypatch):
    """Capture outgoing emails instead of calling Brevo"""
    from services.notification_service import NotificationService

    sent = []

    def fake_dispatch(self, user, subject, html):
        sent.append({'to': user.email, 'subject': subject, 'html': html})
        return True

    monkeypatch.setattr(NotificationService, '_dispatch', fake_dispatch)
    return sent
