import os
import secrets
import logging
from dotenv import load_dotenv

load_dotenv()

basedir = os.path.abspath(os.path.dirname(__file__))

FLASK_ENV = os.environ.get('FLASK_ENV', 'production')  # Default to production (secure)
IS_PRODUCTION = FLASK_ENV == 'production'
IS_DEVELOPMENT = FLASK_ENV == 'development'


class Config:
    _env_secret_key = os.environ.get('SECRET_KEY')
    if IS_PRODUCTION and not _env_secret_key:
        logging.warning(
            "SECRET_KEY not set in production environment! "
            "Set SECRET_KEY environment variable for stable signing."
        )
    SECRET_KEY = _env_secret_key or secrets.token_hex(32)

    APP_NAME = os.environ.get('APP_NAME', 'Hotel Manager')

    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        'sqlite:///' + os.path.join(basedir, 'database', 'hotels.db')
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
    }

    # Uploads (photos and avatars are streamed to Cloudinary, never stored locally)
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max request body
    ALLOWED_IMAGE_EXTENSIONS = {'jpeg', 'jpg', 'png', 'gif'}
    HOTEL_PHOTO_MAX_SIZE_MB = 10
    AVATAR_REGISTER_MAX_SIZE_MB = 2
    AVATAR_UPDATE_MAX_SIZE_MB = 5

    # Cloudinary media host
    CLOUDINARY_CLOUD_NAME = os.environ.get('CLOUDINARY_CLOUD_NAME')
    CLOUDINARY_API_KEY = os.environ.get('CLOUDINARY_API_KEY')
    CLOUDINARY_API_SECRET = os.environ.get('CLOUDINARY_API_SECRET')

    # Transactional email (Brevo HTTP API)
    BREVO_API_KEY = os.environ.get('BREVO_API_KEY')
    BREVO_API_URL = os.environ.get('BREVO_API_URL', 'https://api.brevo.com/v3/smtp/email')
    MAIL_FROM_ADDRESS = os.environ.get('MAIL_FROM_ADDRESS', 'no-reply@hotel-manager.local')
    MAIL_FROM_NAME = os.environ.get('MAIL_FROM_NAME', APP_NAME)
    MAIL_TIMEOUT = 10

    # Password reset
    PASSWORD_MIN_LENGTH = 8
    PASSWORD_RESET_EXPIRE_MINUTES = int(os.environ.get('PASSWORD_RESET_EXPIRE_MINUTES', 60))
    PASSWORD_RESET_URL = os.environ.get('PASSWORD_RESET_URL')  # Frontend page, falls back to host URL

    # Rate limiting
    RATELIMIT_DEFAULT = "200 per minute"
    RATELIMIT_STORAGE_URI = os.environ.get('REDIS_URL', 'memory://')
    LOGIN_RATE_LIMIT = "10 per minute"

    LOG_FILE = os.environ.get('LOG_FILE')

