from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

from .user import User
from .hotel import Hotel, HotelStatus, Currency
from .access_token import AccessToken
from .password_reset import PasswordReset
