import secrets
from datetime import timedelta

from werkzeug.security import generate_password_hash, check_password_hash

from . import db
from utils.timezone import utcnow


class PasswordReset(db.Model):
    """One pending reset per email; a new request replaces the previous token"""
    __tablename__ = 'password_resets'

    email = db.Column(db.String(255), primary_key=True)
    token_hash = db.Column(db.String(256), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    TOKEN_BYTES = 48  # 64 url-safe characters

    @classmethod
    def create_for(cls, email):
        """Store a fresh hashed token for email and return the plain token"""
        plain_token = secrets.token_urlsafe(cls.TOKEN_BYTES)
        reset = db.session.get(cls, email)
        if reset is None:
            reset = cls(email=email)
            db.session.add(reset)
        reset.token_hash = generate_password_hash(plain_token)
        reset.created_at = utcnow()
        return plain_token

    @classmethod
    def is_valid(cls, email, plain_token, expire_minutes=60):
        reset = db.session.get(cls, email)
        if reset is None or not plain_token:
            return False
        if reset.created_at + timedelta(minutes=expire_minutes) < utcnow():
            return False
        return check_password_hash(reset.token_hash, plain_token)

    @classmethod
    def delete_for(cls, email):
        cls.query.filter_by(email=email).delete()

    def __repr__(self):
        return f'<PasswordReset {self.email}>'
