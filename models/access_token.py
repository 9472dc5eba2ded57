"""
Personal access tokens for bearer authentication.
Only the sha256 digest of a token is stored; the plain value is shown once.
"""
import hashlib
import secrets

from . import db
from utils.timezone import utcnow


def _digest(plain_text):
    return hashlib.sha256(plain_text.encode('utf-8')).hexdigest()


class AccessToken(db.Model):
    __tablename__ = 'access_tokens'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False, default='auth_token')
    token_hash = db.Column(db.String(64), unique=True, nullable=False, index=True)
    last_used_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    user = db.relationship('User', back_populates='access_tokens')

    @classmethod
    def issue(cls, user, name='auth_token'):
        """
        Create a token for user.
        Returns: (token, plain_text) - plain_text is never persisted
        """
        plain_text = secrets.token_urlsafe(40)
        token = cls(user_id=user.id, name=name, token_hash=_digest(plain_text))
        db.session.add(token)
        return token, plain_text

    @classmethod
    def find_by_plain_text(cls, plain_text):
        if not plain_text:
            return None
        return cls.query.filter_by(token_hash=_digest(plain_text)).first()

    @classmethod
    def revoke_all_for(cls, user_id):
        cls.query.filter_by(user_id=user_id).delete()

    def touch(self):
        self.last_used_at = utcnow()

    def __repr__(self):
        return f'<AccessToken {self.id} user={self.user_id}>'
