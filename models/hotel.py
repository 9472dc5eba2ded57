import enum

from . import db
from utils.timezone import utcnow, isoformat


class HotelStatus(str, enum.Enum):
    ACTIVE = 'active'
    INACTIVE = 'inactive'

    @classmethod
    def values(cls):
        return [member.value for member in cls]

    @property
    def label(self):
        return STATUS_LABELS[self]


class Currency(str, enum.Enum):
    CFA = 'CFA'
    EUR = 'EUR'
    USD = 'USD'

    @classmethod
    def values(cls):
        return [member.value for member in cls]

    @property
    def label(self):
        return CURRENCY_LABELS[self]

    @property
    def symbol(self):
        return CURRENCY_SYMBOLS[self]


STATUS_LABELS = {
    HotelStatus.ACTIVE: 'Active',
    HotelStatus.INACTIVE: 'Inactive',
}

CURRENCY_LABELS = {
    Currency.CFA: 'Franc CFA',
    Currency.EUR: 'Euro',
    Currency.USD: 'US Dollar',
}

CURRENCY_SYMBOLS = {
    Currency.CFA: 'FCFA',
    Currency.EUR: '€',
    Currency.USD: '$',
}


def _enum_values(enum_class):
    return [member.value for member in enum_class]


class Hotel(db.Model):
    """
    Hotel listing owned by a single user.

    Soft delete: deleted_at set means the row is a tombstone. Tombstones are
    kept for restore and excluded from without_trashed() views.
    """
    __tablename__ = 'hotels'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    address = db.Column(db.Text, nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(50), nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    currency = db.Column(
        db.Enum(Currency, name='hotel_currency', native_enum=False, create_constraint=True,
                values_callable=_enum_values, validate_strings=True, length=10),
        nullable=False
    )
    photo = db.Column(db.String(500), nullable=True)
    status = db.Column(
        db.Enum(HotelStatus, name='hotel_status', native_enum=False, create_constraint=True,
                values_callable=_enum_values, validate_strings=True, length=10),
        nullable=False,
        default=HotelStatus.ACTIVE
    )
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = db.Column(db.DateTime, nullable=True, index=True)

    owner = db.relationship('User', back_populates='hotels')

    __table_args__ = (
        db.CheckConstraint('price >= 0', name='ck_hotel_price_positive'),
    )

    # Columns a client may write; id, user_id and timestamps are server-owned
    WRITABLE_FIELDS = ('name', 'address', 'email', 'phone', 'price', 'currency', 'status', 'photo')

    @classmethod
    def with_trashed(cls):
        return cls.query

    @classmethod
    def without_trashed(cls):
        return cls.query.filter(cls.deleted_at.is_(None))

    @classmethod
    def only_trashed(cls):
        return cls.query.filter(cls.deleted_at.isnot(None))

    @property
    def is_trashed(self):
        return self.deleted_at is not None

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'address': self.address,
            'email': self.email,
            'phone': self.phone,
            'price': '{:.2f}'.format(self.price) if self.price is not None else None,
            'currency': self.currency.value if self.currency else None,
            'photo': self.photo,
            'status': self.status.value if self.status else None,
            'user_id': self.user_id,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
            'deleted_at': isoformat(self.deleted_at),
        }

    def __repr__(self):
        return f'<Hotel {self.id}: {self.name}>'
