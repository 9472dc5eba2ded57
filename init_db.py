#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Database initialization script with seed data
Run this script to create tables and add a demo owner with sample hotels
"""

import os
import sys
from decimal import Decimal

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app import create_app
from models import db, User, Hotel, HotelStatus, Currency
from services.file_upload_service import FileUploadService

DEMO_HOTELS = [
    ('Hotel Paradise', '12 Paradise Avenue, Dakar', 'contact@paradise.example', '+221 33 800 00 01', '45000', Currency.CFA),
    ('Le Grand Bleu', '3 Quai des Etats-Unis, Nice', 'bonjour@grandbleu.example', '+33 4 93 00 00 02', '150.00', Currency.EUR),
    ('Sunset Lodge', '88 Ocean Drive, Miami', 'stay@sunsetlodge.example', '+1 305 555 0103', '210.50', Currency.USD),
    ('Baobab Inn', 'Route de Ngor, Dakar', 'hello@baobab.example', '+221 33 800 00 04', '30000', Currency.CFA),
]


def init_database(reset=False):
    app = create_app()

    with app.app_context():
        if reset:
            db.drop_all()
        db.create_all()
        print("Database tables created.")

        if not FileUploadService().check_configuration():
            print("Cloudinary is not configured: photo and avatar uploads will fail.")

        owner = User.query.filter_by(email='demo@hotel.example').first()
        if owner:
            print("Demo user already exists")
            return

        owner = User(last_name='Demo', first_name='Owner', email='demo@hotel.example')
        owner.set_password('demo12345')
        db.session.add(owner)
        db.session.flush()

        for name, address, email, phone, price, currency in DEMO_HOTELS:
            db.session.add(Hotel(
                name=name,
                address=address,
                email=email,
                phone=phone,
                price=Decimal(price),
                currency=currency,
                status=HotelStatus.ACTIVE,
                user_id=owner.id
            ))

        db.session.commit()
        print(f"Demo user created (demo@hotel.example / demo12345) with {len(DEMO_HOTELS)} hotels")


if __name__ == '__main__':
    init_database(reset='--reset' in sys.argv)
