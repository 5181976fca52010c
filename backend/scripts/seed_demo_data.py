"""
Seed script for a demo LifeVault account.

Creates a demo owner (PIN 1234) with four assets, two nominees and a
trading account, plus an admin to review vault requests. Log in with the
phone numbers below and the DEMO_OTP from settings.

Run with: python -m scripts.seed_demo_data
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date
from decimal import Decimal

from app.core.database import SessionLocal, init_database
from app.modules.assets.services import AssetRepository
from app.modules.nominees.services import NomineeRepository
from app.modules.trading_accounts.services import TradingAccountRepository
from app.modules.users.models import User, UserRole
from app.modules.users.services import create_user, normalize_phone

DEMO_OWNER_PHONE = "9876543210"
DEMO_ADMIN_PHONE = "9000000001"
DEMO_PIN = "1234"


def seed_demo_data():
    """Seed the demo owner, their ledgers, and a reviewing admin."""
    init_database()
    db = SessionLocal()

    try:
        # Check if data already exists
        existing = db.query(User).filter(User.phone == normalize_phone(DEMO_OWNER_PHONE)).first()
        if existing:
            print("Demo data already exists. Skipping seed.")
            print("To re-seed, delete the demo owner first.")
            return

        print("Seeding LifeVault demo data...")

        owner = create_user(
            db,
            name="Rajesh Kumar",
            phone=DEMO_OWNER_PHONE,
            email="rajesh.kumar@example.com",
            pin=DEMO_PIN,
            address="12 MG Road, Bengaluru",
        )

        # Net worth 2,500,000 across four active holdings
        assets = AssetRepository(db)
        assets.create(owner.id, {
            "category": "Bank",
            "institution": "State Bank of India",
            "account_number": "XXXX4521",
            "current_value": Decimal("500000"),
            "notes": "Savings account",
        })
        assets.create(owner.id, {
            "category": "LIC",
            "institution": "LIC of India",
            "account_number": "POL-88231",
            "current_value": Decimal("200000"),
            "maturity_date": date(2032, 3, 31),
        })
        assets.create(owner.id, {
            "category": "Property",
            "institution": "Sub-Registrar, Bengaluru",
            "account_number": "DEED-2019-0042",
            "current_value": Decimal("1500000"),
        })
        assets.create(owner.id, {
            "category": "PF",
            "institution": "EPFO",
            "account_number": "KA/BNG/0012345",
            "current_value": Decimal("300000"),
        })

        nominees = NomineeRepository(db)
        spouse = nominees.create(owner.id, {
            "name": "Priya Kumar",
            "relation": "Spouse",
            "phone": "+91 98765 00001",
            "email": "priya.kumar@example.com",
            "allocation_percentage": Decimal("60"),
            "is_executor": True,
        })
        nominees.create(owner.id, {
            "name": "Arjun Kumar",
            "relation": "Child",
            "phone": "+91 98765 00002",
            "email": "arjun.kumar@example.com",
            "allocation_percentage": Decimal("40"),
        })

        TradingAccountRepository(db).create(owner.id, {
            "broker_name": "Zerodha",
            "client_id": "ZR1234",
            "demat_number": "1208160000123456",
            "nominee_id": spouse.id,
            "current_value": Decimal("250000"),
        })

        create_user(
            db,
            name="Vault Admin",
            phone=DEMO_ADMIN_PHONE,
            email="admin@lifevault.example.com",
            pin=DEMO_PIN,
            role=UserRole.ADMIN,
        )

        print(f"Seeded owner {owner.phone} with 4 assets, 2 nominees and 1 trading account")
        print(f"Seeded admin {normalize_phone(DEMO_ADMIN_PHONE)}")

    finally:
        db.close()


if __name__ == "__main__":
    seed_demo_data()
