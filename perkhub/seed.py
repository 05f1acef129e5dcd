"""Create the tables and seed a demo merchant with a few perks.

Usage: python -m perkhub.seed [--email EMAIL] [--password PASSWORD]
"""
import argparse
import logging

from sqlmodel import Session, select

from . import config
from .database import engine, init_db
from .models import Perk, PerkCategory, User
from .services.auth import get_user_by_email, hash_password

logger = logging.getLogger(__name__)

DEMO_PERKS = [
    {
        "title": "Two-for-one Coffee",
        "description": "Buy any handcrafted drink and get a second one free.",
        "category": PerkCategory.FOOD,
        "discount_percent": 50,
        "merchant": "Bean There Cafe",
    },
    {
        "title": "Laptop Tune-up Discount",
        "description": "Save on a full hardware check and OS refresh.",
        "category": PerkCategory.TECH,
        "discount_percent": 20,
        "merchant": "Byte Repair",
    },
    {
        "title": "Weekend Getaway Deal",
        "description": "Reduced rates on Friday and Saturday nights.",
        "category": PerkCategory.TRAVEL,
        "discount_percent": 15,
        "merchant": "Harbor Inn",
    },
    {
        "title": "First Month Membership",
        "description": "Your first month of unlimited classes at a reduced price.",
        "category": PerkCategory.FITNESS,
        "discount_percent": 30,
        "merchant": "Peak Fitness",
    },
]


def seed(session: Session, email: str, password: str, name: str = "Demo Merchant") -> User:
    """Ensure the demo merchant and its perks exist. Safe to run repeatedly."""
    merchant = get_user_by_email(session, email)
    if not merchant:
        merchant = User(name=name, email=email.strip().lower(), password_hash=hash_password(password))
        session.add(merchant)
        session.commit()
        session.refresh(merchant)
        logger.info(f"Created demo merchant: {merchant.email}")
    else:
        logger.info(f"Demo merchant already exists: {merchant.email}")

    for data in DEMO_PERKS:
        existing = session.exec(
            select(Perk)
            .where(Perk.created_by == merchant.id)
            .where(Perk.title == data["title"])
        ).first()
        if existing:
            continue
        session.add(Perk(**data, created_by=merchant.id))
        logger.info(f"Seeded perk: {data['title']}")
    session.commit()
    return merchant


def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed the Perkhub database with demo data")
    parser.add_argument("--email", default="merchant@perkhub.example.com")
    parser.add_argument("--password", default="merchant123")
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL)
    init_db()
    with Session(engine) as session:
        seed(session, args.email, args.password)
    logger.info("Database seeding complete")


if __name__ == "__main__":
    main()
