"""Seed sample menu items, tables and customers.

Usage:
    python -m billgenie.scripts.seed
"""

import logging
import sys
from decimal import Decimal
from typing import Dict

from sqlalchemy.orm import Session

from billgenie.db.base import Base
from billgenie.db.session import SessionLocal, engine
import billgenie.models  # noqa: F401
from billgenie.models.customer import Customer
from billgenie.models.restaurant import MenuItem, Table

logger = logging.getLogger(__name__)

MENU_ITEMS = [
    {
        "name": "Margherita Pizza",
        "description": "Classic pizza with tomato sauce, mozzarella, and basil",
        "category": "Pizza",
        "price": Decimal("12.99"),
        "preparation_time": 15,
        "ingredients": ["dough", "tomato sauce", "mozzarella", "basil"],
    },
    {
        "name": "Caesar Salad",
        "description": "Fresh romaine lettuce with Caesar dressing and croutons",
        "category": "Salads",
        "price": Decimal("8.99"),
        "preparation_time": 10,
        "ingredients": ["romaine lettuce", "Caesar dressing", "croutons", "parmesan"],
    },
    {
        "name": "Cheeseburger",
        "description": "Juicy beef patty with cheese, lettuce, and tomato",
        "category": "Burgers",
        "price": Decimal("10.99"),
        "preparation_time": 12,
        "ingredients": ["beef patty", "cheese", "bun", "lettuce", "tomato"],
    },
    {
        "name": "Pasta Carbonara",
        "description": "Creamy pasta with bacon and parmesan",
        "category": "Pasta",
        "price": Decimal("14.99"),
        "preparation_time": 18,
        "ingredients": ["pasta", "bacon", "cream", "parmesan", "eggs"],
    },
    {
        "name": "Chocolate Cake",
        "description": "Rich chocolate cake with chocolate frosting",
        "category": "Desserts",
        "price": Decimal("6.99"),
        "preparation_time": 5,
        "ingredients": ["chocolate cake", "chocolate frosting"],
    },
]

TABLES = [
    (1, 2, "Main Hall"),
    (2, 4, "Main Hall"),
    (3, 4, "Main Hall"),
    (4, 6, "Main Hall"),
    (5, 2, "Window Side"),
    (6, 2, "Window Side"),
    (7, 8, "Private Room"),
    (8, 4, "Outdoor Patio"),
]

CUSTOMERS = [
    {"first_name": "John", "last_name": "Doe", "email": "john.doe@example.com", "phone": "+15550100"},
    {"first_name": "Jane", "last_name": "Smith", "email": "jane.smith@example.com", "phone": "+15550101"},
]


def seed(db: Session) -> Dict[str, int]:
    """Insert sample rows that are not present yet. Returns the number added per kind."""
    added = {"menu_items": 0, "tables": 0, "customers": 0}

    existing_names = {name for (name,) in db.query(MenuItem.name).all()}
    for data in MENU_ITEMS:
        if data["name"] not in existing_names:
            db.add(MenuItem(**data))
            added["menu_items"] += 1

    existing_numbers = {number for (number,) in db.query(Table.table_number).all()}
    for number, capacity, location in TABLES:
        if number not in existing_numbers:
            db.add(Table(table_number=number, capacity=capacity, location=location))
            added["tables"] += 1

    existing_emails = {email for (email,) in db.query(Customer.email).all()}
    for data in CUSTOMERS:
        if data["email"] not in existing_emails:
            db.add(Customer(**data))
            added["customers"] += 1

    db.commit()
    logger.info(f"Seeded {added}")
    return added


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        added = seed(db)
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        return 1
    finally:
        db.close()

    print("Database seeded.")
    for kind, count in added.items():
        print(f"  + {kind}: {count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
