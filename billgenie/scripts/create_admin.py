"""Create the initial administrator account.

Usage:
    python -m billgenie.scripts.create_admin
    python -m billgenie.scripts.create_admin --username boss --password 's3cret!' --email boss@example.com
"""

import argparse
import logging
import sys
from typing import Optional

from sqlalchemy.orm import Session

from billgenie.core.rbac import UserRole
from billgenie.core.security import get_password_hash
from billgenie.db.base import Base
from billgenie.db.session import SessionLocal, engine
import billgenie.models  # noqa: F401
from billgenie.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "admin123"


def create_admin(
    db: Session,
    username: str = "admin",
    password: str = DEFAULT_PASSWORD,
    email: str = "admin@billgenie.com",
    first_name: str = "System",
    last_name: str = "Administrator",
    phone: Optional[str] = "+1234567890",
) -> Optional[User]:
    """Insert an admin user unless one with ``username`` exists. Returns the new user or None."""
    if db.query(User).filter(User.username == username).first() is not None:
        logger.info(f"User '{username}' already exists; nothing to do")
        return None

    user = User(
        username=username,
        email=email,
        password_hash=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        role=UserRole.ADMIN,
        active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Admin user '{username}' created (ID: {user.id})")
    return user


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create the initial BillGenie admin user")
    parser.add_argument("--username", default="admin")
    parser.add_argument("--password", default=DEFAULT_PASSWORD)
    parser.add_argument("--email", default="admin@billgenie.com")
    parser.add_argument("--first-name", default="System")
    parser.add_argument("--last-name", default="Administrator")
    parser.add_argument("--phone", default="+1234567890")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        user = create_admin(
            db,
            username=args.username,
            password=args.password,
            email=args.email,
            first_name=args.first_name,
            last_name=args.last_name,
            phone=args.phone,
        )
    finally:
        db.close()

    if user is None:
        print(f"User '{args.username}' already exists. Delete it and run again to reset the password.")
        return 0

    print("Admin user created.")
    print(f"  Username: {args.username}")
    if args.password == DEFAULT_PASSWORD:
        print(f"  Password: {DEFAULT_PASSWORD}  (change it after first login)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
