import logging

from sqlalchemy.orm import Session

from employee_api.core.security import hash_password
from employee_api.models.account import Account, Role

logger = logging.getLogger("employee_api.seed")


def seed_admin_if_empty(db: Session, username: str, password: str) -> bool:
    existing = db.query(Account).count()
    if existing > 0:
        logger.info("Accounts table already populated, skipping admin seed")
        return False

    admin = Account(
        username=username,
        role=Role.ADMIN.value,
        password_hash=hash_password(password),
    )

    db.add(admin)
    db.commit()
    logger.info("Default admin account created (username=%s)", username)
    return True
