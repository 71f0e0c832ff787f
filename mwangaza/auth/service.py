"""
Staff directory kept in the store.
"""

import logging
from typing import List, Optional
from uuid import uuid4

from mwangaza.core.config import settings
from mwangaza.db.query import STAFF_KEY
from mwangaza.db.repository import Repository
from mwangaza.auth.permissions import DEPARTMENT_BY_ROLE
from mwangaza.auth.schemas import Principal
from mwangaza.auth.utils import hash_password, verify_password

logger = logging.getLogger(__name__)

staff_table = Repository(STAFF_KEY)


def row_to_principal(row: dict) -> Principal:
    return Principal(
        id=row["id"],
        name=row["fullName"],
        email=row["email"],
        role=row["role"],
        department=DEPARTMENT_BY_ROLE[row["role"]],
    )


def get_staff_row(email: str) -> Optional[dict]:
    email = email.strip().lower()
    for row in staff_table.list():
        if row["email"] == email:
            return row
    return None


def list_staff() -> List[Principal]:
    return [row_to_principal(row) for row in staff_table.list()]


def add_staff(full_name: str, email: str, password: str, role: str) -> Principal:
    """Create a staff account; raises ValueError for a foreign domain or a taken email"""
    email = email.strip().lower()
    if not email.endswith("@" + settings.STAFF_EMAIL_DOMAIN.lower()):
        raise ValueError(f"Staff email must be an @{settings.STAFF_EMAIL_DOMAIN} address")
    if role not in DEPARTMENT_BY_ROLE:
        raise ValueError(f"Unknown role: {role}")

    with staff_table.store.lock(STAFF_KEY):
        if get_staff_row(email):
            raise ValueError("Email already registered")
        row = staff_table.insert({
            "id": str(uuid4()),
            "fullName": full_name,
            "email": email,
            "role": role,
            "passwordHash": hash_password(password),
        })
    logger.info("Added %s account for %s", role, email)
    return row_to_principal(row)


def authenticate(email: str, password: str) -> Optional[Principal]:
    row = get_staff_row(email)
    if row is None or not verify_password(password, row["passwordHash"]):
        return None
    return row_to_principal(row)


def ensure_default_admin() -> bool:
    """Create the configured administrator when no staff exist; True if created"""
    if staff_table.list():
        return False
    add_staff(
        settings.DEFAULT_ADMIN_NAME,
        settings.DEFAULT_ADMIN_EMAIL,
        settings.DEFAULT_ADMIN_PASSWORD,
        "admin",
    )
    return True
