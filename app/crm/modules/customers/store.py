from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.crm.errors import StorageError, ValidationError
from app.crm.modules.customers.models import ID_MAX, ID_MIN, NAME_MAX_LENGTH, Customer

logger = logging.getLogger(__name__)


def validate_customer_name(name: Any) -> None:
    """Raise ValidationError unless `name` can be stored as a customer name."""
    if name is None:
        raise ValidationError("name", "Name is required.")
    if not isinstance(name, str):
        raise ValidationError("name", "Name must be a string.")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError("name", f"Name must be at most {NAME_MAX_LENGTH} characters.")


class CustomerStore:
    """
    Explicit data access for Customer rows over one Session.

    Reads never raise for missing rows; any database failure surfaces as StorageError.
    """

    def __init__(self, s: Session) -> None:
        self.s = s

    def list_all(self) -> list[Customer]:
        try:
            return list(self.s.scalars(select(Customer).order_by(Customer.id)))
        except SQLAlchemyError as e:
            self.s.rollback()
            raise StorageError(f"list customers failed: {e}") from e

    def find_by_id(self, customer_id: int) -> Customer | None:
        if not ID_MIN <= customer_id <= ID_MAX:
            return None
        try:
            return self.s.get(Customer, customer_id)
        except SQLAlchemyError as e:
            self.s.rollback()
            raise StorageError(f"get customer {customer_id} failed: {e}") from e

    def find_by_name(self, name: str) -> list[Customer]:
        """Exact, case-sensitive match on the stored name."""
        try:
            stmt = select(Customer).where(Customer.name == name).order_by(Customer.id)
            return list(self.s.scalars(stmt))
        except SQLAlchemyError as e:
            self.s.rollback()
            raise StorageError(f"find customers by name failed: {e}") from e

    def persist(self, customer: Customer) -> None:
        """Insert and commit `customer`; its id is populated on return."""
        validate_customer_name(customer.name)
        try:
            self.s.add(customer)
            self.s.flush()
            self.s.commit()
        except SQLAlchemyError as e:
            self.s.rollback()
            raise StorageError(f"persist customer failed: {e}") from e
        logger.info("Persisted customer id=%s", customer.id)
