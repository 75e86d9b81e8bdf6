from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# Ensure module models are imported so Base.metadata includes their tables.
# (Kept at bottom, and as a plain module import, to avoid circular imports.)
import app.crm.modules.customers.models  # noqa: E402,F401
