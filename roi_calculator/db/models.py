"""
SQLAlchemy ORM models for captured leads.
"""

from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import declarative_base
import uuid

Base = declarative_base()


def generate_uuid():
    return str(uuid.uuid4())


class TimestampMixin:
    """Mixin for created/updated timestamps."""

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


class Lead(TimestampMixin, Base):
    """A lead-capture form submission, kept as a backup of the leads sheet."""

    __tablename__ = "leads"

    id = Column(String, primary_key=True, default=generate_uuid)

    # Contact details
    first_name = Column(String(100), nullable=False, default="")
    last_name = Column(String(100), nullable=False, default="")
    email = Column(String(255), nullable=False, default="", index=True)
    company = Column(String(255), nullable=False, default="")
    telephone = Column(String(50), nullable=False, default="")

    # Delivery status
    forwarded_to_sheet = Column(Boolean, default=False, nullable=False)
    notification_sent = Column(Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<Lead {self.email} ({self.company})>"
