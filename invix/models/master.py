import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Boolean, Integer, DateTime, Uuid
from sqlalchemy.sql import func

from invix.db.base import Base


def _utcnow():
    return datetime.now(timezone.utc)


# =====================================================
# CLIENTS (tenant principal)
# =====================================================

class Client(Base):
    __tablename__ = "clients"

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    client_id = Column(String, unique=True, nullable=False)  # tenant anahtarı
    company_name = Column(String, unique=True, nullable=False)
    username = Column(String, unique=True, nullable=False)
    password_hash = Column(String, nullable=False)

    email = Column(String)
    phone = Column(String)
    contact_person = Column(String)

    access_status = Column(Boolean, nullable=False, default=True)
    subscription_status = Column(String, nullable=False, default="ACTIVE")  # ACTIVE, INACTIVE, EXPIRED
    subscription_start = Column(DateTime(timezone=True), default=_utcnow)
    subscription_end = Column(DateTime(timezone=True))

    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


# =====================================================
# ADMINS
# =====================================================

class Admin(Base):
    __tablename__ = "admins"

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    username = Column(String, unique=True, nullable=False)
    email = Column(String)
    full_name = Column(String)
    password_hash = Column(String, nullable=False)

    is_active = Column(Boolean, default=True)
    is_super_admin = Column(Boolean, default=False)

    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


# =====================================================
# CLIENT ID SEQUENCE
# =====================================================

class ClientIdSequence(Base):
    __tablename__ = "client_id_sequence"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
