from sqlalchemy import Column, String
from sqlalchemy.sql import func

from common.db.base import Base, UTCDateTime


class AccountEntity(Base):
    """Account row written by the identity service; metering only reads it."""

    __tablename__ = "accounts"

    id = Column(String(128), primary_key=True)  # External account id (token sub)
    email = Column(String, nullable=True)
    tier_id = Column(String(50), nullable=True)  # NULL means default tier
    created_at = Column(UTCDateTime(), server_default=func.now())
    updated_at = Column(UTCDateTime(), server_default=func.now(), onupdate=func.now())
