"""
Database entity for consumption events.
"""

from sqlalchemy import Column, String, Index, JSON

from common.db.base import Base, BigIntegerType, UTCDateTime


class ConsumptionEventEntity(Base):
    """
    Consumption event database entity.

    Append-only log of billable actions, one row per admitted and completed
    operation. Quota windows are computed by counting rows in a time range.
    """

    __tablename__ = "consumption_events"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)

    # Issued by the external identity service, so no foreign key
    account_id = Column(String(128), nullable=False)

    kind = Column(String(50), nullable=False)  # search

    occurred_at = Column(UTCDateTime(), nullable=False)

    # Operation details for history display
    # - search: {query: "restaurant", location: "Lyon", results_count: 5}
    event_metadata = Column("metadata", JSON, nullable=False, default=dict)

    # Serves count_since range scans and newest-first history
    __table_args__ = (
        Index(
            "idx_consumption_account_kind_time", "account_id", "kind", "occurred_at"
        ),
    )
