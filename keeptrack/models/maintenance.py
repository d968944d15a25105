# keeptrack/models/maintenance.py

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Numeric, ForeignKey, Index
from sqlalchemy.sql import func
from . import Base


class MaintenanceRecord(Base):
    """
    A logged service event for an asset, optionally predicting the next one.
    Ownership is transitive: records carry no user id, only their asset's.
    """
    __tablename__ = "maintenance_records"

    id = Column(Integer, primary_key=True, index=True)
    asset_id = Column(
        Integer,
        ForeignKey("assets.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    service_type = Column(String(255), nullable=False)
    service_date = Column(Date, nullable=False, index=True)
    description = Column(Text, nullable=True)
    cost = Column(Numeric(10, 2), nullable=True)
    performed_by = Column(String(255), nullable=True)
    next_maintenance_date = Column(Date, nullable=True, index=True)
    next_maintenance_notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), nullable=False)

    __table_args__ = (
        # Serves the latest-record-per-(asset, service type) lookup.
        Index(
            "idx_maintenance_asset_service_type_date_desc",
            asset_id,
            service_type,
            service_date.desc()
        ),
    )
