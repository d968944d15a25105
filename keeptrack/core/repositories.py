# keeptrack/core/repositories.py

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from keeptrack.models import User, Asset, MaintenanceRecord


# -------------------------------
# Users
# -------------------------------

class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def create(self, name: str, email: str, password_hash: str) -> User:
        user = User(name=name, email=email, password_hash=password_hash)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user


# -------------------------------
# Assets
# -------------------------------

class AssetRepository:
    """
    Every query is scoped by the owning user id.
    """

    def __init__(self, db: Session):
        self.db = db

    def _owned(self, asset_id: int, user_id: int):
        return self.db.query(Asset).filter(Asset.id == asset_id, Asset.user_id == user_id)

    def create(self, user_id: int, name: str, description: Optional[str] = None) -> Asset:
        asset = Asset(user_id=user_id, name=name, description=description)
        self.db.add(asset)
        self.db.commit()
        self.db.refresh(asset)
        return asset

    def find_by_id(self, asset_id: int, user_id: int) -> Optional[Asset]:
        return self._owned(asset_id, user_id).first()

    def find_all_by_user_id(self, user_id: int) -> List[Asset]:
        return (
            self.db.query(Asset)
            .filter(Asset.user_id == user_id)
            .order_by(Asset.name.asc(), Asset.id.asc())
            .all()
        )

    def update(self, asset_id: int, user_id: int, fields: dict) -> Optional[Asset]:
        if not fields:
            return self.find_by_id(asset_id, user_id)

        values = dict(fields, updated_at=func.now())
        updated = self._owned(asset_id, user_id).update(values, synchronize_session=False)
        self.db.commit()
        if not updated:
            return None
        return self.find_by_id(asset_id, user_id)

    def delete(self, asset_id: int, user_id: int) -> bool:
        # Records go with the asset through ON DELETE CASCADE.
        deleted = self._owned(asset_id, user_id).delete(synchronize_session=False)
        self.db.commit()
        return deleted > 0


# -------------------------------
# Maintenance Records
# -------------------------------

class MaintenanceRecordRepository:
    """
    Records carry no user id. Callers verify ownership through the asset;
    mutations additionally restrict themselves to the caller's assets.
    """

    def __init__(self, db: Session):
        self.db = db

    def _owned(self, record_id: int, user_id: int):
        owned_assets = select(Asset.id).where(Asset.user_id == user_id)
        return self.db.query(MaintenanceRecord).filter(
            MaintenanceRecord.id == record_id,
            MaintenanceRecord.asset_id.in_(owned_assets)
        )

    def create(self, **fields) -> MaintenanceRecord:
        record = MaintenanceRecord(**fields)
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def find_by_id(self, record_id: int) -> Optional[MaintenanceRecord]:
        return self.db.query(MaintenanceRecord).filter(MaintenanceRecord.id == record_id).first()

    def find_all_by_asset_id(self, asset_id: int) -> List[MaintenanceRecord]:
        return (
            self.db.query(MaintenanceRecord)
            .filter(MaintenanceRecord.asset_id == asset_id)
            .order_by(
                MaintenanceRecord.service_date.desc(),
                MaintenanceRecord.created_at.desc(),
                MaintenanceRecord.id.desc()
            )
            .all()
        )

    def update(self, record_id: int, user_id: int, fields: dict) -> Optional[MaintenanceRecord]:
        if not fields:
            return self.find_by_id(record_id)

        values = dict(fields, updated_at=func.now())
        updated = self._owned(record_id, user_id).update(values, synchronize_session=False)
        self.db.commit()
        if not updated:
            return None
        return self.find_by_id(record_id)

    def delete(self, record_id: int, user_id: int) -> bool:
        deleted = self._owned(record_id, user_id).delete(synchronize_session=False)
        self.db.commit()
        return deleted > 0

    def find_upcoming_by_user_id(self, user_id: int) -> list:
        """
        Latest record per (asset, service type) among the user's assets,
        keeping those with a next maintenance date, soonest first.
        Equal service dates are broken by the highest id.
        Returns (MaintenanceRecord, asset_name) rows.
        """
        ranked = (
            self.db.query(
                MaintenanceRecord.id.label("record_id"),
                Asset.name.label("asset_name"),
                func.row_number().over(
                    partition_by=[MaintenanceRecord.asset_id, MaintenanceRecord.service_type],
                    order_by=[MaintenanceRecord.service_date.desc(), MaintenanceRecord.id.desc()]
                ).label("rn")
            )
            .join(Asset, MaintenanceRecord.asset_id == Asset.id)
            .filter(Asset.user_id == user_id)
            .subquery()
        )

        return (
            self.db.query(MaintenanceRecord, ranked.c.asset_name)
            .join(ranked, MaintenanceRecord.id == ranked.c.record_id)
            .filter(ranked.c.rn == 1, MaintenanceRecord.next_maintenance_date.isnot(None))
            .order_by(
                MaintenanceRecord.next_maintenance_date.asc(),
                ranked.c.asset_name.asc(),
                MaintenanceRecord.service_type.asc()
            )
            .all()
        )
