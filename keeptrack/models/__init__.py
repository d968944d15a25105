# keeptrack/models/__init__.py

from sqlalchemy.orm import declarative_base


Base = declarative_base()


from keeptrack.models.user import User  # noqa: E402
from keeptrack.models.asset import Asset  # noqa: E402
from keeptrack.models.maintenance import MaintenanceRecord  # noqa: E402


__all__ = ["Base", "User", "Asset", "MaintenanceRecord"]
