# backend/paracal/models/__init__.py
# IMPORTANT: Use Base from paracal.db since all models import from paracal.db
from paracal.db import Base

# import all model modules so tables get registered on Base.metadata
from .employee import Employee
from .leave_event import LeaveEvent, LEAVE_TYPES
from .company_holiday import CompanyHoliday
from .cronjob_config import CronjobConfig


__all__ = [
    "Base",
    "Employee",
    "LeaveEvent",
    "LEAVE_TYPES",
    "CompanyHoliday",
    "CronjobConfig",
]
