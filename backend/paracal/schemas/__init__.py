# backend/paracal/schemas/__init__.py

# Employees
from .employee import EmployeeCreate, EmployeeUpdate, EmployeeOut

# Leave events
from .event import EventCreate, EventUpdate, EventOut

# Company holidays
from .company_holiday import (
    CompanyHolidayCreate,
    CompanyHolidayBulkCreate,
    CompanyHolidayUpdate,
    CompanyHolidayOut,
    HolidayCheck,
)

# Notification schedules
from .cronjob import CronjobCreate, CronjobUpdate, CronjobOut, CronjobTestRequest, ApiResponse

# Dashboard
from .dashboard import DashboardSummary

__all__ = [
    "EmployeeCreate", "EmployeeUpdate", "EmployeeOut",
    "EventCreate", "EventUpdate", "EventOut",
    "CompanyHolidayCreate", "CompanyHolidayBulkCreate", "CompanyHolidayUpdate",
    "CompanyHolidayOut", "HolidayCheck",
    "CronjobCreate", "CronjobUpdate", "CronjobOut", "CronjobTestRequest", "ApiResponse",
    "DashboardSummary",
]
