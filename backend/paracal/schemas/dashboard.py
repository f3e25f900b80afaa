# backend/paracal/schemas/dashboard.py
from typing import Dict, List

from .common import CamelModel


class MonthlyStats(CamelModel):
    total_events: int
    total_employees: int
    total_business_days: int
    most_common_type: str  # raw leave-type key, or "N/A"


class EmployeeRankingItem(CamelModel):
    name: str
    total_events: int
    total_business_days: int
    event_types: Dict[str, int]


class DashboardSummary(CamelModel):
    monthly_stats: MonthlyStats
    employee_ranking: List[EmployeeRankingItem]
