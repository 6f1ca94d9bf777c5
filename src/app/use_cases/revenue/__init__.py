"""Revenue ledger use cases"""
from .get_revenue_overview import GetRevenueOverview
from .dtos import MonthlyRevenueDTO, RevenueOverviewDTO

__all__ = [
    "GetRevenueOverview",
    "MonthlyRevenueDTO",
    "RevenueOverviewDTO",
]
