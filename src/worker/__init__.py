"""Background workers for lesson billing"""
from .monthly_invoicing import MonthlyInvoiceWorker

__all__ = ["MonthlyInvoiceWorker"]
