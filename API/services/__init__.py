from .billing import BillingService
from .customers import CustomerService
from .reports import ReportService

__all__ = ['BillingService', 'CustomerService', 'ReportService']
