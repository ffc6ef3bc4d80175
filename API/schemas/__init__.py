from .customer import (
    CustomerResponse, CustomerListItem, CustomerListResponse,
    CustomerUpdate, CustomerImportRow, BulkImportResponse,
)
from .billing import (
    RecordPaymentBody, PaymentResponse, RecordPaymentResponse,
    BandwidthStat, AggregateStatistics,
)
from .report import (
    PendingReportItem, PendingReportResponse,
    PaidReportItem, PaidReportResponse,
    UnpaidReportResponse, PeriodReportDetail, PeriodFinancialReport,
)
