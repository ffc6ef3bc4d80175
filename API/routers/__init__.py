from .customers import router as customers_router
from .billing import router as billing_router
from .reports import router as reports_router
from .assistant import router as assistant_router

__all__ = ['customers_router', 'billing_router', 'reports_router', 'assistant_router']
