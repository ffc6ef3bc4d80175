"""
ISP Billing API - Main Application

Subscriber ledger, payment recording and profit reporting for a
reseller of a wholesale bandwidth provider:
- /api/customers/...  → Ledger, payments, imports
- /api/stats, /api/pricing → Dashboard statistics
- /api/reports/...    → Pending / paid / unpaid lists, financial report
- /api/assistant/...  → Natural-language questions over the stats
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from database import init_db, db
from database.seed import seed_demo_customers
from core.config import settings, configure_logging
from routers import customers_router, billing_router, reports_router, assistant_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    configure_logging()
    logger.info("🚀 Starting ISP Billing API...")

    try:
        init_db()
        logger.info("✅ Database initialized")

        if settings.seed_demo_data:
            with db.get_session() as session:
                seed_demo_customers(session)

    except SQLAlchemyError as e:
        logger.error(f"❌ Database initialization failed: {e}")
        raise

    logger.info("✅ ISP Billing API started successfully!")

    yield

    logger.info("👋 Shutting down ISP Billing API...")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="""
    ISP subscriber billing reconciliation.

    * **Customers** - Ledger, edits, CSV / JSON import, payments
    * **Stats** - Profit, company payable, paid / pending by tier and area
    * **Reports** - Pending, paid, unpaid, financial report, Excel export
    * **Assistant** - Questions about the business in plain language

    Every "current period" calculation accepts an optional `as_of` (YYYY-MM-DD).
    """,
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== EXCEPTION HANDLERS ====================

@app.exception_handler(SQLAlchemyError)
async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Storage failure",
            "detail": str(exc) if settings.debug else None
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Internal server error",
            "detail": str(exc) if settings.debug else None
        }
    )


# ==================== HEALTH ====================

@app.get("/", tags=["Health"])
async def root():
    return {
        "message": settings.app_name,
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    try:
        with db.get_session() as session:
            session.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except SQLAlchemyError as e:
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": "disconnected", "error": str(e)}
        )


# ==================== API ROUTES ====================

app.include_router(customers_router, prefix="/api/customers", tags=["Customers"])
app.include_router(billing_router, prefix="/api", tags=["Stats & Pricing"])
app.include_router(reports_router, prefix="/api/reports", tags=["Reports"])
app.include_router(assistant_router, prefix="/api/assistant", tags=["Assistant"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
