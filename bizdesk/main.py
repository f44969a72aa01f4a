from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
import logging

# Import database components
from bizdesk.database.database import sync_engine, Base

# Import middleware
from bizdesk.common.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware

# Import routers
from bizdesk.modules.auth.router import auth_router
from bizdesk.modules.products.router import product_router, product_category_router
from bizdesk.modules.customers.router import router as customers_router
from bizdesk.modules.sales.router import router as sales_router, audit_router as sales_audit_router
from bizdesk.modules.expenses.router import router as expenses_router, category_router as expense_categories_router
from bizdesk.modules.transactions.router import router as transactions_router
from bizdesk.modules.deposits.router import router as deposits_router
from bizdesk.modules.files.router import router as files_router, folder_router
from bizdesk.modules.settings.router import router as settings_router
from bizdesk.modules.staff.router import router as staff_router
from bizdesk.modules.dashboard.router import router as dashboard_router
from bizdesk.modules.reports.routers import (
    sales_router as sales_reports_router,
    inventory_router as inventory_reports_router,
    expenses_router as expense_reports_router
)

# Import models for table creation
import bizdesk.modules.auth.models
import bizdesk.modules.products.models
import bizdesk.modules.customers.models
import bizdesk.modules.sales.models
import bizdesk.modules.expenses.models
import bizdesk.modules.transactions.models
import bizdesk.modules.deposits.models
import bizdesk.modules.files.models
import bizdesk.modules.settings.models
import bizdesk.modules.staff.models

from bizdesk.core.config import settings

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.ENVIRONMENT == "production" else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# FastAPI app
app = FastAPI(
    title="BizDesk API",
    description="Small-business management API: sales with audit approval, inventory, expenses, customers and documents",
    version="1.0.0",
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None
)

# Add middleware (order matters!)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Add your frontend URLs
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router, prefix="/auth", tags=["Auth"])
app.include_router(product_router)
app.include_router(product_category_router)
app.include_router(customers_router)
app.include_router(sales_router)
app.include_router(sales_audit_router)
app.include_router(expenses_router)
app.include_router(expense_categories_router)
app.include_router(transactions_router)
app.include_router(deposits_router)
app.include_router(files_router)
app.include_router(folder_router)
app.include_router(settings_router)
app.include_router(staff_router)
app.include_router(dashboard_router)
app.include_router(sales_reports_router, prefix="/api/v1")
app.include_router(inventory_reports_router, prefix="/api/v1")
app.include_router(expense_reports_router, prefix="/api/v1")

# Create database tables (only for development - use migrations in production)
if settings.ENVIRONMENT == "development":
    Base.metadata.create_all(bind=sync_engine)

@app.get("/")
async def read_root():
    return {
        "message": "BizDesk API is running",
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT
    }

@app.get("/health")
async def health_check():
    return {"status": "healthy", "environment": settings.ENVIRONMENT}

@app.on_event("startup")
async def startup_event():
    logger.info("BizDesk API starting up...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    if settings.ENVIRONMENT == "development":
        from bizdesk.modules.files.storage import get_storage
        try:
            get_storage().ensure_bucket()
        except Exception as e:
            logger.warning(f"MinIO bucket check skipped or failed: {e}")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("BizDesk API shutting down...")
