from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
from datetime import datetime, timezone

# Load config first (triggers dotenv)
from config import STORAGE_BACKEND
from database import store, sync_monitor, backend

# Import all routers
from routes.auth import router as auth_router
from routes.dashboard import router as dashboard_router
from routes.projects import router as projects_router
from routes.financial import router as financial_router
from routes.procurement import router as procurement_router
from routes.hrms import router as hrms_router
from routes.inventory import router as inventory_router
from routes.mess import router as mess_router
from routes.ai import router as ai_router
from routes.reports import router as reports_router
from routes.backup import router as backup_router
from routes.sync import router as sync_router

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# Create the main app
app = FastAPI(title="SN Site Ledger API")

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=os.environ.get('CORS_ORIGINS', '*').split(','),
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register all routers under /api prefix
API_PREFIX = "/api"
app.include_router(auth_router,        prefix=API_PREFIX)
app.include_router(dashboard_router,   prefix=API_PREFIX)
app.include_router(projects_router,    prefix=API_PREFIX)
app.include_router(financial_router,   prefix=API_PREFIX)
app.include_router(procurement_router, prefix=API_PREFIX)
app.include_router(hrms_router,        prefix=API_PREFIX)
app.include_router(inventory_router,   prefix=API_PREFIX)
app.include_router(mess_router,        prefix=API_PREFIX)
app.include_router(ai_router,          prefix=API_PREFIX)
app.include_router(reports_router,     prefix=API_PREFIX)
app.include_router(backup_router,      prefix=API_PREFIX)
app.include_router(sync_router,        prefix=API_PREFIX)


# ── Root / Health ──────────────────────────────────────────

@app.get("/api/")
async def root():
    return {"message": "SN Site Ledger API", "version": "1.0.0"}


@app.get("/api/health")
async def health():
    return {"status": "healthy", "storage": STORAGE_BACKEND, "timestamp": datetime.now(timezone.utc).isoformat()}


# ── Startup / Shutdown ─────────────────────────────────────

@app.on_event("startup")
async def load_collections():
    await store.load_all()
    await sync_monitor.load()
    logger.info(f"Store ready on '{STORAGE_BACKEND}' backend")


@app.on_event("shutdown")
async def shutdown_storage():
    if hasattr(backend, "close"):
        backend.close()
