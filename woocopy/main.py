# woocopy/main.py - WOOCOPY API
# Handles: store connection, business profile, product selection,
# description generation, push to WooCommerce, CSV export

import logging

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import settings
from .routers import (
    business_router,
    connection_router,
    export_csv_router,
    generate_router,
    products_router,
    settings_router,
)
from .services import Workspace, get_workspace

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="WooCopy",
    description="AI-generated product descriptions for WooCommerce",
    version=__version__
)

# CORS middleware - ALLOW ALL
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(connection_router)
app.include_router(business_router)
app.include_router(products_router)
app.include_router(generate_router)
app.include_router(settings_router)
app.include_router(export_csv_router)


# ============================================================
# HEALTH CHECK
# ============================================================

@app.get("/healthz")
async def healthz(workspace: Workspace = Depends(get_workspace)):
    """Health check endpoint"""
    return {
        "status": "ok",
        "version": __version__,
        "store_connected": workspace.catalog.configured,
        "generator_configured": bool(workspace.store.load_generator_key()),
        "run_state": workspace.controller.state.value,
    }


# ============================================================
# ERROR HANDLERS
# ============================================================

@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """Handle HTTP exceptions"""
    logger.error(f"HTTP {exc.status_code}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle general exceptions"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
