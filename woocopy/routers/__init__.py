"""
API Routers for WooCopy
"""
from .connection import router as connection_router
from .business import router as business_router
from .products import router as products_router
from .generate import router as generate_router
from .settings import router as settings_router
from .export_csv import router as export_csv_router

__all__ = [
    "connection_router",
    "business_router",
    "products_router",
    "generate_router",
    "settings_router",
    "export_csv_router",
]
