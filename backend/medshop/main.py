"""
Medical shop backend.

Inventory, suppliers, purchase orders, point-of-sale and stock/expiry
alerts over a single collection store. Every cascade (receiving an
order, selling stock, raising alerts) runs inside one store transaction.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from medshop import __version__
from medshop.api.deps import get_store
from medshop.api.routes import alerts, analytics, auth, medicines, purchase_orders, sales, suppliers, users
from medshop.api.routes import settings as settings_routes
from medshop.core.config import configure_logging, settings
from medshop.core.exceptions import BusinessError, PharmacyError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and open the store before serving."""
    configure_logging()
    logger.info("Opening store...")
    get_store()
    logger.info(f"Store ready ({settings.STORAGE_BACKEND})")
    yield


app = FastAPI(
    title="Medical Shop API",
    description="Inventory, purchasing, sales and alerts for a single pharmacy.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Origin"],
    max_age=600,
)


@app.exception_handler(PharmacyError)
async def pharmacy_error_handler(request: Request, exc: PharmacyError):
    http_exc = BusinessError.from_domain(exc)
    return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})


app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(medicines.router, prefix="/medicines", tags=["medicines"])
app.include_router(suppliers.router, prefix="/suppliers", tags=["suppliers"])
app.include_router(purchase_orders.router, prefix="/purchase-orders", tags=["purchase-orders"])
app.include_router(sales.router, prefix="/sales", tags=["sales"])
app.include_router(alerts.router, prefix="/alerts", tags=["alerts"])
app.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
app.include_router(settings_routes.router, prefix="/settings", tags=["settings"])


@app.get("/health")
def health():
    return {"status": "ok", "version": __version__}
