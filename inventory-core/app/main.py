from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.v1.routes_alerts import router as alerts_router
from app.api.v1.routes_inventory import router as inventory_router
from app.api.v1.routes_manufacturer_orders import router as manufacturer_orders_router
from app.api.v1.routes_quotes import router as quotes_router
from app.core.errors import AppError, InventoryMarkerWriteError
from app.core.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    yield


app = FastAPI(lifespan=lifespan)

app.include_router(inventory_router)
app.include_router(manufacturer_orders_router)
app.include_router(alerts_router)
app.include_router(quotes_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    body = {"error": exc.code, "message": exc.message}
    if isinstance(exc, InventoryMarkerWriteError):
        body["orderId"] = str(exc.order_id)
        body["appliedSkus"] = exc.applied_skus
    return JSONResponse(status_code=exc.status_code, content=body)


@app.get("/health")
async def health():
    return {"status": "ok"}
