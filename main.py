# ==========================================================
# main.py — RetailX Smart Billing Backend
# ==========================================================

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

import settings
from admin.routes import router as admin_router
from billing.routes import router as billing_router
from errors import ERROR_STATUS_CODES, RetailError
from inventory.routes import router as inventory_router
from return_portal.routes import router as returns_router
from sales.routes import router as sales_router
from state import load_state
from storage.database import AsyncSessionLocal, create_tables

settings.configure_logging()
logger = logging.getLogger("retailx")

# ==========================================================
# ✅ FASTAPI INITIALIZATION
# ==========================================================
app = FastAPI(title="RetailX API", version="3.0")


# ==========================================================
# ✅ DATABASE TABLE CREATION + STATE LOADING
# ==========================================================
@app.on_event("startup")
async def startup_event():
    await create_tables()
    async with AsyncSessionLocal() as db:
        app.state.retail = await load_state(db)
    logger.info("🚀 RetailX billing is ready (mock gateway: %s)", settings.USE_MOCK_GATEWAY)


# ==========================================================
# ✅ DOMAIN ERRORS → HTTP
# ==========================================================
@app.exception_handler(RetailError)
async def retail_error_handler(request: Request, exc: RetailError):
    status_code = ERROR_STATUS_CODES.get(type(exc), 400)
    if status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error_type": type(exc).__name__},
    )


# ==========================================================
# ✅ GENERAL APP INFO
# ==========================================================
@app.get("/")
async def root():
    return {"message": "RetailX Smart Billing backend is running!"}


@app.get("/health")
async def health_check():
    return {"status": "healthy", "message": "RetailX API is operational"}


@app.get("/debug-routes")
async def debug_routes():
    routes = [
        {"path": route.path, "methods": sorted(getattr(route, "methods", None) or [])}
        for route in app.routes
        if getattr(route, "path", None)
    ]
    return {"total_routes": len(routes), "routes": routes}


# ==========================================================
# ✅ INCLUDE ROUTERS
# ==========================================================
app.include_router(billing_router)
app.include_router(sales_router)
app.include_router(inventory_router)
app.include_router(returns_router)
app.include_router(admin_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=False)
