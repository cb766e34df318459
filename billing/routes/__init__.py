from fastapi import APIRouter
from .barcode_routes import router as barcode_router
from .payment_routes import router as payment_router

# Create main router
router = APIRouter(prefix="/billing")

# Include sub-routers
router.include_router(barcode_router)
router.include_router(payment_router)
