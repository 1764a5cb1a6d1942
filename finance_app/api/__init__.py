"""
API routes for the finance calculators.
"""

from fastapi import APIRouter

from finance_app.api import calculator, finance, tax

router = APIRouter()

# Include sub-routers
router.include_router(calculator.router, prefix="/calculator", tags=["calculator"])
router.include_router(tax.router, prefix="/tax", tags=["tax"])
router.include_router(finance.router, prefix="/finance", tags=["finance"])
