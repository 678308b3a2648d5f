"""API version 1 routes."""

from fastapi import APIRouter

from hsa.api.v1 import account, auth, card, categories, transactions

router = APIRouter(prefix="/api/v1")

# Include routers
router.include_router(auth.router)
router.include_router(account.router)
router.include_router(card.router)
router.include_router(transactions.router)
router.include_router(categories.router)
