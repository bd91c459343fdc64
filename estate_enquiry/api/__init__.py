from fastapi import APIRouter
from .inquiries_routes import router as inquiries_router
from .admin_inquiries_routes import router as admin_inquiries_router
from .auth_routes import router as auth_router

router = APIRouter()
router.include_router(inquiries_router)
router.include_router(admin_inquiries_router)
router.include_router(auth_router)
