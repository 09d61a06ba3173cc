# app/api/routes/root_routes.py
from fastapi import APIRouter

router = APIRouter()


@router.get("/api/health")
async def health():
    return {"ok": True}
