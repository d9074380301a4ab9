# miledesigns/api/v1/endpoints/health.py
from fastapi import APIRouter

router = APIRouter()


@router.get("/ping")
def ping():
    return {"status": "ok"}
