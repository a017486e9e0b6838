# This project was developed with assistance from AI tools.
"""Liveness endpoint: one entry per component."""

from fastapi import APIRouter
from producer_db import get_db_service
from pydantic import BaseModel

router = APIRouter()


class ServiceHealth(BaseModel):
    name: str
    status: str


@router.get("/", response_model=list[ServiceHealth])
async def health() -> list[ServiceHealth]:
    db_ok = await get_db_service().health_check()
    return [
        ServiceHealth(name="API", status="healthy"),
        ServiceHealth(name="Database", status="healthy" if db_ok else "unhealthy"),
    ]
