from fastapi import APIRouter

from ..schemas import HealthOut

router = APIRouter()


@router.get("", response_model=HealthOut)
def health() -> HealthOut:
    """Return API status."""
    return HealthOut(status="ok")
