from datetime import datetime, timezone

from fastapi import APIRouter

from workout_tracker.schemas.workouts import HealthOut

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    return {"ok": True}


@router.get("/rpc/healthcheck", response_model=HealthOut)
def healthcheck():
    return HealthOut(status="ok", timestamp=datetime.now(timezone.utc))
