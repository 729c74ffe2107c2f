import time
from fastapi import APIRouter, Depends

from services.session_service import SessionController, get_session

router = APIRouter()

_start_time = time.time()


@router.get("/health")
async def health_check(session: SessionController = Depends(get_session)):
    return {
        "status": "ok",
        "uptime_seconds": round(time.time() - _start_time),
        "version": "0.1.0",
        "countries": session.state.status.value,
    }
