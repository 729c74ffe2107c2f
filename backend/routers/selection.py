import logging

from fastapi import APIRouter, Depends

from models.session import SelectionResponse
from services.session_service import SessionController, get_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/selection", tags=["selection"])


def _selection_response(session: SessionController) -> SelectionResponse:
    return SelectionResponse(
        selected=session.state.selected,
        detail=session.state.detail,
    )


@router.get("", response_model=SelectionResponse)
async def get_selection(session: SessionController = Depends(get_session)):
    return _selection_response(session)


@router.put("/{code}", response_model=SelectionResponse)
async def select_country(
    code: str,
    wait: bool = False,
    session: SessionController = Depends(get_session),
):
    """Select a country. With ``wait`` the travel info fetch is awaited."""
    task = session.select_country(code)
    if task is not None and wait:
        await task
    logger.info("Selected %s (detail: %s)", code.upper(), session.state.detail.status.value)
    return _selection_response(session)


@router.delete("", response_model=SelectionResponse)
async def clear_selection(session: SessionController = Depends(get_session)):
    session.clear_selection()
    return _selection_response(session)
