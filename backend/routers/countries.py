from fastapi import APIRouter, Depends, HTTPException

from models.country import Country
from models.session import CountryListResponse, SearchTermRequest
from services import country_service
from services.session_service import SessionController, get_session

router = APIRouter(prefix="/countries", tags=["countries"])


def _list_response(session: SessionController) -> CountryListResponse:
    state = session.state
    countries = session.filtered_countries
    return CountryListResponse(
        countries=countries,
        search_term=state.search_term,
        status=state.status,
        is_loading=state.is_loading,
        error=state.error,
        no_results=bool(state.search_term) and not countries,
    )


@router.get("", response_model=CountryListResponse)
async def list_countries(session: SessionController = Depends(get_session)):
    """Current filtered view. The search term only changes through PUT /countries/search."""
    return _list_response(session)


@router.put("/search", response_model=CountryListResponse)
async def update_search_term(
    req: SearchTermRequest,
    session: SessionController = Depends(get_session),
):
    session.set_search_term(req.term)
    return _list_response(session)


@router.get("/search/{name}", response_model=list[Country])
async def search_countries(name: str):
    return await country_service.search_country_by_name(name)


@router.get("/{code}", response_model=Country)
async def get_country(code: str, session: SessionController = Depends(get_session)):
    country = country_service.get_by_code(session.state.countries, code)
    if not country:
        raise HTTPException(status_code=404, detail="Country not found")
    return country
