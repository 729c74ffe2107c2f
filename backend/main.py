from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from logging_config import setup_logging
from routers import health, countries, selection
from services.errors import CountryFinderError
from services.session_service import get_session

logger = setup_logging(settings.log_level)

app = FastAPI(title="Country Finder", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(countries.router)
app.include_router(selection.router)


@app.exception_handler(CountryFinderError)
async def country_finder_error_handler(request: Request, exc: CountryFinderError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.get("/")
async def root():
    return {
        "name": "Country Finder API",
        "version": "0.1.0",
        "endpoints": ["/health", "/countries", "/selection"],
    }


@app.on_event("startup")
async def startup():
    get_session().start_initial_load()
    logger.info("Country Finder API is running")


@app.on_event("shutdown")
async def shutdown():
    from utils.llm_client import close_client
    await close_client()
