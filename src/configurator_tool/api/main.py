import logging

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..data.content_store import ContentStore
from .catalogue_api import router as catalogue_router
from .configurator_api import router as configurator_router
from .state import get_store

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Configurator API",
    description="Price estimates and quote requests for the product configurator",
    version=__version__
)

# Enable CORS for the website frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Errors are returned as {"error": message}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are a 400, like missing fields."""
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={"error": f"{location}: {message}" if location else message},
    )


app.include_router(configurator_router)
app.include_router(catalogue_router)


@app.get("/")
async def root():
    return {"status": "online", "message": "Configurator API Active"}


@app.get("/api/health")
async def health(store: ContentStore = Depends(get_store)):
    try:
        sites = store.list_sites()
    except OSError as e:
        logger.exception("Health check failed")
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "ok", "sites": len(sites)}
