import logging
from fastapi import FastAPI, Request
import uvicorn
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from core.config import settings
from core.exceptions import CocktailBookError
from core.logging_config import setup_logging
from db.database import create_db_and_tables, async_session_maker
from db.seed import seed_initial_cocktails
from routers.cocktails import router as cocktails_router
from routers.uploads import router as uploads_router, image_storage
from routers.pages import router as pages_router
from contextlib import asynccontextmanager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    await create_db_and_tables()
    if settings.seed_on_startup:
        async with async_session_maker() as session:
            await seed_initial_cocktails(session)
    logger.info("Serving uploads from %s", image_storage.upload_dir.resolve())
    yield


app = FastAPI(
    title="Cocktail Book API",
    description="API for managing cocktail recipes",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _describe(errors) -> str:
    parts = []
    for err in errors:
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{field}: {err.get('msg')}" if field else err.get("msg", "Invalid request"))
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(CocktailBookError)
async def cocktail_book_error_handler(request: Request, exc: CocktailBookError):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": _describe(exc.errors())})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


# Cocktail routes
app.include_router(cocktails_router, prefix="/api/cocktails", tags=["cocktails"])

# Image upload routes
app.include_router(uploads_router, prefix="/api", tags=["uploads"])

# Uploaded images are served back under the reserved /uploads prefix
app.mount("/uploads", StaticFiles(directory=image_storage.upload_dir), name="uploads")

# Catalog page
app.include_router(pages_router, tags=["pages"])

if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=True)
