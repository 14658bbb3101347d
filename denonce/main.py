from fastapi import FastAPI, Request, status
from contextlib import asynccontextmanager
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .core.config import settings
from .core.logging import get_logger
from .database import Base, SessionLocal, engine
from .exceptions import DenonceError
from .routers import declarations, admin_auth, admin_catalog, admin_reports, administrators
from . import seed

API_TITLE = "API Dénonciation Anonyme"
API_VERSION = "1.0.0"

logger = get_logger("denonce")


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    if settings.SEED_ON_STARTUP:
        db = SessionLocal()
        try:
            seed.seed(db)
        finally:
            db.close()
    logger.info("%s %s ready", API_TITLE, API_VERSION)
    yield


app = FastAPI(
    title=API_TITLE,
    version=API_VERSION,
    description="API pour la plateforme de dénonciation anonyme",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DenonceError)
async def denonce_error_handler(request: Request, exc: DenonceError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.__class__.__name__)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Champs manquants ou invalides.", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Erreur interne du serveur."},
    )


@app.get("/")
def root():
    return {
        "message": API_TITLE,
        "version": API_VERSION,
        "endpoints": {
            "public": "/api/declarations",
            "admin": "/api/admin",
            "docs": "/docs",
        },
    }


app.include_router(declarations.router, prefix="/api")
app.include_router(admin_auth.router, prefix="/api")
app.include_router(admin_catalog.router, prefix="/api")
app.include_router(admin_reports.router, prefix="/api")
app.include_router(administrators.router, prefix="/api")
