# backend/main.py
import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

load_dotenv()

from config import settings
from storage.base import Storage
from utils.deps import build_storage

# Router imports
from routes.users import router as users_router
from routes.products import router as products_router
from routes.categories import router as categories_router
from routes.orders import router as orders_router
from routes.cart import router as cart_router
from routes.admin import router as admin_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "Validation error: " + "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    # Malformed input -> 400 with a readable message
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request data", "error": format_validation_errors(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error", "error": str(exc)})


def create_app(storage: Optional[Storage] = None) -> FastAPI:
    app = FastAPI(title="Storefront API", version="1.0.0")

    # Storage lives for the lifetime of the app and is injected into handlers
    app.state.storage = storage if storage is not None else build_storage(settings)

    # CORS Configuration
    origins = ["http://localhost:5173", "http://127.0.0.1:5173"]
    if settings.FRONTEND_URL:
        origins.append(settings.FRONTEND_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Router registration
    app.include_router(users_router)
    app.include_router(products_router)
    app.include_router(categories_router)
    app.include_router(orders_router)
    app.include_router(cart_router)
    app.include_router(admin_router)

    @app.get("/")
    def read_root():
        return {"message": "Storefront API is running"}

    return app


app = create_app()
