import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from salesledger.core.config import settings
from salesledger.core.logging import configure_logging
from salesledger.db.mongo import connect_to_mongo, disconnect_from_mongo
from salesledger.routes import auth, clients, insights, sales, users
from salesledger.utils.sale_validation import SaleValidationError

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_to_mongo()
    yield
    await disconnect_from_mongo()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.DESCRIPTION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
    return response


def _validation_failed(errors: list) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors}
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "")
        }
        for err in exc.errors()
    ]
    return _validation_failed(errors)


@app.exception_handler(SaleValidationError)
async def sale_validation_handler(request: Request, exc: SaleValidationError):
    return _validation_failed([{"field": exc.field or "", "message": str(exc)}])


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )


@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}


@app.get("/health")
async def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


api_router = APIRouter()
api_router.add_api_route("/health", health, methods=["GET"], tags=["health"])
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(sales.router)
api_router.include_router(clients.router)
api_router.include_router(insights.router)

app.include_router(api_router, prefix=settings.API_PREFIX)
