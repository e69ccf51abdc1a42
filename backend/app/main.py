"""FastAPI entry point"""
import os
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.logging_config import configure_logging

configure_logging(os.getenv("LOG_LEVEL", "INFO"))
from fastapi.middleware.cors import CORSMiddleware

from app.api import activity, auth, customers, orders, products, route_calendar, trucks, users
from app.core.errors import AppError, PersistenceError

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("startup")
    yield


app = FastAPI(
    title="Norbalat Ordini",
    description="Order management and truck loading for a dairy distributor",
    version="2.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        log.error("request_failed", path=request.url.path, method=request.method, code=exc.code, error=exc.message)
    else:
        log.info("request_rejected", path=request.url.path, method=request.method, code=exc.code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "code": exc.code})


@app.exception_handler(SQLAlchemyError)
async def db_error_handler(request: Request, exc: SQLAlchemyError):
    log.error("database_error", path=request.url.path, method=request.method, exc_info=exc)
    return JSONResponse(
        status_code=PersistenceError.status_code,
        content={"detail": "Database error", "code": PersistenceError.code},
    )


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(customers.router)
app.include_router(products.router)
app.include_router(orders.router)
app.include_router(trucks.router)
app.include_router(route_calendar.router)
app.include_router(activity.router)


@app.get("/health")
def health():
    return {"status": "ok"}
