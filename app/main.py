import logging

from fastapi import FastAPI
from app.database import create_db_and_tables
from app.config import settings
from app.routes import (
    pricing,
    coupons,
    checkout,
    health,
)

from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Run DB creation ONLY in local
    if settings.ENV == "local":
        create_db_and_tables()
    yield

app = FastAPI(title="Storefront Pricing API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(pricing.router, prefix="/pricing", tags=["Pricing"])
app.include_router(coupons.router, prefix="/coupons", tags=["Coupons"])
app.include_router(checkout.router, prefix="/checkout", tags=["Checkout"])
app.include_router(health.router, prefix="/health", tags=["Health"])


@app.get("/")
def root():
    return {
        "pricing": ["/pricing/breakdown"],
        "coupons": ["/coupons/available", "/coupons/offers"],
        "checkout": ["/checkout/commit"],
        "health": ["/health/check"],
    }
