'''
FastAPI application for the Hotel Index API.

The app exposes endpoints to create hotels and to query them through the
indexes declared on the hotels collection.

Available endpoints:
- POST /api/hotels: validate and create a hotel.
- GET /api/hotels/test-single-field: exact match on location.
- GET /api/hotels/test-compound: exact match on location and price.
- GET /api/hotels/test-text: full-text search over name and description.
- GET /api/hotels/test-dynamic: price comparison, creating the price index on first use.
'''

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from Database.db import HotelDB
from Database.indexes import DEFAULT_RECHECK_SECONDS, PRICE_INDEX, DynamicIndex, apply_declared_indexes

# routers
from api.hotel_routes import hotel_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- Startup ---
    hotel_db = HotelDB()   # create ONCE
    app.state.db = hotel_db.collection
    recheck_seconds = float(os.environ.get("PRICE_INDEX_RECHECK_SECONDS", DEFAULT_RECHECK_SECONDS))
    app.state.price_index = DynamicIndex(PRICE_INDEX, recheck_seconds)
    try:
        apply_declared_indexes(app.state.db)
        yield
    finally:
        # --- Shutdown ---
        hotel_db.close()


load_dotenv()
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

# Initialize FastAPI app
app = FastAPI(title="Hotel Index API", version="1.0.0", lifespan=lifespan)

app.include_router(hotel_router, prefix="/api/hotels", tags=["Hotels"])


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests as client errors."""

    logger.warning("Malformed request", extra={"path": request.url.path})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.get("/")
async def root():
    return {"message": "Welcome to the Hotel Index API"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="localhost", port=8000, reload=True)
