import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.config import settings
from app.engine.request_handler import FeeRequestHandler
from app.routers import fees
from app.services.fee_calculator import FeeCalculator

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- Startup ---
    logger.info("Fee Calculation Service starting up...")

    calculator = FeeCalculator(settings)
    app.state.fee_calculator = calculator
    app.state.fee_request_handler = FeeRequestHandler(calculator, settings)

    logger.info(
        f"Fee rate={settings.FEE_PERCENTAGE}% | "
        f"reporting_currency={settings.REPORTING_CURRENCY} | "
        f"default_currency={settings.DEFAULT_CURRENCY}"
    )

    yield

    # --- Shutdown ---
    logger.info("Fee Calculation Service shutting down.")


app = FastAPI(
    title="Fee Calculation Service",
    description="Computes a flat percentage fee for a transaction amount.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(fees.router, tags=["Fees"])


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        type(exc).__name__,
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "An internal error occurred. Please try again later."},
    )


@app.get("/", tags=["Health"])
async def root():
    return {
        "service": "Fee Calculation Service",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }
