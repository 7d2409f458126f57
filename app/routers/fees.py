from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.models.response import ErrorResponse
from app.models.transaction import FeeResult

router = APIRouter()


@router.post(
    "/api/fees/calculate",
    responses={
        200: {"model": FeeResult},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def calculate_fee(request: Request) -> JSONResponse:
    """
    Compute the fee for a single transaction.

    - Fee is a flat percentage (10% by default) of `amount`, exact decimal.
    - The reported currency is always the reporting currency (EUR),
      whatever `currency` the transaction carries.
    - Invalid or absent payloads return 400 listing every failing field.
    """
    handler = request.app.state.fee_request_handler
    response = handler.handle_body(await request.body())
    return JSONResponse(status_code=response.status_code, content=response.body)
