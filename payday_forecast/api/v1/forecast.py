"""POST /v1/forecast - day-by-day balance projection"""

import time
import logging
from fastapi import APIRouter, HTTPException, Request

from payday_forecast.api.v1.schemas import ForecastRequest, ForecastResponse, ForecastPointSchema
from payday_forecast.api.dependencies import get_request_id
from payday_forecast.domain.forecast import project, lowest_point
from payday_forecast.domain.exceptions import InvalidFrequencyError, InvalidRangeError
from payday_forecast.infrastructure.observability.metrics import record_projection
from payday_forecast.infrastructure.observability.logging import log_forecast

router = APIRouter()


@router.post("/forecast", response_model=ForecastResponse)
def create_forecast(request_body: ForecastRequest, request: Request):
    """
    Project the balance over the requested horizon.

    Flow:
    1. Convert the posted snapshot to domain types
    2. Run the forecast engine
    3. Locate the tightest day
    4. Record metrics/logs and return every point
    """
    start_time = time.time()
    request_id = get_request_id(request)

    snapshot = request_body.snapshot.to_domain()
    as_of = request_body.as_of or snapshot.as_of

    try:
        points = project(snapshot, as_of=as_of, horizon_days=request_body.horizon_days)
    except (InvalidFrequencyError, InvalidRangeError) as e:
        logging.warning(f"Forecast rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    lowest = lowest_point(points)

    duration_ms = (time.time() - start_time) * 1000
    record_projection(lowest.projected_balance)
    log_forecast(
        request_id,
        request_body.horizon_days,
        str(lowest.projected_balance),
        sum(len(p.events) for p in points),
        duration_ms,
    )

    return ForecastResponse(
        as_of=as_of,
        horizon_days=request_body.horizon_days,
        points=[ForecastPointSchema.from_domain(p) for p in points],
        lowest_point=ForecastPointSchema.from_domain(lowest),
    )
