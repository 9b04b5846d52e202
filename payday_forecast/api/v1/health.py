"""POST /v1/health-score - budget health grade"""

import time
import logging
from fastapi import APIRouter, HTTPException, Request

from payday_forecast.api.v1.schemas import HealthScoreRequest, HealthScoreResponse
from payday_forecast.api.dependencies import get_request_id
from payday_forecast.domain.health import score
from payday_forecast.domain.exceptions import InvalidFrequencyError
from payday_forecast.infrastructure.observability.metrics import record_health_grade
from payday_forecast.infrastructure.observability.logging import log_health_score

router = APIRouter()


@router.post("/health-score", response_model=HealthScoreResponse)
def create_health_score(request_body: HealthScoreRequest, request: Request):
    """
    Grade budget health from income vs committed obligations.

    Returns:
        Grade A-F with the monthly totals behind it; ratio is null
        when there is no income to compare against
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = score(request_body.snapshot.to_domain(), horizon_days=request_body.horizon_days)
    except InvalidFrequencyError as e:
        logging.warning(f"Health score rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_health_grade(result.grade.value)
    log_health_score(request_id, result.grade.value, result.ratio_defined, duration_ms)

    return HealthScoreResponse.from_domain(result)
