"""POST /v1/history/* - payday history filters and period totals"""

import logging
from fastapi import APIRouter, HTTPException, Request

from payday_forecast.api.v1.schemas import (
    HistoryFilterRequest,
    HistoryFilterResponse,
    HistoryTotalsRequest,
    HistoryTotalsResponse,
    PaydayRecordSchema,
    PeriodTotalSchema,
)
from payday_forecast.api.dependencies import get_request_id
from payday_forecast.domain.history import filter_by_range, totals_by_period, latest_period
from payday_forecast.domain.exceptions import EmptyHistoryError, InvalidRangeError
from payday_forecast.infrastructure.observability.metrics import history_query_counter

router = APIRouter()


@router.post("/history/filter", response_model=HistoryFilterResponse)
def filter_history(request_body: HistoryFilterRequest, request: Request):
    """Return records dated within [start, end], in posted order"""
    records = [r.to_domain() for r in request_body.records]

    try:
        filtered = filter_by_range(records, request_body.start, request_body.end)
    except InvalidRangeError as e:
        logging.warning(f"History filter rejected: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    history_query_counter.labels(query="filter").inc()
    return HistoryFilterResponse(records=[PaydayRecordSchema.from_domain(r) for r in filtered])


@router.post("/history/totals", response_model=HistoryTotalsResponse)
def history_totals(request_body: HistoryTotalsRequest):
    """
    Bucket records into fixed-length periods.

    Returns:
        Non-empty periods only, oldest first
    """
    records = [r.to_domain() for r in request_body.records]
    totals = totals_by_period(records, request_body.period_length_days)

    history_query_counter.labels(query="totals").inc()
    return HistoryTotalsResponse(periods=[PeriodTotalSchema.from_domain(t) for t in totals])


@router.post("/history/latest", response_model=PeriodTotalSchema)
def history_latest(request_body: HistoryTotalsRequest, request: Request):
    """Most recent non-empty period; 404 when there is no history"""
    records = [r.to_domain() for r in request_body.records]

    try:
        latest = latest_period(records, request_body.period_length_days)
    except EmptyHistoryError as e:
        logging.info(f"No history: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=404, detail=str(e))

    history_query_counter.labels(query="latest").inc()
    return PeriodTotalSchema.from_domain(latest)
