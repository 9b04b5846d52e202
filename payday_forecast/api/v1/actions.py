"""POST /v1/actions - apply a reducer action to a snapshot"""

import time
import logging
from fastapi import APIRouter, HTTPException, Request

from payday_forecast.api.v1.schemas import ActionRequest, ActionResponse, SnapshotSchema, PaydayRecordSchema
from payday_forecast.api.dependencies import get_request_id
from payday_forecast.domain.actions import reduce
from payday_forecast.domain.models import Action
from payday_forecast.domain.exceptions import (
    BillAlreadyPaidError,
    DuplicateBillError,
    InvalidActionError,
    InvalidFrequencyError,
    UnknownBillError,
)
from payday_forecast.infrastructure.observability.metrics import action_counter
from payday_forecast.infrastructure.observability.logging import log_action

router = APIRouter()


@router.post("/actions", response_model=ActionResponse)
def apply_action(request_body: ActionRequest, request: Request):
    """
    Apply ADD_BILL, MARK_BILL_PAID or CONFIRM_PAYDAY.

    Returns:
        The next snapshot, plus the new PaydayRecord for CONFIRM_PAYDAY
    """
    start_time = time.time()
    request_id = get_request_id(request)
    action_name = request_body.type.value

    action = Action(
        type=request_body.type,
        bill=request_body.bill.to_domain() if request_body.bill else None,
        bill_id=request_body.bill_id,
        pay_date=request_body.pay_date,
        settle_bill_ids=tuple(request_body.settle_bill_ids),
    )

    try:
        result = reduce(request_body.snapshot.to_domain(), action)
    except UnknownBillError as e:
        action_counter.labels(action=action_name, outcome="rejected").inc()
        logging.warning(f"Unknown bill: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))
    except DuplicateBillError as e:
        action_counter.labels(action=action_name, outcome="rejected").inc()
        logging.warning(f"Duplicate bill: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))
    except (BillAlreadyPaidError, InvalidActionError, InvalidFrequencyError) as e:
        action_counter.labels(action=action_name, outcome="rejected").inc()
        logging.warning(f"Action rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    action_counter.labels(action=action_name, outcome="applied").inc()
    log_action(request_id, action_name, "applied", duration_ms)

    return ActionResponse(
        snapshot=SnapshotSchema.from_domain(result.snapshot),
        record=PaydayRecordSchema.from_domain(result.record) if result.record else None,
    )
