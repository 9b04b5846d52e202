"""Snapshot reducer - applies user actions to produce the next snapshot"""

from dataclasses import replace
from datetime import date
from typing import Iterable, Optional, Tuple

from payday_forecast.domain.exceptions import (
    BillAlreadyPaidError,
    DuplicateBillError,
    InvalidActionError,
    UnknownBillError,
)
from payday_forecast.domain.models import (
    Action,
    ActionResult,
    ActionType,
    Bill,
    BudgetSnapshot,
    PaydayRecord,
)
from payday_forecast.utils.date_utils import advance


def _settle(bill: Bill) -> Bill:
    """Bill state after one payment: one-offs close, recurring bills move to the next cycle"""
    if bill.is_once_off:
        if bill.paid:
            raise BillAlreadyPaidError(f"Bill '{bill.id}' is already paid")
        return replace(bill, paid=True)
    return replace(bill, due_date=advance(bill.due_date, bill.frequency))


def _settle_many(snapshot: BudgetSnapshot, bill_ids: Iterable[str]) -> BudgetSnapshot:
    bill_ids = list(bill_ids)
    by_id = {bill.id: bill for bill in snapshot.bills}
    for bill_id in bill_ids:
        if bill_id not in by_id:
            raise UnknownBillError(f"Bill '{bill_id}' not found")

    balance = snapshot.balance
    settled = []
    for bill in snapshot.bills:
        if bill.id in bill_ids:
            settled.append(_settle(bill))
            balance -= bill.amount
        else:
            settled.append(bill)
    return replace(snapshot, balance=balance, bills=tuple(settled))


def add_bill(snapshot: BudgetSnapshot, bill: Bill) -> BudgetSnapshot:
    if snapshot.find_bill(bill.id) is not None:
        raise DuplicateBillError(f"Bill '{bill.id}' already exists")
    bill.recurrence()  # validates frequency
    return replace(snapshot, bills=snapshot.bills + (bill,))


def mark_bill_paid(snapshot: BudgetSnapshot, bill_id: str) -> BudgetSnapshot:
    """Debit the bill amount and mark it settled for the current cycle"""
    return _settle_many(snapshot, [bill_id])


def confirm_payday(
    snapshot: BudgetSnapshot,
    pay_date: Optional[date] = None,
    settle_bill_ids: Iterable[str] = (),
) -> Tuple[BudgetSnapshot, PaydayRecord]:
    """
    Credit one pay cycle and settle the bills paid out of it.

    Flow:
    1. Credit pay_cycle.amount to the balance
    2. Settle each listed bill (debit + mark paid / roll due date forward)
    3. Move next_pay_date one cycle past pay_date
    4. Create the PaydayRecord for this payday

    Returns:
        (next snapshot, new PaydayRecord)
    """
    pay_cycle = snapshot.pay_cycle
    pay_date = pay_date if pay_date is not None else pay_cycle.next_pay_date
    settle_bill_ids = tuple(dict.fromkeys(settle_bill_ids))

    credited = replace(snapshot, balance=snapshot.balance + pay_cycle.amount)
    settled = _settle_many(credited, settle_bill_ids)
    next_snapshot = replace(
        settled,
        pay_cycle=replace(pay_cycle, next_pay_date=advance(pay_date, pay_cycle.frequency)),
    )

    record = PaydayRecord(
        date=pay_date,
        balance_after=next_snapshot.balance,
        bills_settled=frozenset(settle_bill_ids),
    )
    return next_snapshot, record


def reduce(snapshot: BudgetSnapshot, action: Action) -> ActionResult:
    """Main entry point: dispatch an action to its transition"""
    if action.type == ActionType.ADD_BILL:
        if action.bill is None:
            raise InvalidActionError("ADD_BILL requires a bill")
        return ActionResult(snapshot=add_bill(snapshot, action.bill))

    if action.type == ActionType.MARK_BILL_PAID:
        if action.bill_id is None:
            raise InvalidActionError("MARK_BILL_PAID requires a bill_id")
        return ActionResult(snapshot=mark_bill_paid(snapshot, action.bill_id))

    if action.type == ActionType.CONFIRM_PAYDAY:
        next_snapshot, record = confirm_payday(snapshot, action.pay_date, action.settle_bill_ids)
        return ActionResult(snapshot=next_snapshot, record=record)

    raise InvalidActionError(f"Unsupported action: {action.type}")
