from datetime import date

import pytest

from conftest import STUDENT_ID, make_invoice
from playschool.models.fee import FeePeriod, FeeStatus, FeeType
from playschool.models.student import FeePlan
from playschool.services.fee_plans import (
    ANNUAL_SETTLED_REASON,
    PARTIAL_PAYMENT_REASON,
    derive_fee_plan,
    infer_period,
    last_payment,
    monthly_amount,
    outstanding_total,
    paid_history,
    quarterly_amount,
)


def derive(invoices, plan, today, fee=15000):
    return derive_fee_plan(STUDENT_ID, fee, invoices, plan, today)


@pytest.mark.parametrize("fee", [15000, 18000, 20000, 17999])
def test_plan_amounts_add_up_to_annual_fee(fee):
    assert quarterly_amount(fee) * 4 == fee
    assert abs(monthly_amount(fee) * 12 - fee) <= 6


def test_monthly_amount_rounds_half_up():
    assert monthly_amount(15000) == 1250
    assert monthly_amount(20000) == 1667
    assert monthly_amount(15006) == 1251  # 1250.5


def test_new_student_in_april_sees_only_april():
    rows = derive([], FeePlan.MONTHLY, date(2024, 4, 15))

    assert len(rows) == 1
    row = rows[0]
    assert row.title == "Tuition Fee - Apr 2024"
    assert row.amount == 1250
    assert row.status == FeeStatus.PENDING
    assert row.due_date == date(2024, 4, 10)
    assert row.period == FeePeriod.APR
    assert row.is_virtual
    assert row.blocked_reason is None
    assert row.virtual_id == "virt-Apr-2024"


def test_annual_plan_row():
    rows = derive([], FeePlan.ANNUAL, date(2024, 9, 1))

    assert [r.title for r in rows] == ["Annual Fee 2024-2025"]
    assert rows[0].amount == 15000
    assert rows[0].due_date == date(2024, 4, 10)


def test_quarterly_rows_in_march_cover_whole_session():
    rows = derive([], FeePlan.QUARTERLY, date(2025, 3, 1))

    assert [r.title for r in rows] == [
        "Tuition Fee - Q1 (Apr-Jun)",
        "Tuition Fee - Q2 (Jul-Sep)",
        "Tuition Fee - Q3 (Oct-Dec)",
        "Tuition Fee - Q4 (Jan-Mar)",
    ]
    assert rows[-1].due_date == date(2025, 1, 10)
    assert all(r.amount == 3750 for r in rows)


def test_monthly_payment_blocks_annual():
    invoices = [
        make_invoice("Tuition Fee - Apr 2024", date(2024, 4, 10), fee_type=FeeType.MONTHLY,
                     status=FeeStatus.PAID, period=FeePeriod.APR),
    ]
    rows = derive(invoices, FeePlan.ANNUAL, date(2024, 6, 15))

    assert len(rows) == 1
    assert rows[0].blocked_reason == PARTIAL_PAYMENT_REASON
    assert outstanding_total(rows) == 0


def test_processing_quarter_also_blocks_annual():
    invoices = [
        make_invoice("Tuition Fee - Q1 (Apr-Jun)", date(2024, 4, 10), fee_type=FeeType.QUARTERLY,
                     status=FeeStatus.PROCESSING, period=FeePeriod.Q1),
    ]
    rows = derive(invoices, FeePlan.ANNUAL, date(2024, 6, 15))

    assert rows[0].blocked_reason == PARTIAL_PAYMENT_REASON


@pytest.mark.parametrize("plan, expected_rows", [(FeePlan.QUARTERLY, 4), (FeePlan.MONTHLY, 12)])
def test_annual_payment_blocks_every_other_row(plan, expected_rows):
    invoices = [
        make_invoice("Annual Fee 2024-2025", date(2024, 4, 10), fee_type=FeeType.ANNUAL,
                     status=FeeStatus.PAID, amount=15000),
    ]
    rows = derive(invoices, plan, date(2024, 6, 15))

    # future periods stay visible because they are blocked
    assert len(rows) == expected_rows
    assert all(r.blocked_reason == ANNUAL_SETTLED_REASON for r in rows)
    assert outstanding_total(rows) == 0


def test_quarter_blocks_exactly_its_three_months():
    invoices = [
        make_invoice("Tuition Fee - Q1 (Apr-Jun)", date(2024, 4, 10), fee_type=FeeType.QUARTERLY,
                     status=FeeStatus.PROCESSING, period=FeePeriod.Q1),
    ]
    rows = derive(invoices, FeePlan.MONTHLY, date(2025, 3, 15))

    blocked = {r.period for r in rows if r.blocked_reason}
    assert blocked == {FeePeriod.APR, FeePeriod.MAY, FeePeriod.JUN}
    assert len(rows) == 12
    assert {r.blocked_reason for r in rows if r.blocked_reason} == {"Conflict: Q1 is already paid via Quarterly Plan."}


def test_month_blocks_its_quarter_only():
    invoices = [
        make_invoice("Tuition Fee - May 2024", date(2024, 5, 10), fee_type=FeeType.MONTHLY,
                     status=FeeStatus.PAID, period=FeePeriod.MAY),
    ]
    rows = derive(invoices, FeePlan.QUARTERLY, date(2025, 3, 15))

    reasons = {r.period: r.blocked_reason for r in rows}
    assert reasons[FeePeriod.Q1] == "Conflict: May is already paid via Monthly Plan."
    assert reasons[FeePeriod.Q2] is None
    assert reasons[FeePeriod.Q3] is None
    assert reasons[FeePeriod.Q4] is None


def test_pending_invoices_do_not_block():
    invoices = [
        make_invoice("Tuition Fee - Apr 2024", date(2024, 4, 10), fee_type=FeeType.MONTHLY,
                     status=FeeStatus.PENDING, period=FeePeriod.APR),
    ]
    rows = derive(invoices, FeePlan.ANNUAL, date(2024, 4, 20))

    assert rows[0].blocked_reason is None


def test_previous_session_payments_are_ignored():
    invoices = [
        make_invoice("Tuition Fee - Apr 2023", date(2023, 4, 10), fee_type=FeeType.MONTHLY,
                     status=FeeStatus.PAID, period=FeePeriod.APR),
    ]
    rows = derive(invoices, FeePlan.ANNUAL, date(2024, 4, 20))

    assert rows[0].blocked_reason is None
    assert rows[0].title == "Annual Fee 2024-2025"


def test_real_invoice_replaces_virtual_row_and_sorts_first():
    invoices = [
        make_invoice("Tuition Fee - Apr 2024", date(2024, 4, 10), fee_type=FeeType.MONTHLY,
                     status=FeeStatus.PAID, period=FeePeriod.APR, amount=1250, invoice_id="inv-apr"),
    ]
    rows = derive(invoices, FeePlan.MONTHLY, date(2024, 5, 20))

    assert [r.period for r in rows] == [FeePeriod.APR, FeePeriod.MAY]
    assert rows[0].id == "inv-apr"
    assert not rows[0].is_virtual
    assert rows[1].is_virtual
    assert outstanding_total(rows) == 1250


def test_overdue_future_invoice_stays_visible():
    invoices = [
        make_invoice("Tuition Fee - Q3 (Oct-Dec)", date(2024, 10, 10), fee_type=FeeType.QUARTERLY,
                     status=FeeStatus.OVERDUE, period=FeePeriod.Q3),
    ]
    rows = derive(invoices, FeePlan.QUARTERLY, date(2024, 5, 1))

    assert [r.period for r in rows] == [FeePeriod.Q1, FeePeriod.Q3]
    assert outstanding_total(rows) == 3750 + 1000


def test_paid_rows_sort_before_unpaid():
    invoices = [
        make_invoice("Tuition Fee - Jun 2024", date(2024, 6, 10), fee_type=FeeType.MONTHLY,
                     status=FeeStatus.PAID, period=FeePeriod.JUN),
    ]
    rows = derive(invoices, FeePlan.MONTHLY, date(2024, 6, 20))

    assert [r.period for r in rows] == [FeePeriod.JUN, FeePeriod.APR, FeePeriod.MAY]


def test_other_invoices_are_not_plan_rows():
    invoices = [
        make_invoice("Uniform", date(2024, 4, 10), fee_type=FeeType.OTHER, status=FeeStatus.PAID),
    ]
    rows = derive(invoices, FeePlan.ANNUAL, date(2024, 4, 20))

    assert len(rows) == 1
    assert rows[0].blocked_reason is None


@pytest.mark.parametrize(
    "title, fee_type, expected",
    [
        ("Annual Fee 2024-2025", FeeType.ANNUAL, FeePeriod.ANNUAL),
        ("Tuition Fee - Q3 (Oct-Dec)", FeeType.QUARTERLY, FeePeriod.Q3),
        ("Tuition Fee - Sep 2024", FeeType.MONTHLY, FeePeriod.SEP),
        ("Tuition Fee - Mar 2025", FeeType.MONTHLY, FeePeriod.MAR),
        ("Tuition Fee", FeeType.MONTHLY, None),
        ("Uniform", FeeType.OTHER, None),
    ],
)
def test_infer_period_from_legacy_title(title, fee_type, expected):
    assert infer_period(make_invoice(title, date(2024, 4, 10), fee_type=fee_type)) == expected


def test_explicit_period_wins_over_title():
    invoice = make_invoice("Tuition Fee - Apr 2024", date(2024, 4, 10), fee_type=FeeType.MONTHLY,
                           period=FeePeriod.MAY)
    assert infer_period(invoice) == FeePeriod.MAY


def test_last_payment_and_history():
    apr = make_invoice("Tuition Fee - Apr 2024", date(2024, 4, 10), fee_type=FeeType.MONTHLY,
                       status=FeeStatus.PAID, payment_date=date(2024, 4, 5))
    may = make_invoice("Tuition Fee - May 2024", date(2024, 5, 10), fee_type=FeeType.MONTHLY,
                       status=FeeStatus.PROCESSING, payment_date=date(2024, 5, 8))
    jun = make_invoice("Tuition Fee - Jun 2024", date(2024, 6, 10), fee_type=FeeType.MONTHLY)

    assert last_payment([apr, may, jun]) == may
    assert paid_history([apr, may, jun]) == [apr]
    assert last_payment([jun]) is None


def test_real_pending_month_blocked_after_annual_paid():
    invoices = [
        make_invoice("Annual Fee 2024-2025", date(2024, 4, 10), fee_type=FeeType.ANNUAL,
                     status=FeeStatus.PAID, period=FeePeriod.ANNUAL, amount=15000),
        make_invoice("Tuition Fee - Apr 2024", date(2024, 4, 10), fee_type=FeeType.MONTHLY,
                     period=FeePeriod.APR, amount=1250, invoice_id="inv-apr"),
    ]
    rows = derive(invoices, FeePlan.MONTHLY, date(2024, 4, 15))

    april = next(r for r in rows if r.period == FeePeriod.APR)
    assert april.id == "inv-apr"
    assert not april.is_virtual
    assert april.blocked_reason == ANNUAL_SETTLED_REASON
    assert not april.is_payable
    assert outstanding_total(rows) == 0


def test_paid_real_rows_carry_no_block_reason():
    invoices = [
        make_invoice("Tuition Fee - Q1 (Apr-Jun)", date(2024, 4, 10), fee_type=FeeType.QUARTERLY,
                     status=FeeStatus.PAID, period=FeePeriod.Q1),
        make_invoice("Tuition Fee - Apr 2024", date(2024, 4, 10), fee_type=FeeType.MONTHLY,
                     status=FeeStatus.PAID, period=FeePeriod.APR),
    ]
    rows = derive(invoices, FeePlan.MONTHLY, date(2024, 4, 15))

    assert rows[0].period == FeePeriod.APR
    assert rows[0].blocked_reason is None


@pytest.mark.parametrize("plan", [FeePlan.ANNUAL, FeePlan.QUARTERLY, FeePlan.MONTHLY])
def test_zero_fee_batch_gives_zero_rows(plan):
    rows = derive([], plan, date(2024, 4, 15), fee=0)

    assert len(rows) == 1
    assert all(r.amount == 0 for r in rows)
    assert all(r.blocked_reason is None for r in rows)
    assert outstanding_total(rows) == 0
