"""Tests for snowball/avalanche payoff plans.

These tests verify:
- ordering (smallest balance first vs highest APR first, stable on ties)
- sequential month accumulation and payoff dates
- rejection of invalid budgets, empty debt lists and unpayable debts
- plan summaries
"""

from __future__ import annotations

from datetime import date

import pytest

from debtplan.services.amortization import RejectionReason, solve_payoff
from debtplan.services.debts import (
    PLAN_NOTE,
    PayoffStrategy,
    StrategyPlan,
    StrategyRejected,
    avalanche_plan,
    order_debts,
    plan_summary,
    simulate_strategy,
    snowball_plan,
)
from tests.conftest import assert_float_equal


def _names(plan: StrategyPlan) -> list[str]:
    return [row.debt.name for row in plan.rows]


class TestOrdering:
    """Strategy ordering policies."""

    def test_snowball_smallest_balance_first(self, sample_debts, today):
        plan = simulate_strategy(sample_debts, "snowball", 1000, today=today)

        assert isinstance(plan, StrategyPlan)
        assert _names(plan) == ["B", "C", "A"]

    def test_avalanche_highest_rate_first(self, sample_debts, today):
        plan = simulate_strategy(sample_debts, PayoffStrategy.AVALANCHE, 1000, today=today)

        assert isinstance(plan, StrategyPlan)
        assert _names(plan) == ["B", "A", "C"]

    def test_snowball_ties_keep_input_order(self, debt_factory):
        debts = [
            debt_factory(name="first", principal=500, annual_rate=0.05),
            debt_factory(name="second", principal=500, annual_rate=0.25),
            debt_factory(name="small", principal=100, annual_rate=0.10),
        ]

        ordered = order_debts(debts, PayoffStrategy.SNOWBALL)

        assert [d.name for d in ordered] == ["small", "first", "second"]

    def test_avalanche_ties_keep_input_order(self, debt_factory):
        debts = [
            debt_factory(name="first", principal=900, annual_rate=0.15),
            debt_factory(name="second", principal=100, annual_rate=0.15),
            debt_factory(name="top", principal=500, annual_rate=0.30),
        ]

        ordered = order_debts(debts, "avalanche")

        assert [d.name for d in ordered] == ["top", "first", "second"]

    def test_inputs_are_not_mutated(self, sample_debts, today):
        before = [(d.name, d.principal, d.annual_rate) for d in sample_debts]

        simulate_strategy(sample_debts, "snowball", 1000, today=today)

        assert [(d.name, d.principal, d.annual_rate) for d in sample_debts] == before


class TestSequentialSchedule:
    """The whole budget retires one debt at a time."""

    def test_zero_rate_waterfall(self, debt_factory, today):
        debts = [
            debt_factory(name="X", principal=1000, annual_rate=0.0),
            debt_factory(name="Y", principal=500, annual_rate=0.0),
        ]

        plan = snowball_plan(debts=debts, monthly_budget=250, today=today)

        assert isinstance(plan, StrategyPlan)
        assert _names(plan) == ["Y", "X"]
        assert [row.months_to_payoff for row in plan.rows] == [2, 4]
        assert [row.cumulative_months_at_payoff for row in plan.rows] == [2, 6]
        assert [row.payoff_date for row in plan.rows] == [date(2024, 3, 31), date(2024, 7, 31)]

    def test_rows_match_single_debt_solver(self, sample_debts, today):
        plan = avalanche_plan(debts=sample_debts, monthly_budget=400, today=today)

        assert isinstance(plan, StrategyPlan)
        cumulative = 0
        for row in plan.rows:
            solved = solve_payoff(row.debt.principal, row.debt.annual_rate, 400)
            cumulative += solved.months
            assert row.months_to_payoff == solved.months
            assert row.cumulative_months_at_payoff == cumulative
            assert row.payment_used == 400
            assert_float_equal(row.total_interest, solved.total_interest)

    def test_paid_off_debts_are_skipped(self, debt_factory, today):
        debts = [
            debt_factory(name="done", principal=0, annual_rate=0.30),
            debt_factory(name="open", principal=600, annual_rate=0.0),
        ]

        plan = simulate_strategy(debts, "avalanche", 200, today=today)

        assert isinstance(plan, StrategyPlan)
        assert _names(plan) == ["open"]
        assert plan.rows[0].cumulative_months_at_payoff == 3

    def test_all_debts_paid_off_yields_empty_plan(self, debt_factory, today):
        plan = simulate_strategy([debt_factory(principal=0)], "snowball", 100, today=today)

        assert isinstance(plan, StrategyPlan)
        assert plan.rows == []

    def test_plan_message(self, sample_debts, today):
        plan = simulate_strategy(sample_debts, "snowball", 1000, today=today)

        assert plan.ok
        assert plan.message == PLAN_NOTE


class TestRejections:
    """Whole-plan failures."""

    @pytest.mark.parametrize("budget", [0, -100, float("nan")])
    def test_invalid_budget(self, sample_debts, budget):
        outcome = simulate_strategy(sample_debts, "snowball", budget)

        assert isinstance(outcome, StrategyRejected)
        assert not outcome.ok
        assert outcome.reason is RejectionReason.INVALID_BUDGET

    def test_invalid_budget_checked_before_empty_list(self):
        outcome = simulate_strategy([], "snowball", 0)

        assert outcome.reason is RejectionReason.INVALID_BUDGET

    def test_no_debts(self):
        outcome = simulate_strategy([], "avalanche", 500)

        assert isinstance(outcome, StrategyRejected)
        assert outcome.reason is RejectionReason.NO_DEBTS

    def test_unknown_strategy(self, sample_debts):
        outcome = simulate_strategy(sample_debts, "hybrid", 500)

        assert isinstance(outcome, StrategyRejected)
        assert outcome.reason is RejectionReason.INVALID_STRATEGY

    @pytest.mark.parametrize("strategy", ["snowball", "avalanche"])
    def test_unpayable_debt_rejects_whole_plan(self, sample_debts, debt_factory, strategy, today):
        debts = sample_debts + [debt_factory(name="D", principal=10_000, annual_rate=0.12)]

        outcome = simulate_strategy(debts, strategy, 50, today=today)

        assert isinstance(outcome, StrategyRejected)
        assert outcome.reason is RejectionReason.DEBT_UNPAYABLE
        assert outcome.message.startswith('For debt "D", Monthly payment is too low')

    def test_uncomputable_debt_rejects_plan(self, debt_factory, today):
        debts = [debt_factory(name="X", principal=1000, annual_rate=1e-17)]

        outcome = simulate_strategy(debts, "avalanche", 100, today=today)

        assert isinstance(outcome, StrategyRejected)
        assert outcome.reason is RejectionReason.DEBT_UNPAYABLE
        assert outcome.message.startswith('For debt "X", Could not compute')

    def test_unpayable_first_debt(self, debt_factory, today):
        debts = [
            debt_factory(name="Mortgage", principal=200_000, annual_rate=0.06),
            debt_factory(name="Card", principal=500, annual_rate=0.2),
        ]

        outcome = simulate_strategy(debts, "avalanche", 900, today=today)

        assert isinstance(outcome, StrategyRejected)
        assert '"Mortgage"' in outcome.message


class TestPlanSummary:
    def test_summary_totals(self, sample_debts, today):
        plan = simulate_strategy(sample_debts, "snowball", 1000, today=today)

        payoff_date, total_interest, months = plan_summary(plan)

        assert payoff_date == plan.rows[-1].payoff_date
        assert months == sum(row.months_to_payoff for row in plan.rows)
        assert_float_equal(total_interest, sum(row.total_interest for row in plan.rows))
        assert total_interest > 0

    def test_empty_plan_summary(self):
        assert plan_summary(StrategyPlan(rows=[])) == (None, 0.0, 0)
