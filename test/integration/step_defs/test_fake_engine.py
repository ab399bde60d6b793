"""Step definitions for fake configuration and verification scenarios."""
from __future__ import annotations

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from domain import BehaviorVerificationError, Param
from test.fixtures import Calculator, PriceCalculator

from .conftest import ScenarioState

scenarios("../features/fake_engine.feature")


@given("a fake calculator")
def given_fake_calculator(state: ScenarioState) -> None:
    state.fake = state.engine.create_fake(Calculator)


@given(parsers.parse("a partial price calculator with a tax rate of {rate:g}"))
def given_partial_price_calculator(state: ScenarioState, rate: float) -> None:
    state.fake = state.engine.partial_mock(PriceCalculator, rate)


@given(parsers.parse("add with {a:d} and {b:d} is configured to return {value:d}"))
def given_add_returns(state: ScenarioState, a: int, b: int, value: int) -> None:
    state.engine.set_up_query_behavior_for(state.fake, lambda c: c.add(a, b)).returns(value)


@given(parsers.parse("add with any integer and {b:d} is configured to return {value:d}"))
def given_add_any_returns(state: ScenarioState, b: int, value: int) -> None:
    state.engine.set_up_query_behavior_for(
        state.fake, lambda c: c.add(Param.is_any(int), b)
    ).returns(value)


@given(parsers.parse("net of {amount:g} is configured to return {value:g}"))
def given_net_returns(state: ScenarioState, amount: float, value: float) -> None:
    state.engine.set_up_query_behavior_for(state.fake, lambda p: p.net(amount)).returns(value)


@when(parsers.parse("add is called with {a:d} and {b:d}"))
def when_add(state: ScenarioState, a: int, b: int) -> None:
    state.result = state.fake.add(a, b)


@when(parsers.parse("the gross price of {amount:g} is requested"))
def when_gross(state: ScenarioState, amount: float) -> None:
    state.result = state.fake.gross(amount)


@then(parsers.parse("the result is {expected:g}"))
def then_result(state: ScenarioState, expected: float) -> None:
    assert state.result == expected


@then(parsers.parse("add with {a:d} and {b:d} was called {count:d} time(s)"))
def then_called(state: ScenarioState, a: int, b: int, count: int) -> None:
    state.engine.verify_behavior_was_executed(state.fake, lambda c: c.add(a, b)).times(count)


@then(parsers.parse("add with {a:d} and {b:d} was never called"))
def then_never_called(state: ScenarioState, a: int, b: int) -> None:
    state.engine.verify_behavior_was_not_executed(state.fake, lambda c: c.add(a, b))


@then(parsers.parse('verifying that add with {a:d} and {b:d} was called fails with "{text}"'))
def then_verification_fails(state: ScenarioState, a: int, b: int, text: str) -> None:
    with pytest.raises(BehaviorVerificationError) as excinfo:
        state.engine.verify_behavior_was_executed(state.fake, lambda c: c.add(a, b))
    assert text in str(excinfo.value)
