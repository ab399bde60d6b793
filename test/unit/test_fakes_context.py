from __future__ import annotations

import pytest

from app import FakesContext
from domain import BehaviorVerificationError, InvalidArgumentError, Param, UnknownFakeEngineError
from domain.models import FakesConfig
from domain.services import Registrar
from infra.mocking import UnittestMockFakeEngine
from test.fixtures import (
    Calculator,
    EnglishGreeter,
    Greeter,
    InMemoryRepository,
    Item,
    Mailer,
    OrderService,
    PriceCalculator,
    Repository,
)
from test.mocks import InMemoryConfigProvider


@pytest.fixture()
def ctx(engine: UnittestMockFakeEngine) -> FakesContext[OrderService]:
    return FakesContext(engine=engine, subject_type=OrderService)


def test_subject_is_built_from_container_fakes(ctx: FakesContext[OrderService]) -> None:
    ctx.when_told_to(ctx.the(Repository), lambda r: r.get("a1")).returns(Item("a1", 1))

    assert ctx.subject.ship("a1") is True
    assert ctx.subject.ship("missing") is False

    ctx.was_told_to(
        ctx.the(Mailer), lambda m: m.send(Param.is_any(str), Param.is_any(str))
    ).only_once()


def test_subject_is_created_once(ctx: FakesContext[OrderService]) -> None:
    assert ctx.subject is ctx.subject


def test_subject_can_be_replaced(ctx: FakesContext[OrderService]) -> None:
    replacement = OrderService(InMemoryRepository(), ctx.an(Mailer))
    ctx.subject = replacement

    assert ctx.subject is replacement


def test_subject_requires_a_subject_type(engine: UnittestMockFakeEngine) -> None:
    with pytest.raises(InvalidArgumentError):
        FakesContext(engine=engine).subject


def test_configured_registrations_reach_the_subject(ctx: FakesContext[OrderService]) -> None:
    repo = InMemoryRepository()
    repo.save(Item("k", 2))

    ctx.configure(lambda r: r.for_type(Repository).use(repo))

    assert ctx.subject.repository is repo
    assert ctx.subject.ship("k") is True


def test_configure_accepts_a_registrar(ctx: FakesContext[OrderService]) -> None:
    registrar = Registrar()
    registrar.for_type(Greeter).use_type(EnglishGreeter)

    assert ctx.configure(registrar) is registrar
    assert isinstance(ctx.the(Greeter), EnglishGreeter)


def test_an_and_some_create_independent_fakes(ctx: FakesContext[OrderService]) -> None:
    single = ctx.an(Calculator)
    many = ctx.some(Calculator, 2)

    assert isinstance(single, Calculator)
    assert len(many) == 2
    assert single is not ctx.the(Calculator)
    assert many[0] is not many[1]
    assert len(ctx.some(Calculator)) == 3
    with pytest.raises(InvalidArgumentError):
        ctx.some(Calculator, -1)


def test_partial_and_command_setup(ctx: FakesContext[OrderService]) -> None:
    calc = ctx.partial(PriceCalculator, 0.25)
    seen: list[float] = []

    ctx.when_told_to(calc, lambda p: p.net(8.0)).returns(4.0)
    ctx.when_told_to_do(calc, lambda p: p.net(1.0)).callback(seen.append)

    assert calc.gross(8.0) == 5.0
    calc.net(1.0)
    assert seen == [1.0]


def test_was_not_told_to(ctx: FakesContext[OrderService]) -> None:
    ctx.subject.ship("nothing")

    ctx.was_not_told_to(ctx.the(Mailer), lambda m: m.send(Param.is_any(str), Param.is_any(str)))
    with pytest.raises(BehaviorVerificationError):
        ctx.was_told_to(ctx.the(Mailer), lambda m: m.send(Param.is_any(str), Param.is_any(str)))


def test_from_config_uses_configured_engine() -> None:
    provider = InMemoryConfigProvider(config=FakesConfig(engine="unittest_mock", log_level="error"))

    ctx = FakesContext.from_config(provider, subject_type=OrderService)

    assert isinstance(ctx.engine, UnittestMockFakeEngine)
    assert isinstance(ctx.subject, OrderService)


def test_from_config_rejects_invalid_configuration() -> None:
    provider = InMemoryConfigProvider(validation_errors=["engine must be a string."])

    with pytest.raises(InvalidArgumentError, match="engine must be a string"):
        FakesContext.from_config(provider)


def test_unknown_engine_name_is_rejected() -> None:
    provider = InMemoryConfigProvider(config=FakesConfig(engine="nope"))

    with pytest.raises(UnknownFakeEngineError):
        FakesContext.from_config(provider)
