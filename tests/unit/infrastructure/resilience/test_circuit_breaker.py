import asyncio

import pytest

from aisummarizer.domain.events.api_events import CircuitClosed, CircuitHalfOpened, CircuitOpened
from aisummarizer.infrastructure.resilience.circuit_breaker import CircuitBreaker, CircuitState
from aisummarizer.infrastructure.resilience.http_result import HttpResult

class CountingOperation:
    def __init__(self, result: HttpResult):
        self.result = result
        self.calls = 0

    async def __call__(self) -> HttpResult:
        self.calls += 1
        return self.result

@pytest.fixture
def events():
    return []

@pytest.fixture
def breaker(fake_clock, events):
    return CircuitBreaker(failure_threshold=3, break_duration=30.0, clock=fake_clock, on_event=events.append)

async def trip(breaker: CircuitBreaker) -> None:
    failing = CountingOperation(HttpResult(status_code=500))
    for _ in range(breaker.failure_threshold):
        await breaker.call(failing)

@pytest.mark.parametrize("kwargs", [{"failure_threshold": 0}, {"break_duration": -1}])
def test_invalid_configuration_rejected(kwargs):
    with pytest.raises(ValueError):
        CircuitBreaker(**kwargs)

@pytest.mark.asyncio
async def test_success_passes_through(breaker):
    operation = CountingOperation(HttpResult(status_code=200))
    result = await breaker.call(operation)
    assert result.is_success
    assert operation.calls == 1
    assert breaker.state is CircuitState.CLOSED

@pytest.mark.asyncio
async def test_opens_after_threshold_consecutive_failures(breaker, events):
    await trip(breaker)
    assert breaker.state is CircuitState.OPEN
    assert breaker.consecutive_failures == 3
    opened = [e for e in events if isinstance(e, CircuitOpened)]
    assert len(opened) == 1
    assert opened[0].consecutive_failures == 3
    assert opened[0].break_seconds == 30.0

@pytest.mark.asyncio
async def test_success_resets_failure_count(breaker):
    failing = CountingOperation(HttpResult(status_code=500))
    await breaker.call(failing)
    await breaker.call(failing)
    await breaker.call(CountingOperation(HttpResult(status_code=200)))
    await breaker.call(failing)
    assert breaker.state is CircuitState.CLOSED
    assert breaker.consecutive_failures == 1

@pytest.mark.asyncio
async def test_open_circuit_rejects_without_calling(breaker):
    await trip(breaker)
    operation = CountingOperation(HttpResult(status_code=200))
    result = await breaker.call(operation)
    assert result.circuit_open
    assert not result.is_retryable
    assert operation.calls == 0

@pytest.mark.asyncio
async def test_trial_success_closes_circuit(breaker, events, fake_clock):
    await trip(breaker)
    fake_clock.advance(30.0)
    assert breaker.state is CircuitState.HALF_OPEN

    operation = CountingOperation(HttpResult(status_code=200))
    result = await breaker.call(operation)

    assert result.is_success
    assert operation.calls == 1
    assert breaker.state is CircuitState.CLOSED
    assert breaker.consecutive_failures == 0
    assert [type(e) for e in events] == [CircuitOpened, CircuitHalfOpened, CircuitClosed]

@pytest.mark.asyncio
async def test_trial_failure_reopens_circuit(breaker, events, fake_clock):
    await trip(breaker)
    fake_clock.advance(31.0)
    await breaker.call(CountingOperation(HttpResult(status_code=503)))
    assert breaker.state is CircuitState.OPEN
    assert [type(e) for e in events] == [CircuitOpened, CircuitHalfOpened, CircuitOpened]

    # A fresh break starts from the failed trial
    fake_clock.advance(10.0)
    operation = CountingOperation(HttpResult(status_code=200))
    assert (await breaker.call(operation)).circuit_open
    assert operation.calls == 0

@pytest.mark.asyncio
async def test_only_one_trial_admitted_while_half_open(breaker, fake_clock):
    await trip(breaker)
    fake_clock.advance(30.0)

    release = asyncio.Event()

    async def slow_trial() -> HttpResult:
        await release.wait()
        return HttpResult(status_code=200)

    trial = asyncio.create_task(breaker.call(slow_trial))
    await asyncio.sleep(0)

    second = CountingOperation(HttpResult(status_code=200))
    assert (await breaker.call(second)).circuit_open
    assert second.calls == 0

    release.set()
    assert (await trial).is_success
    assert breaker.state is CircuitState.CLOSED

@pytest.mark.asyncio
async def test_late_success_does_not_close_open_circuit(breaker):
    release = asyncio.Event()

    async def slow_success() -> HttpResult:
        await release.wait()
        return HttpResult(status_code=200)

    straggler = asyncio.create_task(breaker.call(slow_success))
    await asyncio.sleep(0)
    await trip(breaker)
    assert breaker.state is CircuitState.OPEN

    release.set()
    assert (await straggler).is_success
    assert breaker.state is CircuitState.OPEN
    assert breaker.consecutive_failures == 3

    operation = CountingOperation(HttpResult(status_code=200))
    assert (await breaker.call(operation)).circuit_open
    assert operation.calls == 0

@pytest.mark.asyncio
async def test_late_failure_does_not_reopen_half_open_circuit(breaker, events, fake_clock):
    release = asyncio.Event()

    async def slow_failure() -> HttpResult:
        await release.wait()
        return HttpResult(status_code=500)

    straggler = asyncio.create_task(breaker.call(slow_failure))
    await asyncio.sleep(0)
    await trip(breaker)
    fake_clock.advance(30.0)

    trial_release = asyncio.Event()

    async def slow_trial() -> HttpResult:
        await trial_release.wait()
        return HttpResult(status_code=200)

    trial = asyncio.create_task(breaker.call(slow_trial))
    await asyncio.sleep(0)

    release.set()
    await straggler
    assert breaker.state is CircuitState.HALF_OPEN

    trial_release.set()
    assert (await trial).is_success
    assert breaker.state is CircuitState.CLOSED
    assert [type(e) for e in events] == [CircuitOpened, CircuitHalfOpened, CircuitClosed]

@pytest.mark.asyncio
async def test_raised_exception_counts_as_failure(breaker):
    async def broken() -> HttpResult:
        raise RuntimeError("boom")

    for _ in range(3):
        with pytest.raises(RuntimeError):
            await breaker.call(broken)
    assert breaker.state is CircuitState.OPEN

@pytest.mark.asyncio
async def test_cancelled_trial_frees_half_open_slot(breaker, fake_clock):
    await trip(breaker)
    fake_clock.advance(30.0)

    async def hanging() -> HttpResult:
        await asyncio.Event().wait()
        return HttpResult(status_code=200)

    trial = asyncio.create_task(breaker.call(hanging))
    await asyncio.sleep(0)
    trial.cancel()
    with pytest.raises(asyncio.CancelledError):
        await trial

    # Cancellation is not a failure; the next caller becomes the trial
    operation = CountingOperation(HttpResult(status_code=200))
    assert (await breaker.call(operation)).is_success
    assert operation.calls == 1
    assert breaker.state is CircuitState.CLOSED

@pytest.mark.asyncio
async def test_reset_closes_circuit(breaker):
    await trip(breaker)
    breaker.reset()
    assert breaker.state is CircuitState.CLOSED
    assert breaker.consecutive_failures == 0
