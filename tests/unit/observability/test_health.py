"""Unit tests for checkers and the CheckRegistry."""
import asyncio

import httpx
import pytest
from hypothesis import given
from hypothesis import strategies as st
from structlog.testing import capture_logs

from svc_health.kernel.errors import CheckFailedError
from svc_health.observability.health import (
    CheckRegistry,
    Checker,
    CheckResult,
    FuncChecker,
    HttpEndpointChecker,
)


class _RecordingCheck(Checker):
    def __init__(self, name: str, healthy: bool, calls: list[str]) -> None:
        self._name = name
        self._healthy = healthy
        self._calls = calls

    @property
    def name(self) -> str:
        return self._name

    async def check(self) -> CheckResult:
        self._calls.append(self._name)
        return CheckResult(healthy=self._healthy, detail=None if self._healthy else f"{self._name} down")


class _BoomCheck(Checker):
    def __init__(self) -> None:
        self.calls = 0

    @property
    def name(self) -> str:
        return "boom"

    async def check(self) -> CheckResult:
        self.calls += 1
        raise RuntimeError("unexpected crash")


class TestFuncChecker:
    def test_sync_none_is_healthy(self):
        status = asyncio.run(FuncChecker("simple", lambda: None).timed_check())
        assert status.healthy is True
        assert status.latency_ms >= 0

    def test_async_callable(self):
        async def fn():
            return True

        assert asyncio.run(FuncChecker("a", fn).timed_check()).healthy is True

    def test_false_is_unhealthy(self):
        status = asyncio.run(FuncChecker("f", lambda: False).timed_check())
        assert status.healthy is False
        assert status.detail == "check returned False"

    def test_exception_becomes_detail(self):
        def fn():
            raise ConnectionError("no conn")

        status = asyncio.run(FuncChecker("db", fn).timed_check())
        assert status.healthy is False
        assert status.detail == "no conn"

    def test_returned_exception_is_unhealthy(self):
        status = asyncio.run(FuncChecker("db", lambda: ConnectionError("db down")).timed_check())
        assert status.healthy is False
        assert status.detail == "db down"

    def test_returned_exception_without_text_uses_type_name(self):
        async def fn():
            return TimeoutError()

        status = asyncio.run(FuncChecker("slow", fn).timed_check())
        assert status.healthy is False
        assert status.detail == "TimeoutError"

    def test_repr_has_name(self):
        assert "simple" in repr(FuncChecker("simple", lambda: None))


class TestHttpEndpointChecker:
    def _patch_transport(self, monkeypatch: pytest.MonkeyPatch, handler) -> None:
        real_client = httpx.AsyncClient

        def factory(*args, **kwargs):
            kwargs["transport"] = httpx.MockTransport(handler)
            return real_client(*args, **kwargs)

        monkeypatch.setattr(httpx, "AsyncClient", factory)

    def test_expected_status_is_healthy(self, monkeypatch: pytest.MonkeyPatch):
        self._patch_transport(monkeypatch, lambda request: httpx.Response(200))
        check = HttpEndpointChecker("http://dep.local/ping")
        assert check.name == "http:http://dep.local/ping"
        assert asyncio.run(check.timed_check()).healthy is True

    def test_unexpected_status(self, monkeypatch: pytest.MonkeyPatch):
        self._patch_transport(monkeypatch, lambda request: httpx.Response(503))
        status = asyncio.run(HttpEndpointChecker("http://dep.local", name="dep").timed_check())
        assert status.healthy is False
        assert "status=503" in status.detail

    def test_transport_error(self, monkeypatch: pytest.MonkeyPatch):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        self._patch_transport(monkeypatch, handler)
        status = asyncio.run(HttpEndpointChecker("http://dep.local").timed_check())
        assert status.healthy is False
        assert "ConnectError" in status.detail


class TestCheckRegistryReadiness:
    def test_starts_not_ready(self):
        assert asyncio.run(CheckRegistry().is_ready()) is False

    def test_last_write_wins(self):
        async def scenario():
            reg = CheckRegistry()
            await reg.set_ready(True)
            first = await reg.is_ready()
            await reg.set_ready(False)
            await reg.set_ready(False)
            return first, await reg.is_ready()

        assert asyncio.run(scenario()) == (True, False)

    def test_transitions_are_logged(self):
        async def scenario():
            reg = CheckRegistry()
            await reg.set_ready(True)
            await reg.set_ready(False)

        with capture_logs() as logs:
            asyncio.run(scenario())
        events = [entry["event"] for entry in logs]
        assert events == ["server.ready", "server.not_ready"]


class TestCheckRegistryChecks:
    def test_empty_registry_passes(self):
        asyncio.run(CheckRegistry().run_all_checks())

    @given(st.lists(st.booleans(), max_size=12))
    def test_runs_in_order_and_stops_at_first_failure(self, outcomes):
        calls: list[str] = []

        async def scenario():
            reg = CheckRegistry()
            for i, healthy in enumerate(outcomes):
                await reg.add_checker(_RecordingCheck(f"c{i}", healthy, calls))
            await reg.run_all_checks()

        names = [f"c{i}" for i in range(len(outcomes))]
        if all(outcomes):
            asyncio.run(scenario())
            assert calls == names
        else:
            first_bad = outcomes.index(False)
            with pytest.raises(CheckFailedError) as info:
                asyncio.run(scenario())
            assert info.value.checker_name == f"c{first_bad}"
            assert calls == names[: first_bad + 1]

    def test_second_checker_not_invoked_after_failure(self):
        boom = _BoomCheck()

        async def scenario():
            reg = CheckRegistry()
            await reg.add_checker(FuncChecker("X", lambda: False))
            await reg.add_checker(boom)
            await reg.run_all_checks()

        with pytest.raises(CheckFailedError) as info:
            asyncio.run(scenario())
        assert info.value.checker_name == "X"
        assert boom.calls == 0

    def test_exception_in_probe_is_a_failure(self):
        async def scenario():
            reg = CheckRegistry()
            await reg.add_checker(_BoomCheck())
            await reg.run_all_checks()

        with pytest.raises(CheckFailedError, match="boom: unexpected crash"):
            asyncio.run(scenario())

    def test_returned_error_fails_registry(self):
        async def scenario():
            reg = CheckRegistry()
            await reg.add_checker(FuncChecker("db", lambda: ConnectionError("db down")))
            await reg.run_all_checks()

        with pytest.raises(CheckFailedError, match="db: db down"):
            asyncio.run(scenario())

    def test_duplicate_names_both_run(self):
        calls: list[str] = []

        async def scenario():
            reg = CheckRegistry()
            await reg.add_checkers(
                [_RecordingCheck("dup", True, calls), _RecordingCheck("dup", True, calls)]
            )
            await reg.run_all_checks()
            return await reg.checker_names()

        assert asyncio.run(scenario()) == ["dup", "dup"]
        assert calls == ["dup", "dup"]

    def test_registry_usable_after_failure(self):
        flag = {"healthy": False}

        async def scenario():
            reg = CheckRegistry()
            await reg.add_checker(FuncChecker("toggle", lambda: flag["healthy"]))
            with pytest.raises(CheckFailedError):
                await reg.run_all_checks()
            flag["healthy"] = True
            await reg.run_all_checks()

        asyncio.run(scenario())

    def test_concurrent_add_checker(self):
        async def scenario():
            reg = CheckRegistry()

            async def add_many(worker: int) -> None:
                for i in range(25):
                    await reg.add_checker(FuncChecker(f"w{worker}-{i}", lambda: None))
                    await asyncio.sleep(0)

            await asyncio.gather(*(add_many(w) for w in range(8)))
            return await reg.checker_names()

        names = asyncio.run(scenario())
        assert len(names) == 200
        assert len(set(names)) == 200

    def test_checks_serialised_with_state_reads(self):
        order: list[str] = []

        async def slow():
            order.append("check.start")
            await asyncio.sleep(0.05)
            order.append("check.end")

        async def scenario():
            reg = CheckRegistry()
            await reg.add_checker(FuncChecker("slow", slow))
            checks = asyncio.create_task(reg.run_all_checks())
            await asyncio.sleep(0.01)
            await reg.is_ready()
            order.append("read")
            await checks

        asyncio.run(scenario())
        assert order == ["check.start", "check.end", "read"]
