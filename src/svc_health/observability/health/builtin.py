from __future__ import annotations

import inspect
from typing import Any, Callable

import httpx

from svc_health.observability.health.check import Checker, CheckResult

__all__ = ["FuncChecker", "HttpEndpointChecker"]


class FuncChecker(Checker):
    """Checker backed by a zero-argument callable, sync or async.

    ``None`` or ``True`` means healthy, ``False`` means unhealthy. A raised
    *or returned* exception means unhealthy with the exception text as
    detail, so ``lambda: ConnectionError("db down")`` reports failure.
    """

    def __init__(self, name_: str, fn: Callable[[], Any]) -> None:
        self._name = name_
        self._fn = fn

    @property
    def name(self) -> str:
        return self._name

    async def check(self) -> CheckResult:
        outcome = self._fn()
        if inspect.isawaitable(outcome):
            outcome = await outcome
        if isinstance(outcome, BaseException):
            return CheckResult(healthy=False, detail=str(outcome) or type(outcome).__name__)
        if outcome is False:
            return CheckResult(healthy=False, detail="check returned False")
        return CheckResult(healthy=True)


class HttpEndpointChecker(Checker):
    """Pings a dependency over HTTP with a GET request."""

    def __init__(
        self,
        url: str,
        expected_status: int = 200,
        timeout: float = 5.0,
        name: str | None = None,
    ) -> None:
        self._url = url
        self._expected = expected_status
        self._timeout = timeout
        self._name = name or f"http:{url}"

    @property
    def name(self) -> str:
        return self._name

    async def check(self) -> CheckResult:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.get(self._url)
        except httpx.HTTPError as exc:
            return CheckResult(healthy=False, detail=f"{type(exc).__name__}: {exc}")
        if resp.status_code == self._expected:
            return CheckResult(healthy=True)
        return CheckResult(
            healthy=False,
            detail=f"status={resp.status_code} expected={self._expected}",
        )
