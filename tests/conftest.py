"""Shared fixtures: an in-memory RegistryReader that records every call."""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

import pytest

from core.domain.wire_text import RawText, encode_wire_text


class FakeRegistryReader:
    """In-memory registry entry for one or more accounts.

    Args:
        title: Title returned for every account.
        pubkey: Public key returned for every account.
        owner: Owner returned for every account (defaults to the account).
        params: Decoded parameter name -> decoded value.
        endpoints: Endpoint name -> (curve, bound, decoded params).
        raw_param_names: Overrides the encoded names returned by the reader.
        raw_endpoint_params: Endpoint name -> raw params override.
        raw_param_values: Decoded name -> raw value override.
        failures: `method` or `(method, subject)` -> exception to raise.
        delays: `method` or `(method, subject)` -> seconds to sleep first.
    """

    def __init__(
        self,
        *,
        title: str = "",
        pubkey: str = "",
        owner: str | None = None,
        params: dict[str, str] | None = None,
        endpoints: dict[str, tuple[Any, Any, list[str]]] | None = None,
        raw_param_names: Sequence[RawText] | None = None,
        raw_endpoint_params: dict[str, Sequence[RawText]] | None = None,
        raw_param_values: dict[str, RawText] | None = None,
        failures: dict[Any, Exception] | None = None,
        delays: dict[Any, float] | None = None,
        node_account: str = "0xDEF",
    ) -> None:
        self.title = title
        self.pubkey = pubkey
        self.owner = owner
        self.params = params or {}
        self.endpoints = endpoints or {}
        self.raw_param_names = raw_param_names
        self.raw_endpoint_params = raw_endpoint_params or {}
        self.raw_param_values = raw_param_values or {}
        self.failures = failures or {}
        self.delays = delays or {}
        self.node_account = node_account

        self.calls: list[tuple[str, str | None]] = []
        self.cancelled: list[tuple[str, str | None]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def _record(self, method: str, subject: str | None = None) -> None:
        self.calls.append((method, subject))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get((method, subject), self.delays.get(method, 0)))
        except asyncio.CancelledError:
            self.cancelled.append((method, subject))
            raise
        finally:
            self.in_flight -= 1

        error = self.failures.get((method, subject)) or self.failures.get(method)
        if error is not None:
            raise error

    def methods_called(self) -> list[str]:
        return [method for method, _ in self.calls]

    async def get_owner(self, account: str) -> str:
        await self._record("get_owner")
        return self.owner if self.owner is not None else account

    async def get_title(self, account: str) -> str:
        await self._record("get_title")
        return self.title

    async def get_pubkey(self, account: str) -> str:
        await self._record("get_pubkey")
        return self.pubkey

    async def get_all_param_names(self, account: str) -> list[RawText]:
        await self._record("get_all_param_names")
        if self.raw_param_names is not None:
            return list(self.raw_param_names)
        return [encode_wire_text(name, width=32) for name in self.params]

    async def get_param_value(self, account: str, name: str) -> RawText:
        await self._record("get_param_value", name)
        if name in self.raw_param_values:
            return self.raw_param_values[name]
        # Unknown keys behave like unset registry slots.
        return encode_wire_text(self.params.get(name, ""))

    async def get_endpoint_names(self, account: str) -> list[str]:
        await self._record("get_endpoint_names")
        return list(self.endpoints)

    async def get_curve(self, account: str, endpoint: str) -> Any:
        await self._record("get_curve", endpoint)
        return self.endpoints[endpoint][0]

    async def get_bound(self, account: str, endpoint: str) -> Any:
        await self._record("get_bound", endpoint)
        return self.endpoints[endpoint][1]

    async def get_endpoint_params(self, account: str, endpoint: str) -> list[RawText]:
        await self._record("get_endpoint_params", endpoint)
        if endpoint in self.raw_endpoint_params:
            return list(self.raw_endpoint_params[endpoint])
        return [encode_wire_text(param, width=32) for param in self.endpoints[endpoint][2]]

    async def default_account(self) -> str:
        return self.node_account

    async def __aenter__(self) -> "FakeRegistryReader":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.closed = True


@pytest.fixture
def make_reader() -> type[FakeRegistryReader]:
    """Return the fake reader class so tests can build tailored instances."""

    return FakeRegistryReader


@pytest.fixture
def weather_reader() -> FakeRegistryReader:
    """Registered provider `Weather` with one param and one endpoint."""

    return FakeRegistryReader(
        title="Weather",
        pubkey="123456789",
        params={"region": "US"},
        endpoints={"hourly": ([3, 0, 0, 2, 10000], 100, ["unit"])},
    )
