"""Provider report aggregation.

This module turns many independent registry lookups into one
`ProviderReport`. The flow has two phases:

1. A cheap existence check (owner + title). An empty title means the account
   never registered, which is the common case for arbitrary addresses, so the
   check short-circuits into `NotRegistered` without touching parameters or
   endpoints.
2. A concurrent fan-out over the public key, every parameter and every
   endpoint, assembled into disjoint slots of the final report.

The aggregator performs no recovery. The first failing read aborts the whole
build with a `BuildReportFailure` naming the field being resolved; sibling
reads still in flight are cancelled, so callers never observe a partial
report. Printing and progress belong to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Sequence, TypeVar

from core.domain.errors import BuildReportFailure, DecodeFailure, RemoteCallFailure
from core.domain.models import EndpointReport, NotRegistered, ProviderIdentity, ProviderReport
from core.domain.wire_text import RawText, decode_wire_text
from core.interfaces.registry_reader import RegistryReader

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_CONCURRENCY = 16


async def gather_or_cancel(*aws: Awaitable[Any]) -> list[Any]:
    """Run awaitables concurrently; on the first failure cancel the rest.

    Unlike plain `asyncio.gather`, siblings are cancelled and awaited before
    the exception propagates, so nothing keeps running in the background.
    """

    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class _ReportBuild:
    """State of one `build_report` call: reader, account and read budget."""

    def __init__(self, reader: RegistryReader, account: str, semaphore: asyncio.Semaphore) -> None:
        self._reader = reader
        self._account = account
        self._semaphore = semaphore

    async def read(
        self,
        field: str,
        fetch: Callable[[], Awaitable[T]],
        *,
        subject: str | None = None,
    ) -> T:
        async with self._semaphore:
            try:
                return await fetch()
            except (RemoteCallFailure, DecodeFailure) as exc:
                raise BuildReportFailure(field, str(exc), subject=subject) from exc

    def decode(self, field: str, raw: RawText, *, subject: str | None = None) -> str:
        try:
            return decode_wire_text(raw)
        except DecodeFailure as exc:
            raise BuildReportFailure(field, str(exc), subject=subject) from exc

    async def identify(self) -> tuple[str, str]:
        owner, title = await gather_or_cancel(
            self.read("owner", lambda: self._reader.get_owner(self._account)),
            self.read("title", lambda: self._reader.get_title(self._account)),
        )
        return owner, title

    async def pubkey(self) -> str:
        return await self.read("pubkey", lambda: self._reader.get_pubkey(self._account))

    async def params(self) -> dict[str, str]:
        raw_names: Sequence[RawText] = await self.read(
            "param_names",
            lambda: self._reader.get_all_param_names(self._account),
        )
        logger.debug("%s: resolving %d provider params", self._account, len(raw_names))
        pairs = await gather_or_cancel(*(self.param(raw_name) for raw_name in raw_names))
        return dict(pairs)

    async def param(self, raw_name: RawText) -> tuple[str, str]:
        # Values are keyed by the decoded name; the raw name never matches.
        name = self.decode("param_name", raw_name)
        raw_value = await self.read(
            "param_value",
            lambda: self._reader.get_param_value(self._account, name),
            subject=name,
        )
        return name, self.decode("param_value", raw_value, subject=name)

    async def endpoints(self) -> dict[str, EndpointReport]:
        names: Sequence[str] = await self.read(
            "endpoint_names",
            lambda: self._reader.get_endpoint_names(self._account),
        )
        logger.debug("%s: resolving %d endpoints", self._account, len(names))
        reports = await gather_or_cancel(*(self.endpoint(name) for name in names))
        return {report.name: report for report in reports}

    async def endpoint(self, name: str) -> EndpointReport:
        curve, bound, raw_params = await gather_or_cancel(
            self.read("curve", lambda: self._reader.get_curve(self._account, name), subject=name),
            self.read("bound", lambda: self._reader.get_bound(self._account, name), subject=name),
            self.read(
                "endpoint_params",
                lambda: self._reader.get_endpoint_params(self._account, name),
                subject=name,
            ),
        )
        params = [self.decode("endpoint_params", raw, subject=name) for raw in raw_params]
        return EndpointReport(name=name, curve=curve, bound=bound, params=params)


class ProviderReportAggregator:
    """Builds `ProviderReport`s from a `RegistryReader`.

    `max_concurrency` bounds the number of registry reads in flight for a
    single report.
    """

    def __init__(self, reader: RegistryReader, *, max_concurrency: int = DEFAULT_MAX_CONCURRENCY) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self._reader = reader
        self._max_concurrency = max_concurrency

    async def build_report(self, account: str) -> ProviderReport | NotRegistered:
        """Resolve the registry entry of `account`.

        Returns `NotRegistered` when the title is empty, otherwise a fully
        populated `ProviderReport`. Raises `BuildReportFailure` when any read
        or decode fails.
        """

        if not account:
            raise ValueError("account must not be blank")

        build = _ReportBuild(self._reader, account, asyncio.Semaphore(self._max_concurrency))

        owner, title = await build.identify()
        if not title:
            logger.debug("%s: empty title, not registered", account)
            return NotRegistered(account=account, owner=owner)

        pubkey, params, endpoints = await gather_or_cancel(
            build.pubkey(),
            build.params(),
            build.endpoints(),
        )
        logger.debug(
            "%s: report built (%d params, %d endpoints)",
            account,
            len(params),
            len(endpoints),
        )
        return ProviderReport(
            identity=ProviderIdentity(account=account, owner=owner, title=title, pubkey=pubkey),
            params=params,
            endpoints=endpoints,
        )


async def build_provider_report(
    reader: RegistryReader,
    account: str,
    *,
    max_concurrency: int | None = None,
) -> ProviderReport | NotRegistered:
    """One-shot helper around `ProviderReportAggregator.build_report`."""

    aggregator = ProviderReportAggregator(
        reader,
        max_concurrency=DEFAULT_MAX_CONCURRENCY if max_concurrency is None else max_concurrency,
    )
    return await aggregator.build_report(account)
