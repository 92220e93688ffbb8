"""web3 wrapper.

Why a wrapper:
- Standardizes the provider (URL + request timeout) for every node call.
- Eases testing: any `AsyncBaseProvider` (e.g. an in-memory fake node) can
  be injected in place of the HTTP provider.
"""

from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientTimeout
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import Web3Exception
from web3.providers.async_base import AsyncBaseProvider

from core.config import AppSettings

# Everything a node call can raise that means "the read did not complete".
# web3 v7 reports RPC errors as Web3RPCError; older paths still use ValueError.
NODE_ERRORS: tuple[type[BaseException], ...] = (
    Web3Exception,
    ValueError,
    ClientError,
    asyncio.TimeoutError,
)


def build_web3(
    settings: AppSettings | None = None,
    *,
    provider: AsyncBaseProvider | None = None,
) -> AsyncWeb3:
    """Create an `AsyncWeb3` bound to the configured node.

    The request timeout is the only timeout policy in the stack; the report
    aggregator just propagates what it gets.
    """

    settings = settings or AppSettings()
    if provider is None:
        provider = AsyncHTTPProvider(
            settings.rpc_url,
            request_kwargs={"timeout": ClientTimeout(total=settings.http_timeout_seconds)},
        )
    return AsyncWeb3(provider)
