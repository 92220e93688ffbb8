"""Registry read contract.

Why Protocol:
- A structural contract (duck typing) with no rigid inheritance.
- The aggregator only consumes it, so contract-backed readers and in-memory
  fakes are interchangeable and testable without a real network.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

from core.domain.wire_text import RawText


@runtime_checkable
class RegistryReader(Protocol):
    """Keyed remote lookups against one provider's registry entry.

    Design rules:
    - Every method is async because it typically performs I/O (RPC).
    - Failures raise `RemoteCallFailure`; unset slots return empty/default
      values. Callers cannot tell an unset slot from a stored empty value.
    - `RawText` results are wire-encoded and must be decoded by the caller.
    """

    async def get_owner(self, account: str) -> str:
        ...

    async def get_title(self, account: str) -> str:
        ...

    async def get_pubkey(self, account: str) -> str:
        ...

    async def get_all_param_names(self, account: str) -> Sequence[RawText]:
        ...

    async def get_param_value(self, account: str, name: str) -> RawText:
        """Look up a parameter by its *decoded* name."""

        ...

    async def get_endpoint_names(self, account: str) -> Sequence[str]:
        ...

    async def get_curve(self, account: str, endpoint: str) -> Any:
        ...

    async def get_bound(self, account: str, endpoint: str) -> Any:
        ...

    async def get_endpoint_params(self, account: str, endpoint: str) -> Sequence[RawText]:
        ...
