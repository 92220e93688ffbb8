"""RegistryReader backed by the on-chain Registry and Bondage contracts.

Every lookup is a read-only contract call through `AsyncWeb3`
(`contract.functions.X(...).call()`); web3 handles call data and ABI result
decoding from the minimal ABIs below.

Wire conventions:
- Titles and endpoint names are `bytes32` and are decoded to text here.
- Parameter names, parameter values and endpoint params are returned raw
  (`0x` hex) so the report aggregator owns their decoding.
- Text arguments (endpoint names, parameter keys) travel as NUL padded
  `bytes32`.
"""

from __future__ import annotations

import logging
from typing import Any

from web3 import AsyncWeb3, Web3
from web3.contract.async_contract import AsyncContractFunction

from core.config import AppSettings
from core.domain.errors import RemoteCallFailure
from core.domain.wire_text import decode_wire_text, encode_wire_text
from core.interfaces.registry_reader import RegistryReader

from adapters.web3_client import NODE_ERRORS, build_web3

logger = logging.getLogger(__name__)


def _view(name: str, inputs: list[str], output: str) -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "stateMutability": "view",
        "inputs": [{"name": f"arg{i}", "type": arg_type} for i, arg_type in enumerate(inputs)],
        "outputs": [{"name": "", "type": output}],
    }


REGISTRY_ABI: list[dict[str, Any]] = [
    _view("getProviderTitle", ["address"], "bytes32"),
    _view("getProviderPublicKey", ["address"], "uint256"),
    _view("getAllProviderParams", ["address"], "bytes32[]"),
    _view("getProviderParameter", ["address", "bytes32"], "bytes"),
    _view("getProviderEndpoints", ["address"], "bytes32[]"),
    _view("getProviderCurve", ["address", "bytes32"], "int256[]"),
    _view("getEndpointParams", ["address", "bytes32"], "bytes32[]"),
]

BONDAGE_ABI: list[dict[str, Any]] = [
    _view("getZapBound", ["address", "bytes32"], "uint256"),
]


def _to_bytes32(text: str) -> bytes:
    return bytes.fromhex(encode_wire_text(text, width=32)[2:])


def _to_hex(data: bytes) -> str:
    return "0x" + bytes(data).hex()


class ZapRegistryReader(RegistryReader):
    """Reads one provider's registry entry through web3 contract calls."""

    def __init__(
        self,
        w3: AsyncWeb3,
        *,
        registry_address: str,
        bondage_address: str,
    ) -> None:
        for label, address in (("registry_address", registry_address), ("bondage_address", bondage_address)):
            if not address or not Web3.is_address(address):
                raise ValueError(f"{label} is not a valid address: {address!r}")
        self._w3 = w3
        self._registry = w3.eth.contract(address=Web3.to_checksum_address(registry_address), abi=REGISTRY_ABI)
        self._bondage = w3.eth.contract(address=Web3.to_checksum_address(bondage_address), abi=BONDAGE_ABI)

    async def __aenter__(self) -> "ZapRegistryReader":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._w3.provider.disconnect()

    @staticmethod
    def _checksum(account: str) -> str:
        if not Web3.is_address(account):
            raise RemoteCallFailure(f"not a valid account address: {account!r}")
        return Web3.to_checksum_address(account)

    async def _call(self, function: AsyncContractFunction) -> Any:
        name = function.fn_name
        try:
            return await function.call()
        except NODE_ERRORS as exc:
            raise RemoteCallFailure(f"{name}: {exc.__class__.__name__}: {exc}", method=name) from exc

    async def get_owner(self, account: str) -> str:
        # Registry entries are keyed by the owner's address.
        return self._checksum(account)

    async def get_title(self, account: str) -> str:
        raw = await self._call(self._registry.functions.getProviderTitle(self._checksum(account)))
        return decode_wire_text(raw)

    async def get_pubkey(self, account: str) -> str:
        value = await self._call(self._registry.functions.getProviderPublicKey(self._checksum(account)))
        return str(value)

    async def get_all_param_names(self, account: str) -> list[str]:
        names = await self._call(self._registry.functions.getAllProviderParams(self._checksum(account)))
        return [_to_hex(name) for name in names]

    async def get_param_value(self, account: str, name: str) -> str:
        value = await self._call(
            self._registry.functions.getProviderParameter(self._checksum(account), _to_bytes32(name))
        )
        return _to_hex(value)

    async def get_endpoint_names(self, account: str) -> list[str]:
        names = await self._call(self._registry.functions.getProviderEndpoints(self._checksum(account)))
        return [decode_wire_text(name) for name in names]

    async def get_curve(self, account: str, endpoint: str) -> list[int]:
        curve = await self._call(
            self._registry.functions.getProviderCurve(self._checksum(account), _to_bytes32(endpoint))
        )
        return list(curve)

    async def get_bound(self, account: str, endpoint: str) -> int:
        return await self._call(
            self._bondage.functions.getZapBound(self._checksum(account), _to_bytes32(endpoint))
        )

    async def get_endpoint_params(self, account: str, endpoint: str) -> list[str]:
        params = await self._call(
            self._registry.functions.getEndpointParams(self._checksum(account), _to_bytes32(endpoint))
        )
        return [_to_hex(param) for param in params]

    async def default_account(self) -> str:
        """First account exposed by the node, for "my own provider" lookups."""

        try:
            accounts = await self._w3.eth.accounts
        except NODE_ERRORS as exc:
            raise RemoteCallFailure(f"eth_accounts: {exc}", method="eth_accounts") from exc
        if not accounts:
            raise RemoteCallFailure("unable to find an account in the current node", method="eth_accounts")
        logger.debug("using node account %s", accounts[0])
        return accounts[0]


def build_registry_reader(
    settings: AppSettings | None = None,
    *,
    w3: AsyncWeb3 | None = None,
) -> ZapRegistryReader:
    """Create a `ZapRegistryReader` from configuration.

    Raises `ValueError` when the contract addresses are not configured.
    """

    settings = settings or AppSettings()
    if not settings.registry_address or not settings.bondage_address:
        raise ValueError(
            "registry_address and bondage_address must be configured "
            "(ZAPINFO_REGISTRY_ADDRESS / ZAPINFO_BONDAGE_ADDRESS)"
        )
    return ZapRegistryReader(
        w3 or build_web3(settings),
        registry_address=settings.registry_address,
        bondage_address=settings.bondage_address,
    )
