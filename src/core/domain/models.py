"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  Core to I/O libraries.
- Free, stable serialization for the JSON/HTML exporters.

Note:
- These models describe *what* a registry entry is, not *how* it is read.
- Every model is a frozen, point-in-time snapshot built per invocation.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class ProviderIdentity(BaseModel):
    """Who the provider is, as recorded in the registry.

    An empty `title` is the registry's way of saying "never registered";
    `registered` reflects that rule.
    """

    model_config = ConfigDict(frozen=True)

    account: str = Field(
        ...,
        min_length=1,
        description="Queried account identifier (e.g. hex address).",
    )
    owner: str = Field(
        ...,
        description="Registering owner, may differ from the queried account.",
    )
    title: str = Field(
        default="",
        description="Provider title; empty means unregistered.",
    )
    pubkey: str = Field(
        default="",
        description="Provider public key, as text.",
    )

    @property
    def registered(self) -> bool:
        return bool(self.title)


class EndpointReport(BaseModel):
    """One subscription endpoint: curve, bound and decoded params."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Endpoint name.")
    curve: Any = Field(
        default=None,
        description="Bonding curve descriptor, passed through unmodified.",
    )
    bound: Any = Field(
        default=None,
        description="Bound value, passed through unmodified.",
    )
    params: list[str] = Field(
        default_factory=list,
        description="Decoded endpoint params, in registry order (duplicates kept).",
    )


class ProviderReport(BaseModel):
    """Aggregate: the full registry entry of one provider."""

    model_config = ConfigDict(frozen=True)

    identity: ProviderIdentity
    params: dict[str, str] = Field(
        default_factory=dict,
        description="Decoded parameter name -> decoded parameter value.",
    )
    endpoints: dict[str, EndpointReport] = Field(
        default_factory=dict,
        description="Endpoint name -> report, in registry order.",
    )

    @property
    def title(self) -> str:
        return self.identity.title

    @property
    def endpoint_names(self) -> list[str]:
        return list(self.endpoints)


class NotRegistered(BaseModel):
    """Terminal outcome for an account without a registry entry.

    Not an error: callers branch on it explicitly.
    """

    model_config = ConfigDict(frozen=True)

    account: str = Field(..., min_length=1)
    owner: str = Field(default="")
