"""Ledger connection configuration models."""

from typing import Literal

from pydantic import BaseModel, Field, SecretStr

LedgerBackend = Literal["hedera", "mock"]
LedgerNetwork = Literal["testnet", "previewnet", "mainnet"]


class LedgerConfig(BaseModel):
    """Configuration for the ledger client.

    When operator_id or operator_key is unset, Settings fills it from the
    HEDERA_ACCOUNT_ID or HEDERA_PRIVATE_KEY environment variable.
    """

    backend: LedgerBackend = Field(
        default="hedera",
        description="Ledger client implementation",
    )
    network: LedgerNetwork = Field(
        default="testnet",
        description="Hedera network to submit transactions to",
    )
    operator_id: str | None = Field(
        default=None,
        description="Operating account id (shard.realm.num)",
    )
    operator_key: SecretStr | None = Field(
        default=None,
        description="Operating account private key",
    )
    token_decimals: int = Field(
        default=0,
        ge=0,
        le=18,
        description="Decimals of minted receipt tokens",
    )
    initial_supply: int = Field(
        default=1,
        gt=0,
        description="Units minted per receipt token",
    )
