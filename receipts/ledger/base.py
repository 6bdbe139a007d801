"""Ledger client interface."""

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field


class LedgerError(Exception):
    """Raised when the ledger rejects a transaction or cannot be reached.

    The message is the upstream error text and is surfaced to API callers
    unchanged.
    """

    def __init__(self, message: str, *, status: str | None = None) -> None:
        self.message = message
        self.status = status
        super().__init__(message)


class ConfigurationError(Exception):
    """Raised at startup when the ledger client cannot be configured."""


class TokenCreation(BaseModel):
    """Result of a confirmed token-creation transaction."""

    token_id: str = Field(..., description="Id of the newly created token")
    transaction_id: str = Field(..., description="Id of the creating transaction")


class AccountBalance(BaseModel):
    """Native and token balances of one account."""

    account_id: str
    hbars: str = Field(..., description="Native balance as rendered by the ledger")
    tokens: dict[str, int] = Field(
        default_factory=dict, description="Token id to balance in smallest units"
    )


class LedgerClient(ABC):
    """Abstract interface for the distributed ledger.

    Every method submits (or queries) and waits for confirmation. Failures
    of any kind are raised as LedgerError.
    """

    @property
    @abstractmethod
    def operator_id(self) -> str:
        """Account that pays for, signs and treasures submitted transactions."""
        pass

    @property
    def network(self) -> str:
        """Name of the network the client talks to."""
        return "unknown"

    @abstractmethod
    async def create_token(
        self,
        name: str,
        symbol: str,
        *,
        decimals: int = 0,
        initial_supply: int = 1,
    ) -> TokenCreation:
        """Create a fungible token with the operator as treasury."""
        pass

    @abstractmethod
    async def transfer_token(self, token_id: str, to_account_id: str, amount: int) -> str:
        """Move amount units from the operator to to_account_id.

        Returns:
            Transaction id
        """
        pass

    @abstractmethod
    async def associate_token(self, token_id: str, account_id: str) -> str:
        """Associate account_id with token_id.

        Returns:
            Transaction id
        """
        pass

    @abstractmethod
    async def get_account_balance(self, account_id: str) -> AccountBalance:
        """Query native and token balances of an account."""
        pass

    async def close(self) -> None:  # noqa: B027
        """Release network resources."""
