"""Service settings: TOML files, RECEIPTS_* variables and Hedera credentials."""

from typing import Any

from pydantic import AliasChoices, Field, SecretStr, model_validator
from pydantic_settings import (
    BaseSettings,
    InitSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from receipts.config.loader import load_config
from receipts.config.models.api import APIConfig
from receipts.config.models.ledger import LedgerConfig
from receipts.config.models.observability import ObservabilityConfig


class TomlFilesSource(InitSettingsSource):
    """Settings source over config/default.toml and its environment override.

    Without a default.toml the source is empty and settings come from code
    defaults and environment variables alone.
    """

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        try:
            values: dict[str, Any] = load_config()
        except FileNotFoundError:
            values = {}
        super().__init__(settings_cls, values)


class Settings(BaseSettings):
    """Receipts service settings.

    Precedence, highest first: constructor arguments, environment variables,
    TOML files, code defaults. Nested sections are set from the environment
    with a double underscore, e.g. ``RECEIPTS_LEDGER__NETWORK=previewnet``.

    The operator account is also read from the conventional Hedera variables
    ``HEDERA_ACCOUNT_ID`` and ``HEDERA_PRIVATE_KEY``; an explicit
    ``ledger.operator_id``/``ledger.operator_key`` wins over them.
    """

    model_config = SettingsConfigDict(
        env_prefix="RECEIPTS_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "receipts"
    debug: bool = False

    api: APIConfig = Field(default_factory=APIConfig)
    ledger: LedgerConfig = Field(default_factory=LedgerConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    hedera_account_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("HEDERA_ACCOUNT_ID", "hedera_account_id"),
        exclude=True,
    )
    hedera_private_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("HEDERA_PRIVATE_KEY", "hedera_private_key"),
        exclude=True,
    )

    @model_validator(mode="after")
    def fill_operator_credentials(self) -> "Settings":
        """Use the Hedera variables for operator fields the ledger section leaves unset."""
        updates: dict[str, Any] = {}
        if self.ledger.operator_id is None and self.hedera_account_id:
            updates["operator_id"] = self.hedera_account_id
        if self.ledger.operator_key is None and self.hedera_private_key is not None:
            updates["operator_key"] = self.hedera_private_key
        if updates:
            self.ledger = self.ledger.model_copy(update=updates)
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # .env is loaded into the process environment by the entry point
        return init_settings, env_settings, TomlFilesSource(settings_cls)
