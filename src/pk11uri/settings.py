"""Parser settings loaded from environment / .env file."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for the PKCS#11 URI parser and CLI.

    Values are read from ``PK11URI_``-prefixed environment variables and
    from a ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="PK11URI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "WARNING"

    # Reject URIs that violate RFC7512.  Disabling trusts the input: names and
    # values are not checked and duplicate attributes overwrite each other.
    validate_uri: bool = True

    # Emit "pkcs11 warning:" messages for RFC7512 SHOULD/SHOULD NOT guidelines.
    warnings: bool = True
