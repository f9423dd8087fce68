"""Runtime configuration — env-driven.

Centralized settings using pydantic-settings. Reads from a .env file and
PKGRECEIPT_* environment variables.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from pkgreceipt import __version__


class ReceiptSettings(BaseSettings):
    """Receipt settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export PKGRECEIPT_LOG_LEVEL=DEBUG
        export PKGRECEIPT_RECEIPT_FILENAME=RECEIPT.json

    Or via .env file::

        PKGRECEIPT_TOOL_VERSION=4.2.0
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PKGRECEIPT_",
        env_file_encoding="utf-8",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False

    # Version stamped into every new receipt
    tool_version: str = __version__

    # Receipt file layout
    receipt_filename: str = "INSTALL_RECEIPT.json"
    json_indent: int = 2

    # Shown by Receipt.display_text() for packages loaded from the remote index
    remote_index_name: str = "the package index API"

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"


# Module-level singleton — import as `from pkgreceipt.config import config`
config = ReceiptSettings()
