"""
Configuration models using Pydantic for type-safe validation.

This module defines every configuration option of the monitor:
- SystemConfig: Log level, log format, log file
- MonitorConfig: Poll interval, observation window, pattern thresholds
- FilterConfig: Liquidity/volume minimums, chain allow-list
- BlacklistConfig: Seed blacklists and the token -> developer map
- EndpointConfig: Market data, oracle and execution endpoints
- TradingConfig: Buy notional and sell marker
- NotificationConfig: Telegram and SendGrid settings
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from enum import Enum
from pathlib import Path


# ============================================================================
# Enums for Configuration
# ============================================================================

class LogLevel(str, Enum):
    """Logging level."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid", use_enum_values=True, validate_default=True)


# ============================================================================
# System Configuration
# ============================================================================

class SystemConfig(_Section):
    """System-wide settings."""

    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level"
    )

    json_logs: bool = Field(
        default=False,
        description="Emit JSON formatted log lines"
    )

    log_file: Optional[Path] = Field(
        default=None,
        description="Optional log file path"
    )


# ============================================================================
# Monitor Configuration
# ============================================================================

class MonitorConfig(_Section):
    """Polling and pattern detection settings."""

    poll_interval_ms: int = Field(
        default=60000,
        ge=1000,
        description="Delay between two poll cycles in milliseconds"
    )

    observation_window: int = Field(
        default=5,
        ge=2,
        le=1000,
        description="Observations kept per asset"
    )

    price_drop_threshold: float = Field(
        default=0.90,
        gt=0.0,
        le=1.0,
        description="Drop ratio flagging a rug (0.90 = 90% drop)"
    )

    price_pump_threshold: float = Field(
        default=1.50,
        gt=1.0,
        description="Price ratio flagging a pump (1.50 = 50% gain)"
    )


# ============================================================================
# Filter Configuration
# ============================================================================

class FilterConfig(_Section):
    """Admission thresholds applied after the oracle checks."""

    min_liquidity: float = Field(
        default=0.0,
        ge=0.0,
        description="Minimum USD liquidity"
    )

    min_volume_24h: float = Field(
        default=0.0,
        ge=0.0,
        description="Minimum 24h USD volume"
    )

    chains_allowed: List[str] = Field(
        default_factory=list,
        description="Chain allow-list (empty = every chain)"
    )


# ============================================================================
# Blacklist Configuration
# ============================================================================

class BlacklistConfig(_Section):
    """Seed blacklists and developer lookup."""

    tokens: List[str] = Field(
        default_factory=list,
        description="Blacklisted token addresses"
    )

    developers: List[str] = Field(
        default_factory=list,
        description="Blacklisted developer addresses"
    )

    developer_map: Dict[str, str] = Field(
        default_factory=dict,
        description="Token address -> controlling developer address"
    )

    @field_validator('tokens', 'developers')
    @classmethod
    def lowercase_addresses(cls, v):
        """Addresses are compared in lowercase."""
        return [address.strip().lower() for address in v if address.strip()]

    @field_validator('developer_map')
    @classmethod
    def lowercase_map(cls, v):
        return {token.strip().lower(): dev.strip().lower() for token, dev in v.items()}


# ============================================================================
# Endpoint Configuration
# ============================================================================

class EndpointConfig(_Section):
    """External service endpoints."""

    dexscreener_api_url: str = Field(
        default="https://api.dexscreener.com/latest/dex/search?q=solana",
        description="Market data endpoint returning {'pairs': [...]}"
    )

    bundling_api_url: Optional[str] = Field(
        default=None,
        description="Supply-bundling oracle (static list used when unset)"
    )

    known_bundled_tokens: List[str] = Field(
        default_factory=list,
        description="Token addresses known to have bundled supply"
    )

    rugcheck_api_url: str = Field(
        default="http://api.rugcheck.xyz/v1/check",
        description="Integrity oracle endpoint"
    )

    pocket_universe_api_url: str = Field(
        default="https://api.pocketuniverse.com/check-volume",
        description="Fake volume oracle endpoint"
    )

    execution_api_url: Optional[str] = Field(
        default=None,
        description="Trade execution endpoint (commands are only logged when unset)"
    )

    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        description="Timeout applied to every external call"
    )

    @field_validator('known_bundled_tokens')
    @classmethod
    def lowercase_bundled(cls, v):
        return [address.strip().lower() for address in v if address.strip()]


# ============================================================================
# Trading Configuration
# ============================================================================

class TradingConfig(_Section):
    """Fixed trade amounts (no position sizing)."""

    buy_amount: str = Field(
        default="0.1 BNB",
        min_length=1,
        description="Notional sent with every buy command"
    )

    sell_amount: str = Field(
        default="ALL",
        min_length=1,
        description="Marker sent with every sell command"
    )

    bot_username: str = Field(
        default="BonkBot",
        description="Trading bot the commands are addressed to"
    )


# ============================================================================
# Notification Configuration
# ============================================================================

class SendGridConfig(_Section):
    """SendGrid email configuration."""

    api_key_env: str = Field(
        default="SENDGRID_API_KEY",
        description="Environment variable for SendGrid API key"
    )

    from_email: str = Field(
        default="dexwatch@localhost",
        description="From email address"
    )

    to_emails: List[str] = Field(
        default_factory=list,
        description="List of recipient email addresses"
    )

    mock_mode: bool = Field(
        default=False,
        description="Log emails instead of sending them"
    )


class NotificationConfig(_Section):
    """Notification sinks."""

    telegram_bot_token: Optional[SecretStr] = Field(
        default=None,
        description="Telegram bot token"
    )

    telegram_chat_id: Optional[str] = Field(
        default=None,
        description="Telegram chat receiving alerts"
    )

    sendgrid: Optional[SendGridConfig] = Field(
        default=None,
        description="Optional email sink"
    )

    notify_summary: bool = Field(
        default=False,
        description="Also send the end-of-cycle summary to the sinks"
    )


# ============================================================================
# Complete Application Configuration
# ============================================================================

class AppConfig(_Section):
    """Complete application configuration."""

    system: SystemConfig = Field(default_factory=SystemConfig)
    monitor: MonitorConfig = Field(default_factory=MonitorConfig)
    filters: FilterConfig = Field(default_factory=FilterConfig)
    blacklist: BlacklistConfig = Field(default_factory=BlacklistConfig)
    endpoints: EndpointConfig = Field(default_factory=EndpointConfig)
    trading: TradingConfig = Field(default_factory=TradingConfig)
    notification: NotificationConfig = Field(default_factory=NotificationConfig)
