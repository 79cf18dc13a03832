"""Configuration management for ccb-ops."""

import os
from dataclasses import dataclass, field

from ccb_ops.exceptions import ConfigurationError


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "ccb"
    user: str = "postgres"
    password: str = "postgres"

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class TableConfig:
    """Names of the tables the record store exposes."""

    operations: str = "ccb_operations"
    profiles: str = "profiles"
    roles: str = "user_roles"


@dataclass
class AppConfig:
    """Main configuration for ccb-ops."""

    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    tables: TableConfig = field(default_factory=TableConfig)
    log_level: str = "INFO"
    log_format: str = "standard"
    seed: int | None = None

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create config from environment variables."""
        postgres = PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=_int_env("POSTGRES_PORT", "5432"),
            database=os.getenv("POSTGRES_DB", "ccb"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", "postgres"),
        )

        tables = TableConfig(
            operations=os.getenv("CCB_OPERATIONS_TABLE", "ccb_operations"),
            profiles=os.getenv("PROFILES_TABLE", "profiles"),
            roles=os.getenv("USER_ROLES_TABLE", "user_roles"),
        )

        return cls(
            postgres=postgres,
            tables=tables,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            seed=_int_env("SEED") if os.getenv("SEED") else None,
        )


def _int_env(name: str, default: str | None = None) -> int:
    """Read an integer environment variable."""
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e
