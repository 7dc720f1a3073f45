from typing import Any, Literal, Optional
from pathlib import Path
import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from .domain.models import ThresholdConfig
from .exceptions import ConfigError

SslMode = Literal["disable", "allow", "prefer", "require", "verify-ca", "verify-full"]

class CheckConfig(BaseSettings):
    """
    Options shared by both checks. Frozen: built once per invocation
    from YAML/env/CLI and never mutated afterwards.
    """
    model_config = SettingsConfigDict(env_prefix="PGCHECK_", frozen=True, extra="ignore")

    user: str = ""
    password: str = ""
    pgpass: Optional[Path] = None
    pgpass_match: bool = False
    hostname: str = "localhost"
    # range is checked by validate(), not here, so a bad port becomes a check result
    port: int = 5432
    database: str = "postgres"
    sslmode: SslMode = "prefer"
    timeout: int = 10

    @classmethod
    def load(cls, config_path: Optional[Path] = None, **overrides: Any) -> "CheckConfig":
        """
        Build the config. Precedence: overrides (CLI) > YAML file > environment > defaults.
        None-valued overrides are treated as "not given".
        """
        raw_config = {}
        if config_path is not None:
            raw_config = cls._read_yaml(config_path)
        raw_config.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls(**raw_config)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}")

    @staticmethod
    def _read_yaml(config_path: Path) -> dict:
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")

        try:
            with open(config_path, "r") as f:
                raw_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Invalid configuration format: {e}")

        if raw_config is None:
            return {}
        if not isinstance(raw_config, dict):
            raise ConfigError(f"Invalid configuration format: expected a mapping in {config_path}")
        # YAML keys may be written the way the CLI flags are spelled
        return {str(k).replace("-", "_"): v for k, v in raw_config.items()}

class ConnectionsCheckConfig(CheckConfig):
    warning: int = 200
    critical: int = 250
    percentage: bool = False

    @property
    def thresholds(self) -> ThresholdConfig:
        return ThresholdConfig(
            warning=self.warning,
            critical=self.critical,
            use_percentage=self.percentage,
        )
