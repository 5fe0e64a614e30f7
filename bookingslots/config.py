"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import Literal, Optional, Tuple

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.time_utils import build_slot_grid, parse_hhmm


class SlotGridConfig(BaseModel):
    """Candidate appointment times offered on every day."""
    first_slot: str = "08:00"
    last_slot: str = "22:00"
    slot_interval_minutes: int = 30

    @field_validator("first_slot", "last_slot")
    @classmethod
    def validate_slot(cls, value: str) -> str:
        """Ensure slots are HH:mm times of day."""
        hours, minutes = parse_hhmm(value)
        return f"{hours:02d}:{minutes:02d}"

    @field_validator("slot_interval_minutes")
    @classmethod
    def validate_interval(cls, value: int) -> int:
        """Ensure the interval is positive."""
        if value <= 0:
            raise ValueError("slot_interval_minutes must be greater than zero")
        return value

    @model_validator(mode="after")
    def validate_order(self) -> "SlotGridConfig":
        """Ensure the grid does not end before it starts."""
        if parse_hhmm(self.last_slot) < parse_hhmm(self.first_slot):
            raise ValueError("last_slot must not be earlier than first_slot")
        return self

    def build_grid(self) -> Tuple[str, ...]:
        return build_slot_grid(self.first_slot, self.last_slot, self.slot_interval_minutes)


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: Optional[str] = None  # None = device local timezone
    locale: str = "en"
    week_starts_on: Literal["sunday", "monday"] = "sunday"
    auto_select_horizon_days: int = 30
    slots: SlotGridConfig = Field(default_factory=SlotGridConfig)
    business_file: Optional[Path] = None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: Optional[str]) -> Optional[str]:
        """Ensure the timezone name is known."""
        if value is None:
            return value
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: '{value}'") from exc
        return value

    @field_validator("auto_select_horizon_days")
    @classmethod
    def validate_horizon(cls, value: int) -> int:
        """Keep the date scan bounded."""
        if not 0 <= value <= 366:
            raise ValueError(f"auto_select_horizon_days must be between 0 and 366, got {value}")
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)

        # Relative business files are resolved against the config file
        if config.business_file is not None and not config.business_file.is_absolute():
            config.business_file = config_path.parent / config.business_file

        return config


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load the config file if there is one, otherwise use defaults.

    An explicitly given path must exist.
    """
    if config_path is not None:
        return AppConfig.load_from_yaml(config_path)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)
    return AppConfig()
