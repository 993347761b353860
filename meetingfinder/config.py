"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Literal, Optional, Sequence

import yaml
from pydantic import BaseModel, Field, field_validator


class DefaultsConfig(BaseModel):
    """Default settings for search."""
    duration_minutes: int = 30
    output: Literal["table", "json"] = "table"

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure meeting duration is positive."""
        if value <= 0:
            raise ValueError("duration_minutes must be greater than zero")
        return value


class Attendee(BaseModel):
    """Attendee alias configuration."""
    name: str  # Used as alias
    email: str

    def display_name(self) -> str:
        """Get display name."""
        return self.name


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    events_file: Optional[Path] = None
    attendees: List[Attendee] = Field(default_factory=list)
    log_level: str = "WARNING"

    @field_validator("attendees")
    @classmethod
    def validate_attendees(cls, value: List[Attendee]) -> List[Attendee]:
        """Ensure attendee aliases and emails are unique."""
        seen_names: set[str] = set()
        seen_emails: set[str] = set()
        for attendee in value:
            name_key = attendee.name.lower()
            email_key = attendee.email.lower()
            if name_key in seen_names:
                raise ValueError(f"Duplicate attendee name detected: {attendee.name}")
            if email_key in seen_emails:
                raise ValueError(f"Duplicate attendee email detected: {attendee.email}")
            seen_names.add(name_key)
            seen_emails.add(email_key)
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept standard logging level names only."""
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

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

        # Relative event files are looked up next to the config file
        if config.events_file is not None and not config.events_file.is_absolute():
            config.events_file = config_path.parent / config.events_file

        return config

    def find_attendee_by_name(self, name: str) -> Attendee | None:
        """Find an attendee by their name (alias)."""
        for attendee in self.attendees:
            if attendee.name.lower() == name.lower():
                return attendee
        return None

    def resolve_attendee(self, identifier: str) -> str:
        """
        Resolve an attendee identifier (alias or email) to the identifier used
        in event data.

        Emails are lower-cased, configured aliases map to their email, and any
        other identifier is used unchanged.
        """
        if "@" in identifier:
            return identifier.lower()

        attendee = self.find_attendee_by_name(identifier)
        if attendee:
            return attendee.email.lower()

        return identifier

    def resolve_attendees(self, identifiers: Sequence[str]) -> List[str]:
        """Resolve multiple identifiers, dropping duplicates but keeping order."""
        resolved: List[str] = []
        for identifier in identifiers:
            value = self.resolve_attendee(identifier)
            if value not in resolved:
                resolved.append(value)
        return resolved


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
