"""Configuration management for the Sound Whiskers client.

All configuration is read from environment variables.
"""
import os
from dataclasses import dataclass
from typing import Optional


_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {name}: {value!r}")


@dataclass
class SoundWhiskersConfig:
    """Configuration for talking to the Sound Whiskers API (reads from environment)."""

    # Required
    api_url: str

    # Optional
    access_token: Optional[str] = None
    timeout_seconds: float = 60.0
    is_pro: bool = True

    @classmethod
    def from_environment(cls, api_url: Optional[str] = None) -> 'SoundWhiskersConfig':
        """Load configuration from environment variables.

        Args:
            api_url: Explicit base URL taking precedence over SOUND_WHISKERS_API_URL

        Returns:
            SoundWhiskersConfig: Loaded configuration object

        Raises:
            EnvironmentError: If required environment variables are missing
            ValueError: If an optional variable has an unparseable value
        """
        api_url = api_url or os.getenv('SOUND_WHISKERS_API_URL')
        if not api_url:
            raise EnvironmentError(
                "Required environment variables missing: SOUND_WHISKERS_API_URL\n"
                "Example: export SOUND_WHISKERS_API_URL='https://soundwhiskers.example.com'"
            )

        timeout = os.getenv('SOUND_WHISKERS_TIMEOUT', '60')
        try:
            timeout_seconds = float(timeout)
        except ValueError:
            raise ValueError(f"Invalid SOUND_WHISKERS_TIMEOUT: {timeout!r}") from None

        config = cls(
            api_url=api_url,
            access_token=os.getenv('SOUND_WHISKERS_ACCESS_TOKEN') or None,
            timeout_seconds=timeout_seconds,
            is_pro=_parse_bool('SOUND_WHISKERS_PRO', os.getenv('SOUND_WHISKERS_PRO', 'true')),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any value is invalid
        """
        if not self.api_url.startswith(('http://', 'https://')):
            raise ValueError(
                f"Invalid api_url: {self.api_url}. Must be a valid HTTP/HTTPS URL"
            )
        if self.timeout_seconds <= 0:
            raise ValueError(
                f"Invalid timeout_seconds: {self.timeout_seconds}. Must be > 0"
            )

    def __repr__(self) -> str:
        """Return string representation with sensitive data masked."""
        return (
            f"SoundWhiskersConfig("
            f"api_url='{self.api_url}', "
            f"access_token={'***' if self.access_token else None}, "
            f"timeout_seconds={self.timeout_seconds}, "
            f"is_pro={self.is_pro}"
            f")"
        )
