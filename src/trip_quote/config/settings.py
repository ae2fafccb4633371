"""
Centralized settings and path configuration for the trip quote tool.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

PACKAGE_DATA = Path(__file__).resolve().parent.parent / 'data'


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path
    data_dir: Path

    # Editable pricing configuration (written by the config store)
    pricing_config: Path

    # Bundled defaults
    default_pricing: Path
    default_quote: Path

    # Debounce before an edited pricing config is saved, in seconds
    autosave_delay: float = 1.0

    default_locale: str = 'en'

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure and environment."""
        root = project_root or get_project_root()
        data_dir = Path(os.environ.get('TRIP_QUOTE_DATA_DIR', root / 'data'))

        return cls(
            project_root=root,
            data_dir=data_dir,
            pricing_config=data_dir / 'pricingConfig.json',
            default_pricing=PACKAGE_DATA / 'default_pricing.json',
            default_quote=PACKAGE_DATA / 'default_quote.json',
            autosave_delay=float(os.environ.get('TRIP_QUOTE_AUTOSAVE_DELAY', '1.0')),
            default_locale=os.environ.get('TRIP_QUOTE_LOCALE', 'en'),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
