"""Runtime settings for the curve build engine."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in _TRUE_VALUES


@dataclass
class BuildSettings:
    """Configuration knobs for the build engine."""

    # Raise ConfigurationValidationError instead of logging a warning when a
    # configuration does not validate cleanly.
    strict_validation: bool = False
    verbose: bool = False
    market_data_directory: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "BuildSettings":
        """
        Build settings from environment variables.

        Reads CURVEBUILD_STRICT_VALIDATION, CURVEBUILD_VERBOSE and
        CURVEBUILD_MARKET_DATA_DIR.
        """
        directory = os.getenv("CURVEBUILD_MARKET_DATA_DIR")
        return cls(
            strict_validation=_env_flag("CURVEBUILD_STRICT_VALIDATION"),
            verbose=_env_flag("CURVEBUILD_VERBOSE"),
            market_data_directory=Path(directory) if directory else None,
        )
