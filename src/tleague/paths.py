"""
Path utilities for tleague.
"""

from pathlib import Path

DATA_DIR_NAME = ".tleague"


def get_package_dir() -> Path:
    """Directory of the installed tleague package."""
    return Path(__file__).parent


def get_i18n_dir() -> Path:
    """Get the i18n directory path."""
    return get_package_dir() / "i18n"


def get_seed_path() -> Path:
    """Bundled dataset used to boot a fresh league."""
    return get_package_dir() / "data" / "initial_data.json"


def get_data_dir() -> Path:
    """
    Get the user data directory for the league state and exports.

    Returns:
        .tleague/ in the current working directory (created if missing)
    """
    data_dir = Path.cwd() / DATA_DIR_NAME
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_default_state_path() -> Path:
    """Default JSON file holding the league state (relative to the working directory)."""
    return Path(DATA_DIR_NAME) / "state.json"
