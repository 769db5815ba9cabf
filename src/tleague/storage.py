"""JSON persistence for the league state.

The state lives in memory; these helpers only move whole snapshots to and
from JSON files (backup export / import). Every load goes through the
sanitizer, which is the only parser of the persisted layout.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional, Union

from tleague.models import AppState
from tleague.paths import get_seed_path
from tleague.sanitizer import sanitize_state

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Error reading or writing a state file."""

    pass


def state_to_json(state: AppState) -> str:
    """Serialize a snapshot in the persisted layout (indent 2)."""
    return json.dumps(state.to_dict(), indent=2, ensure_ascii=False)


def state_from_json(text: str) -> AppState:
    """Parse and sanitize an exported state.

    Raises:
        StorageError: If the text is not JSON at all. Well-formed JSON with
            the wrong shape is repaired by the sanitizer instead.
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise StorageError(f"File content is not valid JSON: {e}")
    return sanitize_state(raw)


def read_state_text(path: Union[str, Path]) -> str:
    """Read a state file or backup as UTF-8 text.

    Raises:
        StorageError: If the file is missing, unreadable or not UTF-8
    """
    state_file = Path(path)
    if not state_file.exists():
        raise StorageError(f"State file not found: {path}")

    try:
        with open(state_file, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise StorageError(f"Cannot read state file {path}: {e}")


def load_state(path: Union[str, Path]) -> AppState:
    """Read a state file to completion.

    Raises:
        StorageError: If the file is missing, unreadable or not JSON
    """
    state = state_from_json(read_state_text(path))
    logger.info(
        "Loaded %s: %d players, %d months", path, len(state.players), len(state.monthly_data)
    )
    return state


def save_state(state: AppState, path: Union[str, Path]) -> Path:
    """Write a state file to completion, creating parent directories.

    Raises:
        StorageError: If the file cannot be written
    """
    state_file = Path(path)
    try:
        state_file.parent.mkdir(parents=True, exist_ok=True)
        with open(state_file, "w", encoding="utf-8") as f:
            f.write(state_to_json(state))
    except OSError as e:
        raise StorageError(f"Cannot write state file {path}: {e}")
    return state_file


def load_seed_state() -> AppState:
    """Boot state from the bundled dataset."""
    return load_state(get_seed_path())


def backup_filename(today: Optional[date] = None) -> str:
    """Name of a JSON backup, e.g. ranking_backup_2024-03-01.json."""
    if today is None:
        today = date.today()
    return f"ranking_backup_{today.isoformat()}.json"
