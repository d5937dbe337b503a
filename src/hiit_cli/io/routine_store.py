"""
File-based routine storage.

Routines are individual JSON files.  Sample routines ship inside the
package (``src/hiit_cli/routines/``); the user's own routines live in
``<data_dir>/routines/``.  A user file with the same stem as a bundled one
replaces it.
"""

import os
import shutil
import warnings
from pathlib import Path

from ..core.config import DATA_DIR_ENV, DEFAULT_DATA_DIR_NAME, ROUTINES_DIR_NAME
from ..core.models import Routine
from .serializers import ValidationError, routine_from_json, routine_to_json


def get_default_data_dir() -> Path:
    """
    Get the default data directory.

    $HIIT_CLI_DATA_DIR when set, otherwise ~/.hiit-cli.
    """
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / DEFAULT_DATA_DIR_NAME


def get_bundled_routines_dir() -> Path | None:
    """Return the packaged sample routines directory, or None if missing."""
    # routine_store.py lives at src/hiit_cli/io/routine_store.py
    candidate = Path(__file__).parent.parent / ROUTINES_DIR_NAME
    return candidate if candidate.is_dir() else None


def _routine_file_name(name: str) -> str:
    return name if name.endswith(".json") else f"{name}.json"


class RoutineStore:
    """
    Lists, loads and saves routine JSON files.

    Lookups search the user's routines directory first, then the bundled
    samples.
    """

    def __init__(self, data_dir: str | Path, bundled_dir: Path | None = None):
        """
        Initialize the store.

        Args:
            data_dir: Root data directory (routines live in data_dir/routines)
            bundled_dir: Sample routines directory; defaults to the packaged one
        """
        self.data_dir = Path(data_dir)
        self.routines_dir = self.data_dir / ROUTINES_DIR_NAME
        self.bundled_dir = bundled_dir if bundled_dir is not None else get_bundled_routines_dir()

    def exists(self) -> bool:
        """Check if the data directory exists."""
        return self.data_dir.is_dir()

    def init(self, copy_samples: bool = True) -> list[str]:
        """
        Create the data directories, optionally copying bundled samples.

        Existing user files are never overwritten.

        Returns:
            Names of the sample routines copied
        """
        self.routines_dir.mkdir(parents=True, exist_ok=True)

        copied: list[str] = []
        if copy_samples and self.bundled_dir is not None:
            for src in sorted(self.bundled_dir.glob("*.json")):
                dest = self.routines_dir / src.name
                if not dest.exists():
                    shutil.copyfile(src, dest)
                    copied.append(src.stem)
        return copied

    def _user_files(self) -> dict[str, Path]:
        if not self.routines_dir.is_dir():
            return {}
        return {p.stem: p for p in sorted(self.routines_dir.glob("*.json"))}

    def _bundled_files(self) -> dict[str, Path]:
        if self.bundled_dir is None:
            return {}
        return {p.stem: p for p in sorted(self.bundled_dir.glob("*.json"))}

    def user_routine_count(self) -> int:
        return len(self._user_files())

    def available_routines(self) -> list[str]:
        """Return routine names (file stems), user and bundled, sorted."""
        names = set(self._bundled_files()) | set(self._user_files())
        return sorted(names)

    def routine_path(self, name: str) -> Path | None:
        """Resolve a routine name to its file, preferring the user's copy."""
        stem = Path(_routine_file_name(name)).stem
        user = self._user_files().get(stem)
        if user is not None:
            return user
        return self._bundled_files().get(stem)

    def load_routine(self, name: str) -> Routine:
        """
        Load a routine by name (with or without .json).

        Raises:
            FileNotFoundError: If no routine file matches
            ValidationError: If the file is not a valid routine
        """
        path = self.routine_path(name)
        if path is None:
            raise FileNotFoundError(
                f"Routine '{name}' not found in {self.routines_dir}. Run 'list' to see available routines."
            )
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ValidationError(f"Failed to read routine '{name}': {e}") from e
        try:
            return routine_from_json(text)
        except ValidationError as e:
            raise ValidationError(f"Failed to load routine '{name}': {e}") from e

    def list_routines(self) -> list[tuple[str, Routine]]:
        """
        Load every available routine.

        Files that fail to load are skipped with a warning.
        """
        result: list[tuple[str, Routine]] = []
        for name in self.available_routines():
            try:
                result.append((name, self.load_routine(name)))
            except ValidationError as exc:
                warnings.warn(f"hiit-cli: skipping routine '{name}' ({exc})", stacklevel=2)
        return result

    def target_path(self, routine: Routine, file_name: str | None = None) -> Path:
        """
        Path ``save_routine`` would write to.

        The default file name is the lower-cased routine name with spaces
        and path separators replaced by dashes.  Only the final component of
        an explicit ``file_name`` is used, so files always land directly in
        the routines directory.

        Raises:
            ValueError: If no usable file name remains
        """
        if file_name is None:
            file_name = routine.name.strip().lower()
            for sep in (" ", "/", "\\"):
                file_name = file_name.replace(sep, "-")
        stem = Path(file_name).name
        if stem in ("", ".", "..", ".json"):
            raise ValueError(f"Invalid routine file name: {file_name!r}")
        return self.routines_dir / _routine_file_name(stem)

    def save_routine(self, routine: Routine, file_name: str | None = None) -> Path:
        """
        Write a routine to the user's routines directory.

        Args:
            routine: Routine to save (must be valid)
            file_name: Target file name; defaults to the lower-cased routine
                name (see target_path)

        Returns:
            Path of the written file

        Raises:
            InvalidRoutine: If the routine fails validation
            ValueError: If the file name is unusable
            OSError: If the file cannot be written
        """
        routine.validate()
        path = self.target_path(routine, file_name)

        self.routines_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(routine_to_json(routine) + "\n", encoding="utf-8")
        return path
