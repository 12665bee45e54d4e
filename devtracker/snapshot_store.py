"""Snapshot baselines: last known content of each tracked file"""

import hashlib
from pathlib import Path
from typing import Optional, Union

from .errors import SnapshotError, StartupError


class SnapshotStore:
    """Keeps one snapshot file per tracked path inside a side directory"""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def ensure_directory(self):
        """Create the snapshot directory (fatal if this fails)"""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StartupError(f"Cannot create snapshot directory {self.directory}: {e}") from e

        if not self.directory.is_dir():
            raise StartupError(f"Snapshot path is not a directory: {self.directory}")

    def snapshot_path(self, path: Union[str, Path]) -> Path:
        """
        Location of the snapshot for a tracked path

        Keyed by a digest of the resolved absolute path, so two files with the
        same base name in different directories get separate baselines.
        """
        resolved = Path(path).resolve()
        digest = hashlib.sha256(str(resolved).encode('utf-8')).hexdigest()[:32]
        return self.directory / f"{digest}-{resolved.name}"

    def put(self, path: Union[str, Path], content: str):
        """Store content as the baseline for path"""
        target = self.snapshot_path(path)
        try:
            target.write_text(content, encoding='utf-8')
        except OSError as e:
            raise SnapshotError(f"Cannot write snapshot for {path}: {e}") from e

    def has(self, path: Union[str, Path]) -> bool:
        return self.snapshot_path(path).exists()

    def get(self, path: Union[str, Path]) -> Optional[str]:
        """Return the stored baseline for path, or None if there is none yet"""
        target = self.snapshot_path(path)
        if not target.exists():
            return None

        try:
            return target.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise SnapshotError(f"Cannot read snapshot for {path}: {e}") from e

    def discard(self, path: Union[str, Path]):
        """Remove the baseline for path if present"""
        target = self.snapshot_path(path)
        try:
            target.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise SnapshotError(f"Cannot remove snapshot for {path}: {e}") from e
