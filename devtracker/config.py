"""Configuration management for the activity tracker"""

import os
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv


DEFAULT_IGNORE = ['node_modules', '.git', '__pycache__', 'package-lock.json', '.DS_Store']


class Config:
    """Application configuration loaded from .env and environment variables"""

    def __init__(self, env_path: Optional[Path] = None):
        # Load .env file from the directory the tracker is started in
        env_path = env_path or Path.cwd() / '.env'
        load_dotenv(env_path)

        # Idle threshold shared by per-file active time and session productive time
        self.idle_minutes = self._parse_int('DEVTRACKER_IDLE_MINUTES', '5')
        self.idle_threshold_ms = self.idle_minutes * 60 * 1000

        # Storage
        self.snapshot_dir_name = os.getenv('DEVTRACKER_SNAPSHOT_DIR', '.devtracker')
        self.report_path = Path(os.getenv('DEVTRACKER_REPORT_PATH', 'dev-report.json'))

        # Report display
        self.top_languages = self._parse_int('DEVTRACKER_TOP_LANGUAGES', '3')
        self.top_files = self._parse_int('DEVTRACKER_TOP_FILES', '10')

        # Watching
        self.ignore_patterns = DEFAULT_IGNORE + self._parse_list(os.getenv('DEVTRACKER_IGNORE', ''))
        self.initial_scan = self._parse_bool(os.getenv('DEVTRACKER_INITIAL_SCAN', 'true'))

    def _parse_int(self, name: str, default: str) -> int:
        """Parse a non-negative integer environment variable"""
        value = os.getenv(name, default)
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid value for {name}: {value!r}. Expected an integer")
        if parsed < 0:
            raise ValueError(f"Invalid value for {name}: {value!r}. Must not be negative")
        return parsed

    def _parse_bool(self, value: str) -> bool:
        """Parse boolean string"""
        return value.lower() in ('true', '1', 'yes', 'on')

    def _parse_list(self, value: str) -> List[str]:
        """Parse comma-separated list, dropping blanks"""
        return [item.strip() for item in value.split(',') if item.strip()]

    def ignored_names(self) -> List[str]:
        """Names excluded from watching and language stats, snapshot directory included"""
        return self.ignore_patterns + [self.snapshot_dir_name]


# Global config instance
config = Config()
