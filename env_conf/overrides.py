"""
Override File Loader for env_conf

Reads the local ``.env`` family of files and merges them into a single
mapping. Candidate files, in order (later files win on key collision):

    .env
    .env.local
    .env.{mode}
    .env.{mode}.local

Parsing is delegated to python-dotenv. Lines it cannot parse are skipped
(python-dotenv logs a warning for each). Missing files are skipped, and
files that cannot be read or decoded as UTF-8 are skipped with a warning.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


class OverrideFileLoader:
    """
    Loads ``KEY=VALUE`` override files from a directory.

    The loader is stateless; the caller owns the store that results are
    merged into.
    """

    BASE_FILENAME = ".env"
    LOCAL_SUFFIX = ".local"

    def __init__(self, base_dir: Optional[Path] = None):
        """
        Initialize the override file loader.

        Args:
            base_dir: Directory holding the override files (default: cwd at load time)
        """
        self.base_dir = Path(base_dir) if base_dir else None

    def candidate_files(self, mode: Optional[str] = None) -> List[Path]:
        """
        Return the ordered list of candidate override files.

        Args:
            mode: Run mode used for the mode-specific files. An absent mode
                yields ``.env.`` style names, which normally do not exist.

        Returns:
            Candidate paths, lowest precedence first
        """
        base_dir = self.base_dir or Path.cwd()
        mode = mode or ""
        names = [
            self.BASE_FILENAME,
            f"{self.BASE_FILENAME}{self.LOCAL_SUFFIX}",
            f"{self.BASE_FILENAME}.{mode}",
            f"{self.BASE_FILENAME}.{mode}{self.LOCAL_SUFFIX}",
        ]
        return [base_dir / name for name in names]

    def load(self, mode: Optional[str] = None) -> Dict[str, str]:
        """
        Parse every existing candidate file and merge the results.

        Args:
            mode: Run mode used for the mode-specific files

        Returns:
            Merged mapping of upper-case key to string value
        """
        merged: Dict[str, str] = {}

        for path in self.candidate_files(mode):
            if not path.is_file():
                logger.debug(f"Override file not found, skipping: {path}")
                continue

            values = self._parse_file(path)
            merged.update(values)
            logger.debug(f"Loaded {len(values)} override(s) from {path}")

        return merged

    def _parse_file(self, path: Path) -> Dict[str, str]:
        """Parse one override file into an upper-cased mapping."""
        try:
            parsed = dotenv_values(path, interpolate=False, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Unreadable override file, skipping: {path} ({type(e).__name__})")
            return {}

        # A bare "KEY" line parses with a None value; it assigns nothing.
        return {
            key.upper(): value
            for key, value in parsed.items()
            if value is not None
        }
