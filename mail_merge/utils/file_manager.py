"""
Temporary file tracking and safe output writing.
"""

import os
import time
from typing import List, Optional

from ..core.config import Config
from .logging_config import get_module_logger


class FileManager:
    """Creates, tracks and cleans up temporary files."""

    def __init__(self, keep_temp: bool = False):
        self.keep_temp = keep_temp
        self.temp_files: List[str] = []
        self.logger = get_module_logger(__name__)

    def create_temp_filename(self, original_path: str, suffix: str, extension: Optional[str] = None) -> str:
        """
        Build a unique temporary file name next to ``original_path``.

        Args:
            original_path: File the temporary file is derived from
            suffix: Label inserted into the name, e.g. "converted"
            extension: Extension to use instead of the original one

        Returns:
            Path like ``dir/~temp_name_suffix_1700000000000.docx``
        """
        directory = os.path.dirname(original_path)
        stem, original_ext = os.path.splitext(os.path.basename(original_path))
        ext = extension if extension is not None else original_ext
        timestamp = int(time.time() * 1000)
        filename = f"{Config.TEMP_FILE_PREFIX}{stem}_{suffix}_{timestamp}{ext}"
        return os.path.join(directory, filename)

    def generate_temp_path(self, original_path: str, suffix: str, extension: Optional[str] = None) -> str:
        """Create a temporary file name and register it for cleanup."""
        path = self.create_temp_filename(original_path, suffix, extension)
        self.register_temp_file(path)
        return path

    def register_temp_file(self, path: str) -> None:
        if path not in self.temp_files:
            self.temp_files.append(path)

    def read_bytes(self, path: str) -> bytes:
        with open(path, 'rb') as f:
            return f.read()

    def write_bytes(self, path: str, data: bytes) -> None:
        """Write ``data`` to ``path`` through a temporary file so readers never see a partial file."""
        temp_path = self.create_temp_filename(path, "partial")
        try:
            with open(temp_path, 'wb') as f:
                f.write(data)
            os.replace(temp_path, path)
        finally:
            if os.path.exists(temp_path):
                os.remove(temp_path)
        self.logger.debug("Wrote %d bytes to %s", len(data), path)

    def cleanup(self) -> None:
        """Delete registered temporary files unless ``keep_temp`` is set."""
        if self.keep_temp:
            if self.temp_files:
                self.logger.info("Keeping %d temporary file(s) for debugging", len(self.temp_files))
            self.temp_files = []
            return

        for path in self.temp_files:
            try:
                if os.path.exists(path):
                    os.remove(path)
                    self.logger.debug("Removed temporary file: %s", path)
            except OSError as e:
                self.logger.warning("Could not remove temporary file %s: %s", path, e)
        self.temp_files = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()
