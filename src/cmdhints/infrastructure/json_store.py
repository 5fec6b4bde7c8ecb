"""JSON file persistence with atomic writes.

Used by the usage-history ledger. Reads and writes run in a worker thread so
the event loop stays responsive while the file is touched.
"""

import asyncio
import json
from pathlib import Path
from typing import Any

from cmdhints.logger import get_logger

logger = get_logger(__name__)


class JsonFileStore:
    """Reads and writes one JSON document at a fixed path.

    Features:
    - Parent directory created on first write
    - Pretty-printed JSON for readability
    - Atomic writes (write to temp, then rename)

    Example:
        >>> store = JsonFileStore("~/.cmdhints/history.json")
        >>> await store.write({"version": "1.0.0", "entries": []})
        >>> await store.read()
        {'version': '1.0.0', 'entries': []}
    """

    def __init__(self, path: str | Path):
        """Initialize the store.

        Args:
            path: Target file. Supports ~ expansion and relative paths.
        """
        self.path = Path(path).expanduser().resolve()

    async def write(self, data: dict[str, Any]) -> None:
        """Serialize ``data`` to the target file.

        Raises:
            IOError: If the file cannot be written
            ValueError: If data is not JSON-serializable
        """
        await asyncio.to_thread(self._write_sync, data)

    async def read(self) -> dict[str, Any] | None:
        """Load the document.

        Returns:
            The parsed document, or None if the file doesn't exist

        Raises:
            IOError: If file read fails
            ValueError: If JSON is invalid or not an object
        """
        return await asyncio.to_thread(self._read_sync)

    def exists(self) -> bool:
        return self.path.exists()

    def _write_sync(self, data: dict[str, Any]) -> None:
        temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            # Atomic rename
            temp_path.replace(self.path)
            logger.debug(f"Wrote JSON file: path={self.path}, size={self.path.stat().st_size} bytes")

        except (TypeError, ValueError) as e:
            logger.error(f"Data not JSON-serializable for {self.path}: {e}")
            if temp_path.exists():
                temp_path.unlink()
            raise ValueError(f"Cannot serialize data: {e}") from e

        except OSError as e:
            logger.error(f"Failed to write JSON file {self.path}: {e}")
            if temp_path.exists():
                temp_path.unlink()
            raise IOError(f"Cannot write file: {e}") from e

    def _read_sync(self) -> dict[str, Any] | None:
        if not self.path.exists():
            logger.debug(f"JSON file not found: {self.path}")
            return None

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupted JSON in '{self.path}': {e}")
            raise ValueError(f"Corrupted file: {e}") from e
        except OSError as e:
            logger.error(f"Failed to read '{self.path}': {e}")
            raise IOError(f"Cannot read file: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {self.path}")
        return data
