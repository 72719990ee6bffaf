"""Exporter module for storing rendered multiplications."""

import json
import logging
from datetime import datetime
from pathlib import Path

from ..engine import Computation

logger = logging.getLogger(__name__)


class Exporter:
    """Writes rendered blocks and computation records to disk."""

    def __init__(self, config):
        """Initialize exporter with configuration.

        Args:
            config: Configuration object
        """
        self.config = config
        self.output_dir = Path(config.output_dir)

    def _default_path(self, suffix: str) -> Path:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return self.output_dir / f"long_multiplication_{timestamp}{suffix}"

    def store(self, content: str, file_path: str | Path | None = None) -> Path:
        """Write a rendered block as UTF-8 text.

        Args:
            content: Text block to write
            file_path: Destination; defaults to a timestamped file in output_dir

        Returns:
            Path of the written file
        """
        path = Path(file_path) if file_path else self._default_path(".txt")
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)

        logger.info(f"Stored {len(content)} characters to {path}")
        return path

    def export_json(
        self,
        computation: Computation,
        file_path: str | Path | None = None,
        style: str = "steps",
        annotate: bool = False,
    ) -> Path:
        """Write the rows and result of a computation as JSON.

        Args:
            computation: Computation to export
            file_path: Destination; defaults to a timestamped file in output_dir
            style: Layout style the block was rendered with
            annotate: Whether the block was annotated

        Returns:
            Path of the written file
        """
        path = Path(file_path) if file_path else self._default_path(".json")
        path.parent.mkdir(parents=True, exist_ok=True)

        record = {
            "created": datetime.now().isoformat(),
            "style": style,
            "annotate": annotate,
            **computation.to_dict(),
        }

        with open(path, "w", encoding="utf-8") as f:
            json.dump(record, f, indent=2)

        logger.info(f"Exported computation record to {path}")
        return path
