"""
File Payload Source Adapter - Reads a raw analytics payload from disk.

JSON is used for `.json` files, YAML for everything else.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from unifiedanalytics.core.ports.payload_source import PayloadSource

logger = logging.getLogger(__name__)


class FilePayloadSource(PayloadSource):
    """
    Payload source that decodes a JSON or YAML file.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def load(self) -> Any:
        if not self.path.exists():
            raise FileNotFoundError(f"Payload file not found: {self.path}")

        with open(self.path) as f:
            try:
                if self.path.suffix.lower() == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
            except (json.JSONDecodeError, yaml.YAMLError) as e:
                raise RuntimeError(f"Failed to decode payload from {self.path}: {e}") from e

        logger.info(f"Loaded payload from {self.path}")
        return data
