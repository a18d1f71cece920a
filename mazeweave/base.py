"""Abstract interface for dataset builders that emit maze records."""

from __future__ import annotations

import dataclasses
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, Iterable, List, Optional, Tuple, TypeVar, Union

from tqdm import tqdm

from mazeweave.errors import GraphContractError

PathLike = Union[str, Path]
RecordT = TypeVar("RecordT")

logger = logging.getLogger(__name__)

# Failures that cost one sample rather than the whole batch.
SAMPLE_ERRORS: Tuple[type, ...] = (ValueError, OSError, GraphContractError)


class AbstractMazeGenerator(ABC, Generic[RecordT]):
    """Base class for dataset builders that emit maze records."""

    def __init__(self, output_dir: PathLike) -> None:
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    @abstractmethod
    def create_puzzle(self, *args, **kwargs) -> RecordT:
        """Create a maze from the provided resources."""

    def create_random_puzzle(self) -> RecordT:
        """Create a single randomized maze instance."""
        return self.create_puzzle()

    def generate_dataset(
        self,
        count: int,
        *,
        metadata_path: Optional[PathLike] = None,
        append: bool = True,
        progress: bool = True,
    ) -> List[RecordT]:
        """Generate a batch of mazes and optionally persist metadata.

        A sample that fails is logged and skipped, so fewer than ``count``
        records may come back.
        """
        records: List[RecordT] = []
        for _ in tqdm(range(count), desc=type(self).__name__, disable=not progress):
            try:
                records.append(self.create_random_puzzle())
            except SAMPLE_ERRORS as e:
                logger.warning(f"Failed to generate maze: {e}")
        if metadata_path is not None:
            self.write_metadata(records, metadata_path, append=append)
        return records

    def write_metadata(
        self,
        records: Iterable[RecordT],
        metadata_path: PathLike,
        *,
        append: bool = True,
    ) -> None:
        """Serialize maze records to JSON, appending if requested."""

        path = Path(metadata_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        existing: List[Dict[str, Any]] = []
        if append and path.exists():
            existing = json.loads(path.read_text(encoding="utf-8"))
        payload = [self.record_to_dict(record) for record in records]
        path.write_text(json.dumps(existing + payload, indent=2), encoding="utf-8")
        logger.info(f"Saved metadata for {len(payload)} mazes to {path}")

    def record_to_dict(self, record: RecordT) -> Dict[str, Any]:
        """Dictionary serialization hook for maze records."""

        if hasattr(record, "to_dict"):
            return getattr(record, "to_dict")()
        return dataclasses.asdict(record)

    def relativize_path(self, path: Path) -> str:
        """Map an absolute path into the generator output directory when possible."""

        try:
            return path.relative_to(self.output_dir).as_posix()
        except ValueError:
            return path.as_posix()


__all__ = ["PathLike", "AbstractMazeGenerator", "SAMPLE_ERRORS"]
