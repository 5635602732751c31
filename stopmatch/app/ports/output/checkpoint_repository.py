from __future__ import annotations

from abc import ABC, abstractmethod

from stopmatch.domain.models import Checkpoint, GeoPoint


class ICheckpointRepository(ABC):
    """Port for named checkpoints (unique by name)."""

    @abstractmethod
    def find_by_name(self, name: str) -> Checkpoint | None:
        raise NotImplementedError

    @abstractmethod
    def add_checkpoint(self, *, location: GeoPoint, name: str) -> Checkpoint:
        """Atomic insert-if-absent keyed on name; raises CheckpointAlreadyExists."""
