"""Data model for module identities and their classification."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple


PATH_KIND = "path"
NAME_KIND = "name"


@dataclass(frozen=True, order=True)
class ModuleId:
    """
    Identity of a discovered module.

    A located module is identified by its canonical path, an unresolved
    dependency by its raw name. Both share one keyspace; a path and a name
    with the same text are different identities.
    """

    kind: str
    value: str

    @classmethod
    def from_path(cls, path: Path) -> "ModuleId":
        return cls(PATH_KIND, str(path))

    @classmethod
    def from_name(cls, name: str) -> "ModuleId":
        return cls(NAME_KIND, name)

    @property
    def is_path(self) -> bool:
        return self.kind == PATH_KIND

    @property
    def path(self) -> Optional[Path]:
        """Filesystem path of the module, or None for an unresolved name."""
        return Path(self.value) if self.is_path else None

    def __str__(self) -> str:
        return self.value


class RecordState(Enum):
    QUEUED = "queued"
    FOUND = "found"
    NOT_FOUND = "not_found"
    INVALID = "invalid"


@dataclass(frozen=True)
class DependencyRecord:
    """Resolution outcome for one module identity."""

    state: RecordState
    names: Tuple[str, ...] = ()
    error: Optional[Exception] = None

    @classmethod
    def queued(cls) -> "DependencyRecord":
        return cls(RecordState.QUEUED)

    @classmethod
    def found(cls, names: Sequence[str]) -> "DependencyRecord":
        return cls(RecordState.FOUND, names=tuple(names))

    @classmethod
    def not_found(cls) -> "DependencyRecord":
        return cls(RecordState.NOT_FOUND)

    @classmethod
    def invalid(cls, error: Exception) -> "DependencyRecord":
        return cls(RecordState.INVALID, error=error)

    @property
    def is_terminal(self) -> bool:
        return self.state is not RecordState.QUEUED


class DependencyMap:
    """
    Classification map from module identity to dependency record.

    Entries keep their insertion order. An identity is inserted at most once
    and never removed; the only permitted mutation is QUEUED -> FOUND or
    QUEUED -> INVALID.
    """

    def __init__(self):
        self._records: Dict[ModuleId, DependencyRecord] = {}
        self._missing_inputs: List[str] = []

    @property
    def missing_inputs(self) -> List[str]:
        """Initial paths that did not exist (never keys of the map)."""
        return list(self._missing_inputs)

    def add_missing_input(self, raw_path: str) -> None:
        self._missing_inputs.append(raw_path)

    def add_queued(self, module_id: ModuleId) -> bool:
        """
        Insert a QUEUED placeholder.

        Returns:
            True if the identity was new, False if it was already present.
        """
        return self._insert(module_id, DependencyRecord.queued())

    def add_not_found(self, module_id: ModuleId) -> bool:
        """Insert a terminal NOT_FOUND record if the identity is new."""
        return self._insert(module_id, DependencyRecord.not_found())

    def mark_found(self, module_id: ModuleId, names: Sequence[str]) -> None:
        self._transition(module_id, DependencyRecord.found(names))

    def mark_invalid(self, module_id: ModuleId, error: Exception) -> None:
        self._transition(module_id, DependencyRecord.invalid(error))

    def get(self, module_id: ModuleId) -> Optional[DependencyRecord]:
        return self._records.get(module_id)

    def items(self) -> Iterator[Tuple[ModuleId, DependencyRecord]]:
        """Iterate over (identity, record) pairs in insertion order."""
        return iter(list(self._records.items()))

    def iter_state(self, state: RecordState) -> Iterator[ModuleId]:
        for module_id, record in self._records.items():
            if record.state is state:
                yield module_id

    def pending(self) -> List[ModuleId]:
        """Identities still in the QUEUED state."""
        return list(self.iter_state(RecordState.QUEUED))

    def is_complete(self) -> bool:
        return not self.pending()

    def counts(self) -> Dict[RecordState, int]:
        counts = {state: 0 for state in RecordState}
        for record in self._records.values():
            counts[record.state] += 1
        return counts

    def _insert(self, module_id: ModuleId, record: DependencyRecord) -> bool:
        if module_id in self._records:
            return False
        self._records[module_id] = record
        return True

    def _transition(self, module_id: ModuleId, record: DependencyRecord) -> None:
        current = self._records.get(module_id)
        if current is None:
            raise ValueError(f"{module_id} was never queued")
        if current.is_terminal:
            raise ValueError(
                f"{module_id} is already {current.state.value}, cannot become {record.state.value}"
            )
        self._records[module_id] = record

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, module_id: ModuleId) -> bool:
        return module_id in self._records

    def __iter__(self) -> Iterator[ModuleId]:
        return iter(list(self._records))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DependencyMap):
            return NotImplemented
        return (
            list(self._records.items()) == list(other._records.items())
            and self._missing_inputs == other._missing_inputs
        )

    def __repr__(self) -> str:
        counts = self.counts()
        return (
            f"DependencyMap(found={counts[RecordState.FOUND]}, "
            f"not_found={counts[RecordState.NOT_FOUND]}, "
            f"invalid={counts[RecordState.INVALID]}, "
            f"queued={counts[RecordState.QUEUED]}, "
            f"missing_inputs={len(self._missing_inputs)})"
        )
