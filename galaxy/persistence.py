"""
Clast Planets: galaxy/persistence.py
Planet Store: durable collection, progress scalar and id sets.
==============================================================
Version:     0.2
Stack:       Python 3.12+ | stdlib json | Pydantic v2
Status:      Stable.

The store is an injected collaborator. The generation core never touches it;
only the orchestrating layer (galaxy/collection.py) loads and saves, and it
does so explicitly after each mutation.

JSON document layout (JsonFileStore):
  {
    "planets": [<planet record>, ...],   insertion order
    "scalars": {"total_distance_travelled": 1234.5},
    "id_sets": {"favorited_planet_ids": ["<uuid>", ...]},
    "ids":     {"active_planet_id": "<uuid>"}
  }
"""

from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, Set
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from planetgen.errors import PersistenceError
from planetgen.models import Planet

logger = logging.getLogger(__name__)

# Well-known keys
TOTAL_DISTANCE_KEY: str = "total_distance_travelled"
ACTIVE_PLANET_ID_KEY: str = "active_planet_id"
FAVORITED_PLANET_IDS_KEY: str = "favorited_planet_ids"
GALAXY_PLANET_IDS_KEY: str = "galaxy_planet_ids"


class PlanetStore(Protocol):
    """Contract the orchestrating layer persists through."""

    def load(self) -> List[Planet]: ...
    def save(self, planets: Iterable[Planet]) -> None: ...
    def load_scalar(self, key: str) -> float: ...
    def save_scalar(self, key: str, value: float) -> None: ...
    def load_id_set(self, key: str) -> Set[UUID]: ...
    def save_id_set(self, key: str, ids: Iterable[UUID]) -> None: ...
    def load_id(self, key: str) -> Optional[UUID]: ...
    def save_id(self, key: str, value: Optional[UUID]) -> None: ...


def _empty_document() -> Dict[str, Any]:
    return {"planets": [], "scalars": {}, "id_sets": {}, "ids": {}}


class StoreDocumentDef(BaseModel):
    """Section shapes of a document read from disk. Planet records are checked on load()."""
    model_config = ConfigDict(allow_inf_nan=False)

    planets: List[Dict[str, Any]] = Field(default_factory=list)
    scalars: Dict[str, float] = Field(default_factory=dict)
    id_sets: Dict[str, List[UUID]] = Field(default_factory=dict)
    ids: Dict[str, UUID] = Field(default_factory=dict)


class MemoryStore:
    """Dict-backed store. Keeps serialized records so reads never alias live objects."""

    def __init__(self) -> None:
        self.document = _empty_document()

    def load(self) -> List[Planet]:
        return [Planet.from_record(r) for r in self.document["planets"]]

    def save(self, planets: Iterable[Planet]) -> None:
        self.document["planets"] = [p.to_record() for p in planets]

    def load_scalar(self, key: str) -> float:
        return float(self.document["scalars"].get(key, 0.0))

    def save_scalar(self, key: str, value: float) -> None:
        self.document["scalars"][key] = float(value)

    def load_id_set(self, key: str) -> Set[UUID]:
        return {UUID(s) for s in self.document["id_sets"].get(key, [])}

    def save_id_set(self, key: str, ids: Iterable[UUID]) -> None:
        self.document["id_sets"][key] = sorted(str(i) for i in ids)

    def load_id(self, key: str) -> Optional[UUID]:
        raw = self.document["ids"].get(key)
        return UUID(raw) if raw else None

    def save_id(self, key: str, value: Optional[UUID]) -> None:
        if value is None:
            self.document["ids"].pop(key, None)
        else:
            self.document["ids"][key] = str(value)


class JsonFileStore(MemoryStore):
    """
    Single JSON document on disk.

    Every save rewrites the whole file through a temporary sibling and an
    atomic rename; a missing file reads as an empty store.
    """

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.document = self._read()

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return _empty_document()

        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except json.JSONDecodeError as e:
            raise PersistenceError(str(self.path), f"invalid JSON ({e})") from e

        if not isinstance(data, dict):
            raise PersistenceError(str(self.path), "top-level value is not an object")

        try:
            document = StoreDocumentDef.model_validate(data)
        except ValidationError as e:
            raise PersistenceError(str(self.path), f"malformed document ({e.error_count()} errors)") from e
        return document.model_dump(mode="json")

    def _write(self) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as fh:
            json.dump(self.document, fh, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)
        logger.debug("Saved planet store to %s", self.path)

    def load(self) -> List[Planet]:
        try:
            return super().load()
        except ValidationError as e:
            raise PersistenceError(str(self.path), f"invalid planet record ({e.error_count()} errors)") from e

    def save(self, planets: Iterable[Planet]) -> None:
        super().save(planets)
        self._write()

    def save_scalar(self, key: str, value: float) -> None:
        super().save_scalar(key, value)
        self._write()

    def save_id_set(self, key: str, ids: Iterable[UUID]) -> None:
        super().save_id_set(key, ids)
        self._write()

    def save_id(self, key: str, value: Optional[UUID]) -> None:
        super().save_id(key, value)
        self._write()
