"""Client-side ordered collections of steps and ingredients.

Records carry a stable identity that is either a server-assigned integer
(:class:`RemoteId`) or a token minted locally for an unsaved record
(:class:`LocalId`). Every operation keeps ``order`` dense (``1..N``) and in
step with list position, and records that an operation does not move keep
their object identity.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class LocalId:
    """Placeholder identity of a record that has not been persisted yet."""

    token: str


@dataclass(frozen=True)
class RemoteId:
    """Identity assigned by the server."""

    value: int


StableId = Union[LocalId, RemoteId]


def new_local_id() -> LocalId:
    return LocalId(uuid.uuid4().hex)


class OrderedRecord(BaseModel):
    id: StableId
    order: int = Field(ge=1)

    model_config = ConfigDict(frozen=True)


class StepDraft(OrderedRecord):
    text: str = Field(default="")


class IngredientDraft(OrderedRecord):
    name: str = Field(default="")
    amount: str = Field(default="")
    calories: Optional[int] = Field(default=None, ge=0)


R = TypeVar("R", bound=OrderedRecord)


def _renumber(records: Iterable[R]) -> List[R]:
    renumbered: List[R] = []
    for position, record in enumerate(records, start=1):
        if record.order != position:
            record = record.model_copy(update={"order": position})
        renumbered.append(record)
    return renumbered


class OrderedCollection(Generic[R]):
    """Mutable sequence of immutable records with a dense 1-based ``order``.

    ``min_size`` lets a form refuse to remove its last record; removals that
    would go below it are ignored like removals of unknown ids.
    """

    def __init__(
        self,
        record_type: Type[R],
        records: Iterable[R] = (),
        *,
        min_size: int = 0,
        id_factory: Callable[[], LocalId] = new_local_id,
    ) -> None:
        self._record_type = record_type
        self._min_size = min_size
        self._id_factory = id_factory
        self._records: List[R] = _renumber(records)

    @classmethod
    def from_payload(
        cls,
        record_type: Type[R],
        items: Iterable[Mapping[str, Any]],
        *,
        min_size: int = 0,
        id_factory: Callable[[], LocalId] = new_local_id,
    ) -> "OrderedCollection[R]":
        """Build a collection from server records, sorted by their ``order``."""

        indexed = list(enumerate(items))
        indexed.sort(key=lambda pair: (pair[1].get("order") or pair[0] + 1, pair[0]))
        records: List[R] = []
        for position, (_, item) in enumerate(indexed, start=1):
            fields = {key: value for key, value in item.items() if key not in {"id", "order"}}
            raw_id = item.get("id")
            stable_id: StableId = RemoteId(int(raw_id)) if raw_id is not None else id_factory()
            records.append(record_type(id=stable_id, order=position, **fields))
        return cls(record_type, records, min_size=min_size, id_factory=id_factory)

    @property
    def records(self) -> Tuple[R, ...]:
        return tuple(self._records)

    @property
    def min_size(self) -> int:
        return self._min_size

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[R]:
        return iter(tuple(self._records))

    def __getitem__(self, index: int) -> R:
        return self._records[index]

    def index_of(self, record_id: StableId) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None

    def add(self, **fields: Any) -> R:
        """Append a new record with a fresh local id."""

        record = self._record_type(id=self._id_factory(), order=len(self._records) + 1, **fields)
        self._records = [*self._records, record]
        return record

    def remove(self, record_id: StableId) -> bool:
        """Remove the record; unknown ids and removals below ``min_size`` are ignored."""

        index = self.index_of(record_id)
        if index is None or len(self._records) - 1 < self._min_size:
            return False
        self._records = _renumber(self._records[:index] + self._records[index + 1 :])
        return True

    def update(self, record_id: StableId, **fields: Any) -> bool:
        """Replace fields of the matching record in place; unknown ids are ignored."""

        if "id" in fields or "order" in fields:
            raise TypeError("id and order are managed by the collection")
        index = self.index_of(record_id)
        if index is None:
            return False
        updated = self._records[index].model_copy(update=fields)
        self._records = [*self._records[:index], updated, *self._records[index + 1 :]]
        return True

    def update_text(self, record_id: StableId, text: str) -> bool:
        return self.update(record_id, text=text)

    def reorder(self, old_index: int, new_index: int) -> bool:
        """Move the record at ``old_index`` to ``new_index`` (remove, then insert)."""

        size = len(self._records)
        if old_index == new_index or not (0 <= old_index < size and 0 <= new_index < size):
            return False
        records = list(self._records)
        moved = records.pop(old_index)
        records.insert(new_index, moved)
        self._records = _renumber(records)
        return True

    def serialize(self) -> List[Dict[str, Any]]:
        """Persistence payload: local ids are omitted and ``order`` follows position."""

        payload: List[Dict[str, Any]] = []
        for position, record in enumerate(self._records, start=1):
            item: Dict[str, Any] = {}
            if isinstance(record.id, RemoteId):
                item["id"] = record.id.value
            item.update(record.model_dump(exclude={"id", "order"}))
            item["order"] = position
            payload.append(item)
        return payload

    def adopt(self, persisted: Sequence[Mapping[str, Any]]) -> None:
        """Take server ids for records saved as new.

        ``persisted`` is the parent's saved collection in order. When it no longer
        lines up with the local records, the collection is rebuilt from it.
        """

        ordered = sorted(persisted, key=lambda item: item.get("order") or 0)
        if len(ordered) != len(self._records):
            self._records = OrderedCollection.from_payload(
                self._record_type, ordered, id_factory=self._id_factory
            )._records
            return

        adopted: List[R] = []
        for record, item in zip(self._records, ordered):
            raw_id = item.get("id")
            if isinstance(record.id, LocalId) and raw_id is not None:
                record = record.model_copy(update={"id": RemoteId(int(raw_id))})
            adopted.append(record)
        self._records = adopted


__all__ = [
    "LocalId",
    "RemoteId",
    "StableId",
    "new_local_id",
    "OrderedRecord",
    "StepDraft",
    "IngredientDraft",
    "OrderedCollection",
]
