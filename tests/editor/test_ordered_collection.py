"""Tests for the client-side ordered collection editor."""

from __future__ import annotations

import itertools
import random

import pytest

from mealplan.editor.ordered import (
    IngredientDraft,
    LocalId,
    OrderedCollection,
    RemoteId,
    StepDraft,
)


def _local_ids():
    counter = itertools.count(1)
    return lambda: LocalId(f"local-{next(counter)}")


def _steps(*texts: str) -> OrderedCollection[StepDraft]:
    collection = OrderedCollection(StepDraft, id_factory=_local_ids())
    for text in texts:
        collection.add(text=text)
    return collection


def _assert_consistent(collection: OrderedCollection) -> None:
    assert [record.order for record in collection] == list(range(1, len(collection) + 1))
    ids = [record.id for record in collection]
    assert len(ids) == len(set(ids))


def test_add_appends_with_fresh_local_id():
    collection = _steps("Preheat")
    added = collection.add(text="Mix")

    assert isinstance(added.id, LocalId)
    assert added.order == 2
    assert [step.text for step in collection] == ["Preheat", "Mix"]
    assert collection[0].id != added.id


def test_preheat_mix_bake_reorder_then_remove():
    collection = _steps("Preheat", "Mix", "Bake")
    assert [step.order for step in collection] == [1, 2, 3]

    assert collection.reorder(0, 2) is True
    assert [step.text for step in collection] == ["Mix", "Bake", "Preheat"]
    assert [step.order for step in collection] == [1, 2, 3]

    bake = collection[1]
    assert collection.remove(bake.id) is True
    assert [step.text for step in collection] == ["Mix", "Preheat"]
    assert [step.order for step in collection] == [1, 2]


def test_reorder_is_splice_not_swap():
    collection = _steps("a", "b", "c", "d")
    collection.reorder(3, 1)
    assert [step.text for step in collection] == ["a", "d", "b", "c"]


@pytest.mark.parametrize("old_index,new_index", [(1, 1), (-1, 0), (0, 3), (5, 0)])
def test_reorder_noop_keeps_identity(old_index, new_index):
    collection = _steps("Preheat", "Mix", "Bake")
    before = collection.records

    assert collection.reorder(old_index, new_index) is False
    after = collection.records
    assert after == before
    assert all(first is second for first, second in zip(before, after))


def test_reorder_keeps_identity_of_records_that_did_not_move():
    collection = _steps("a", "b", "c", "d")
    first, second = collection[0], collection[1]

    collection.reorder(2, 3)

    assert collection[0] is first
    assert collection[1] is second


def test_remove_unknown_id_is_noop():
    collection = _steps("Preheat", "Mix")
    before = collection.records

    assert collection.remove(LocalId("missing")) is False
    assert collection.remove(RemoteId(99)) is False
    assert collection.records == before


def test_remove_respects_min_size():
    collection = OrderedCollection(StepDraft, min_size=1, id_factory=_local_ids())
    only = collection.add(text="Only step")

    assert collection.remove(only.id) is False
    assert len(collection) == 1

    extra = collection.add(text="Second")
    assert collection.remove(only.id) is True
    assert [step.text for step in collection] == ["Second"]
    assert collection[0].order == 1
    assert collection[0].id == extra.id


def test_update_text_changes_only_matching_record():
    collection = _steps("Preheat", "Mix")
    untouched = collection[0]
    target = collection[1]

    assert collection.update_text(target.id, "Whisk") is True
    assert collection[1].text == "Whisk"
    assert collection[1].order == 2
    assert collection[0] is untouched
    assert collection.update_text(LocalId("missing"), "x") is False


def test_update_rejects_managed_fields():
    collection = _steps("Preheat")
    with pytest.raises(TypeError):
        collection.update(collection[0].id, order=5)


def test_serialize_omits_local_ids_and_recomputes_order():
    collection = OrderedCollection.from_payload(
        StepDraft,
        [{"id": 7, "text": "Bake", "order": 2}, {"id": 3, "text": "Mix", "order": 1}],
        id_factory=_local_ids(),
    )
    collection.add(text="Serve")
    collection.reorder(2, 0)

    assert collection.serialize() == [
        {"text": "Serve", "order": 1},
        {"id": 3, "text": "Mix", "order": 2},
        {"id": 7, "text": "Bake", "order": 3},
    ]


def test_from_payload_wraps_server_ids():
    collection = OrderedCollection.from_payload(
        IngredientDraft,
        [
            {"id": 11, "name": "Eggs", "amount": "2", "order": 2},
            {"id": 10, "name": "Flour", "amount": "1 cup", "calories": 455, "order": 1},
        ],
    )

    assert [item.id for item in collection] == [RemoteId(10), RemoteId(11)]
    assert collection[0].calories == 455
    _assert_consistent(collection)


def test_adopt_replaces_only_local_ids():
    collection = OrderedCollection.from_payload(
        StepDraft, [{"id": 5, "text": "Mix", "order": 1}], id_factory=_local_ids()
    )
    collection.add(text="Bake")

    collection.adopt([{"id": 5, "text": "Mix", "order": 1}, {"id": 6, "text": "Bake", "order": 2}])

    assert [step.id for step in collection] == [RemoteId(5), RemoteId(6)]
    assert collection.serialize() == [
        {"id": 5, "text": "Mix", "order": 1},
        {"id": 6, "text": "Bake", "order": 2},
    ]


@pytest.mark.parametrize("seed", range(25))
def test_random_operations_keep_dense_order_and_unique_ids(seed):
    rng = random.Random(seed)
    collection = OrderedCollection(StepDraft, id_factory=_local_ids())

    for step in range(60):
        action = rng.choice(["add", "add", "remove", "reorder", "update"])
        if action == "add" or not len(collection):
            collection.add(text=f"step {step}")
        elif action == "remove":
            collection.remove(rng.choice(collection.records).id)
        elif action == "reorder":
            collection.reorder(rng.randrange(len(collection)), rng.randrange(len(collection)))
        else:
            collection.update_text(rng.choice(collection.records).id, f"edited {step}")
        _assert_consistent(collection)

    serialized = collection.serialize()
    assert [item["order"] for item in serialized] == list(range(1, len(collection) + 1))
    assert all("id" not in item for item in serialized)
