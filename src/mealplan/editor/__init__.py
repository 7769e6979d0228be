"""Client-side editing state: ordered collections, forms and the shopping list."""

from mealplan.editor.forms import ParentFormSession, filter_tag_suggestions
from mealplan.editor.ordered import (
    IngredientDraft,
    LocalId,
    OrderedCollection,
    RemoteId,
    StepDraft,
)
from mealplan.editor.shopping import EntryState, ShoppingListViewModel

__all__ = [
    "EntryState",
    "IngredientDraft",
    "LocalId",
    "OrderedCollection",
    "ParentFormSession",
    "RemoteId",
    "ShoppingListViewModel",
    "StepDraft",
    "filter_tag_suggestions",
]
