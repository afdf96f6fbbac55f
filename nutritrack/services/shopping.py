"""Shopping list aggregation across a meal plan."""

from typing import Dict, List

from nutritrack.errors import NotFoundError
from nutritrack.models.meal import MealPlan, ShoppingListItem


def build_shopping_list(plan: MealPlan) -> List[ShoppingListItem]:
    """
    One item per distinct lowercase ingredient name across every recipe in the plan.

    Amounts are summed as plain numbers. Units are not converted: an item keeps
    the unit of the first occurrence even if later ones use another unit.
    """
    items: Dict[str, ShoppingListItem] = {}

    for recipe in plan.recipes():
        for ingredient in recipe.ingredients:
            key = ingredient.name.lower()
            item = items.get(key)
            if item is None:
                items[key] = ShoppingListItem(
                    id=f"item-{len(items) + 1}",
                    name=ingredient.name,
                    amount=ingredient.amount,
                    unit=ingredient.unit,
                    aisle=ingredient.aisle,
                    recipe_ids=[recipe.id],
                )
            else:
                item.amount += ingredient.amount
                item.recipe_ids.append(recipe.id)

    return sorted(items.values(), key=lambda i: i.aisle)


def group_by_aisle(items: List[ShoppingListItem]) -> Dict[str, List[ShoppingListItem]]:
    """Items grouped by aisle, aisles in alphabetical order."""
    grouped: Dict[str, List[ShoppingListItem]] = {}
    for item in sorted(items, key=lambda i: i.aisle):
        grouped.setdefault(item.aisle, []).append(item)
    return grouped


def toggle_item(plan: MealPlan, item_id: str) -> ShoppingListItem:
    """Flip the checked flag of one item on the plan in place."""
    for item in plan.shopping_list:
        if item.id == item_id:
            item.checked = not item.checked
            return item
    raise NotFoundError(f"Shopping list item {item_id} not found")
