from domain.models import Recipe


def update_servings(recipe: Recipe, new_servings: int) -> None:
    """Scale every known ingredient quantity to `new_servings`, in place.

    Quantities are not rounded. `recipe.servings` must be non-zero.
    """
    for ingredient in recipe.ingredients:
        if ingredient.quantity is None:
            continue
        ingredient.quantity = ingredient.quantity * new_servings / recipe.servings
    recipe.servings = new_servings
