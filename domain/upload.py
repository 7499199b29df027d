from typing import Any, Mapping

from domain.exceptions import ValidationFailure


INGREDIENT_FORMAT_MESSAGE = "Please input all fields like in this format 1,kg,apple"


def parse_ingredient(line: str) -> dict[str, Any]:
    parts = line.replace("\u00a0", " ").split(",")
    if len(parts) != 3:
        raise ValidationFailure(INGREDIENT_FORMAT_MESSAGE)
    quantity, unit, description = (p.strip() for p in parts)
    try:
        return {
            "quantity": float(quantity) if quantity else None,
            "unit": unit,
            "description": description,
        }
    except ValueError as e:
        raise ValidationFailure(INGREDIENT_FORMAT_MESSAGE) from e


def build_upload_payload(fields: Mapping[str, str]) -> dict[str, Any]:
    """Turn the raw upload form into the API's recipe shape.

    Ingredient fields are any non-empty `ingredient*` field.
    """
    ingredients = [
        parse_ingredient(value)
        for name, value in fields.items()
        if name.startswith("ingredient") and value
    ]
    try:
        servings = int(fields["servings"])
        cooking_time = int(fields["cookingTime"])
    except (KeyError, ValueError) as e:
        raise ValidationFailure("Servings and cooking time must be numbers") from e
    if servings <= 0:
        raise ValidationFailure("Servings must be at least 1")
    return {
        "title": fields.get("title", ""),
        "publisher": fields.get("publisher", ""),
        "source_url": fields.get("sourceUrl", ""),
        "image_url": fields.get("image", ""),
        "servings": servings,
        "cooking_time": cooking_time,
        "ingredients": ingredients,
    }
