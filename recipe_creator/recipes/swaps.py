from __future__ import annotations

from collections.abc import Sequence

from .matching import missing_ingredients, normalise_text
from .models import Recipe

MAX_SUGGESTIONS = 6

SWAP_DICTIONARY: dict[str, str] = {
    "yogurt": "Swap yogurt for creme fraiche, or coconut yogurt for dairy-free.",
    "yoghurt": "Swap yoghurt for creme fraiche, or coconut yoghurt for dairy-free.",
    "creme fraiche": "Swap creme fraiche for Greek yogurt or oat creme for dairy-free.",
    "milk": "Swap milk for oat milk or soy milk 1:1.",
    "butter": "Swap butter for olive oil or plant-based baking block.",
    "cream": "Swap cream for creme fraiche, or oat cream for dairy-free.",
    "egg": "Swap each egg for 1 tbsp ground flaxseed plus 3 tbsp water in binding recipes.",
    "eggs": "Swap eggs for flaxseed gel when binding is needed.",
    "cheddar": "Swap cheddar for a mature dairy-free cheese alternative.",
    "parmesan": "Swap parmesan for nutritional yeast plus a pinch of salt.",
    "tofu": "Swap tofu for chickpeas in stews and curries.",
    "chickpeas": "Swap chickpeas for cannellini beans or butter beans.",
    "flour": "Swap plain flour for a gluten-free flour blend.",
    "pasta": "Swap wheat pasta for gluten-free pasta made with maize and rice.",
}

VEGAN_CREAM_SUGGESTION = "For creamy sauces, use oat cream or blended cashews instead of dairy."
SAME_FAMILY_SUGGESTION = "Missing an ingredient? Try a same-family swap (bean for bean, herb for herb)."


def build_swap_suggestions(
    recipe: Recipe,
    dietary: Sequence[str],
    pantry_items: Sequence[str],
) -> list[str]:
    """Collect up to six unique swap hints for a recipe, in insertion order."""
    # dict keys give ordered set semantics
    suggestions: dict[str, None] = dict.fromkeys(recipe.swap_suggestions)

    for ingredient in recipe.ingredients:
        name = normalise_text(ingredient.name)
        for key, suggestion in SWAP_DICTIONARY.items():
            if key in name:
                suggestions.setdefault(suggestion)

    if "vegan" in dietary:
        suggestions.setdefault(VEGAN_CREAM_SUGGESTION)

    if missing_ingredients(recipe, pantry_items):
        suggestions.setdefault(SAME_FAMILY_SUGGESTION)

    return list(suggestions)[:MAX_SUGGESTIONS]
