from unittest.mock import patch

from fastapi.testclient import TestClient

from recipe_creator.app import OFFLINE_SUMMARY, app
from recipe_creator.llm.errors import NoUsableRecipesError
from recipe_creator.llm.models import GenerationResult
from recipe_creator.llm.normalizer import normalize_recipe
from recipe_creator.tests.sample_recipes import BASE_RECIPES

client = TestClient(app)

OPEN_PREFERENCES = {
    "servings": 4,
    "maxCookTime": 45,
    "cuisine": "",
    "dietary": [],
    "allergensToAvoid": [],
    "equipment": [],
}


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_metadata_lists_vocabularies():
    body = client.get("/metadata").json()
    assert len(body["units"]) == 12
    assert "air-fryer" in body["equipment"]
    assert "onion" in body["pantrySuggestions"]


def test_options_returns_three_to_six():
    resp = client.post(
        "/recipes/options",
        json={
            "recipes": BASE_RECIPES,
            "pantryItems": ["onion", "garlic", "olive oil"],
            "preferences": OPEN_PREFERENCES,
        },
    )
    assert resp.status_code == 200
    body = resp.json()
    assert 3 <= len(body["options"]) <= 6
    assert body["totalCandidates"] == len(BASE_RECIPES)
    for option in body["options"]:
        assert 0 <= option["pantryFit"] <= 100
        assert "cookTimeMinutes" in option["recipe"]


def test_options_respects_allergens():
    prefs = {**OPEN_PREFERENCES, "allergensToAvoid": ["gluten"]}
    body = client.post(
        "/recipes/options",
        json={"recipes": BASE_RECIPES, "pantryItems": [], "preferences": prefs},
    ).json()
    for option in body["options"]:
        assert "gluten" not in option["recipe"]["allergens"]


def test_options_rejects_unknown_unit():
    bad = {**BASE_RECIPES[0], "ingredients": [{"name": "salt", "quantity": 1, "unit": "bucket"}]}
    resp = client.post("/recipes/options", json={"recipes": [bad]})
    assert resp.status_code == 422


def test_scale_endpoint_halves_quantities():
    recipe = {**BASE_RECIPES[0], "ingredients": [{"name": "pasta", "quantity": 200, "unit": "g"}]}
    body = client.post("/recipes/scale", json={"recipe": recipe, "targetServings": 2}).json()

    assert body["ingredients"][0]["quantity"] == 100
    assert body["lines"] == ["100 g pasta"]


def test_shopping_list_endpoint():
    body = client.post(
        "/recipes/shopping-list",
        json={"recipes": BASE_RECIPES[:1], "pantryItems": ["dried pasta", "garlic"]},
    ).json()
    assert "chopped tomatoes" in body["items"]
    assert "garlic" not in body["items"]


def test_swaps_and_export_endpoints():
    payload = {"recipe": BASE_RECIPES[0], "pantryItems": ["garlic"], "preferences": OPEN_PREFERENCES}

    swaps = client.post("/recipes/swaps", json=payload).json()["swapSuggestions"]
    text = client.post("/recipes/export", json=payload).json()["text"]

    assert swaps[0] == "Use passata instead of chopped tomatoes."
    assert text.startswith("Garlicky Tomato Pasta")
    assert "What you're missing" in text


def test_import_endpoint():
    resp = client.post("/recipes/import", json=[BASE_RECIPES[0], {"nope": 1}])
    assert resp.status_code == 200
    body = resp.json()
    assert len(body) == 1
    assert body[0]["source"] == "custom"
    assert body[0]["id"].startswith("import-")


def test_import_endpoint_rejects_junk():
    resp = client.post("/recipes/import", json={"nope": 1})
    assert resp.status_code == 422
    assert resp.json()["detail"] == "No valid recipe objects found in the imported JSON."


def test_generate_without_key_uses_offline_library():
    resp = client.post(
        "/recipes/generate",
        json={
            "recipes": BASE_RECIPES,
            "pantryItems": ["onion"],
            "preferences": OPEN_PREFERENCES,
            "goal": "Anything",
            "settings": {"apiKey": ""},
        },
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["assistantSummary"] == OFFLINE_SUMMARY
    assert 3 <= len(body["recipes"]) <= 6


@patch("recipe_creator.app.generate_recipes_with_llm")
def test_generate_with_key_calls_model(mock_generate):
    mock_generate.return_value = GenerationResult(
        recipes=[normalize_recipe({"title": "Model Soup"}, 0)],
        assistant_summary="Enjoy.",
    )

    resp = client.post(
        "/recipes/generate",
        json={"goal": "Soup", "recipeCount": 1, "settings": {"apiKey": "sk-test"}},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["recipes"][0]["title"] == "Model Soup"
    assert body["recipes"][0]["source"] == "llm"
    assert "timerMinutes" not in body["recipes"][0]["steps"][0]
    request = mock_generate.call_args.args[0]
    assert request.settings.api_key == "sk-test"


@patch("recipe_creator.app.generate_recipes_with_llm")
def test_generate_surfaces_single_error_message(mock_generate):
    mock_generate.side_effect = NoUsableRecipesError("Model returned no usable recipes.")

    resp = client.post("/recipes/generate", json={"settings": {"apiKey": "sk-test"}})

    assert resp.status_code == 502
    assert resp.json() == {"detail": "Model returned no usable recipes."}


def test_refine_requires_key():
    resp = client.post(
        "/recipes/refine",
        json={"recipe": BASE_RECIPES[0], "instruction": "Spicier", "settings": {"apiKey": ""}},
    )
    assert resp.status_code == 400


@patch("recipe_creator.app.generate_recipes_with_llm")
def test_refine_merges_results(mock_generate):
    refined = normalize_recipe({"title": "Spicy Pasta"}, 0)
    mock_generate.return_value = GenerationResult(recipes=[refined], assistant_summary="Spiced up.")

    resp = client.post(
        "/recipes/refine",
        json={
            "recipe": BASE_RECIPES[0],
            "instruction": "Make it spicier",
            "currentRecipes": BASE_RECIPES[:3],
            "settings": {"apiKey": "sk-test"},
        },
    )

    assert resp.status_code == 200
    ids = [r["id"] for r in resp.json()["recipes"]]
    assert ids == [refined.id, BASE_RECIPES[1]["id"], BASE_RECIPES[2]["id"]]
    request = mock_generate.call_args.args[0]
    assert request.recipe_count == 2
    assert request.refinement_context.instruction == "Make it spicier"


def test_scale_endpoint_clamps_overflowing_quantity():
    recipe = {**BASE_RECIPES[0], "ingredients": [{"name": "salt", "quantity": 1e308, "unit": "g"}]}

    resp = client.post("/recipes/scale", json={"recipe": recipe, "targetServings": 8})

    assert resp.status_code == 200
    assert resp.json()["lines"][0].endswith(" g salt")


def test_refine_rejects_blank_instruction():
    resp = client.post(
        "/recipes/refine",
        json={"recipe": BASE_RECIPES[0], "instruction": "   ", "settings": {"apiKey": "sk-test"}},
    )
    assert resp.status_code == 422
