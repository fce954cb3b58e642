import pytest
from conftest import StaticPreferences

from chat_agent import GenerationError, InvalidResponseError
from models import ShoppingCategory
from shopping_list_agent import CATEGORIES, ShoppingListAgent


def test_returns_inner_category_list(make_chat, shopping_list_payload):
    chat, completions = make_chat(shopping_list_payload)

    result = ShoppingListAgent(chat).generate(["grilled salmon", "quinoa salad"])

    _, user = completions.last_messages
    assert "grilled salmon, quinoa salad" in user
    assert isinstance(result, list)
    assert all(isinstance(g, ShoppingCategory) for g in result)
    assert result[0].category == "Meat & Seafood"
    assert result[0].items[0].calories_per_unit == "235 per 4 oz"
    assert [g.to_dict() for g in result] == shopping_list_payload["shoppingList"]


def test_system_prompt_fixes_categories(make_chat, shopping_list_payload):
    chat, completions = make_chat(shopping_list_payload)

    ShoppingListAgent(chat, StaticPreferences(None)).generate(["tacos"])

    system, _ = completions.last_messages
    assert len(CATEGORIES) == 7
    for category in CATEGORIES:
        assert category in system
    assert "common measurements" in system
    assert "Daily calorie target" not in system


def test_system_prompt_with_preferences(make_chat, shopping_list_payload, prefs):
    chat, completions = make_chat(shopping_list_payload)

    ShoppingListAgent(chat, StaticPreferences(prefs)).generate(["tacos"])

    system, _ = completions.last_messages
    assert "Daily calorie target: 1800." in system


@pytest.mark.parametrize("payload", [{}, {"shoppingList": {"Produce": []}}, {"items": []}])
def test_missing_shopping_list_is_invalid_format(make_chat, payload):
    chat, _ = make_chat(payload)

    with pytest.raises(InvalidResponseError) as exc_info:
        ShoppingListAgent(chat).generate(["tacos"])

    assert str(exc_info.value) == "Invalid shopping list format received"
    assert exc_info.value.user_message == "Failed to generate shopping list. Please try again."


def test_upstream_failure_is_generic(make_chat):
    chat, _ = make_chat(error=RuntimeError("401 unauthorized"))

    with pytest.raises(GenerationError) as exc_info:
        ShoppingListAgent(chat).generate(["tacos"])
    assert exc_info.value.user_message == "Failed to generate shopping list. Please try again."


def test_blank_meal_names_rejected(make_chat):
    chat, completions = make_chat({})

    with pytest.raises(ValueError):
        ShoppingListAgent(chat).generate(["", "  "])
    assert completions.calls == []


def test_single_string_rejected(make_chat):
    chat, completions = make_chat({})

    with pytest.raises(ValueError):
        ShoppingListAgent(chat).generate("tacos")
    assert completions.calls == []
