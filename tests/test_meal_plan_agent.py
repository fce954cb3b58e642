import pytest
from conftest import StaticPreferences

from chat_agent import GenerationError, InvalidResponseError
from meal_plan_agent import USER_PROMPT, MealPlanAgent
from models import DayPlan


def test_returns_inner_day_list(make_chat, weekly_plan_payload):
    chat, _ = make_chat(weekly_plan_payload)

    plan = MealPlanAgent(chat).generate()

    assert len(plan) == 7
    assert all(isinstance(d, DayPlan) for d in plan)
    assert plan[0].day == "Monday"
    assert plan[0].breakfast.name == "Monday oatmeal"
    assert plan[0].total_calories() == 1800
    assert [d.to_dict() for d in plan] == weekly_plan_payload["weeklyPlan"]


def test_prompts_with_preferences(make_chat, weekly_plan_payload, prefs):
    chat, completions = make_chat(weekly_plan_payload)

    MealPlanAgent(chat, StaticPreferences(prefs)).generate()

    system, user = completions.last_messages
    assert user == USER_PROMPT
    for figure in ("Total: 1800", "Breakfast: 450", "Lunch: 600", "Dinner: 600", "Snacks: 150"):
        assert figure in system
    assert "exactly" in system


def test_prompts_without_preferences(make_chat, weekly_plan_payload):
    chat, completions = make_chat(weekly_plan_payload)

    MealPlanAgent(chat, StaticPreferences(None)).generate()

    system, _ = completions.last_messages
    assert "Daily calorie targets" not in system


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"plan": []},
        {"weeklyPlan": {"day": "Monday"}},
        {"weeklyPlan": "Monday: oatmeal"},
        {"weeklyPlan": None},
    ],
)
def test_missing_or_wrong_shaped_weekly_plan(make_chat, payload):
    chat, _ = make_chat(payload)

    with pytest.raises(InvalidResponseError) as exc_info:
        MealPlanAgent(chat).generate()

    assert str(exc_info.value) == "Invalid meal plan format received"
    assert exc_info.value.user_message == "Failed to generate meal plan. Please try again."


def test_upstream_failure_is_generic(make_chat):
    chat, _ = make_chat(error=ConnectionError("network down"))

    with pytest.raises(GenerationError) as exc_info:
        MealPlanAgent(chat).generate()

    assert not isinstance(exc_info.value, InvalidResponseError)
    assert exc_info.value.user_message == "Failed to generate meal plan. Please try again."


def test_missing_meal_slot_stays_empty(make_chat, weekly_plan_payload):
    del weekly_plan_payload["weeklyPlan"][0]["snacks"]
    weekly_plan_payload["weeklyPlan"][1]["lunch"] = None
    chat, _ = make_chat(weekly_plan_payload)

    plan = MealPlanAgent(chat).generate()

    assert plan[0].snacks is None
    assert plan[0].to_dict()["snacks"] is None
    assert plan[1].lunch is None
    assert plan[1].to_dict()["lunch"] is None
    assert plan[0].total_calories() == 1650


def test_short_plan_is_returned_with_warning(make_chat, weekly_plan_payload, caplog):
    weekly_plan_payload["weeklyPlan"] = weekly_plan_payload["weeklyPlan"][:3]
    chat, _ = make_chat(weekly_plan_payload)

    plan = MealPlanAgent(chat).generate()

    assert [d.day for d in plan] == ["Monday", "Tuesday", "Wednesday"]
    assert "Meal plan has 3 day(s) instead of 7" in caplog.text
