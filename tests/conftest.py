import json
from types import SimpleNamespace

import pytest

from chat_agent import ChatAgent
from models import CaloriePreferences


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        content = self.content if isinstance(self.content, str) else json.dumps(self.content)
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    @property
    def last_messages(self):
        messages = self.calls[-1]["messages"]
        return messages[0]["content"], messages[1]["content"]


class FakeOpenAI:
    def __init__(self, content=None, error=None):
        self.completions = FakeCompletions(content, error)
        self.chat = SimpleNamespace(completions=self.completions)


class FakeAuth:
    def __init__(self, user_id=None):
        self.user_id = user_id

    def current_user(self):
        return self.user_id


class FakeProfileStore:
    def __init__(self, data=None, error=None):
        self.data = data
        self.error = error
        self.calls = []

    def get_user_data(self, user_id):
        self.calls.append(user_id)
        if self.error is not None:
            raise self.error
        return self.data


class StaticPreferences:
    def __init__(self, prefs):
        self.prefs = prefs

    def get_preferences(self):
        return self.prefs


@pytest.fixture
def prefs():
    return CaloriePreferences(daily_total=1800, breakfast=450, lunch=600, dinner=600, snacks=150)


@pytest.fixture
def make_chat():
    def _make(content=None, error=None):
        client = FakeOpenAI(content, error)
        chat = ChatAgent(client=client, clock=lambda: 1700000000.5)
        return chat, client.completions
    return _make


@pytest.fixture
def recipe_payload():
    return {
        "name": "Chicken Fried Rice",
        "cookTime": 25,
        "servings": 2,
        "calories": 600,
        "macros": {"protein": 40, "carbs": 65, "fat": 18},
        "ingredients": [
            {"name": "chicken", "amount": "200 g", "calories": 330},
            {"name": "rice", "amount": "1 cup", "calories": 205},
            {"name": "soy sauce", "amount": "1 tbsp", "calories": 10},
        ],
        "instructions": ["Cook the rice.", "Stir-fry the chicken.", "Combine and season."],
        "nutritionNotes": "High in protein.",
    }


def meal(name, calories):
    return {
        "name": name,
        "calories": calories,
        "macros": {"protein": 20, "carbs": 30, "fat": 10},
        "ingredients": [{"name": "oats", "amount": "1 cup", "calories": 300}],
    }


@pytest.fixture
def weekly_plan_payload():
    days = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
    return {
        "weeklyPlan": [
            {
                "day": d,
                "breakfast": meal(f"{d} oatmeal", 450),
                "lunch": meal("Grilled salmon", 600),
                "dinner": meal("Quinoa salad", 600),
                "snacks": meal("Apple", 150),
            }
            for d in days
        ]
    }


@pytest.fixture
def shopping_list_payload():
    return {
        "shoppingList": [
            {
                "category": "Meat & Seafood",
                "items": [
                    {"name": "salmon fillet", "amount": "1 pound", "calories": 940, "caloriesPerUnit": "235 per 4 oz"}
                ],
            },
            {
                "category": "Grains & Bread",
                "items": [
                    {"name": "quinoa", "amount": "1 cup", "calories": 625, "caloriesPerUnit": "625 per cup"}
                ],
            },
        ]
    }
