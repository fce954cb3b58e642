# shopping_list_agent.py

import logging
from typing import List, Optional

from chat_agent import ChatAgent, read_response
from models import CaloriePreferences, ShoppingCategory

logger = logging.getLogger(__name__)

CATEGORIES = [
    "Produce",
    "Meat & Seafood",
    "Dairy & Eggs",
    "Pantry",
    "Grains & Bread",
    "Frozen",
    "Condiments & Spices",
]

SHOPPING_LIST_SHAPE = """{
  "shoppingList": [
    {
      "category": string,
      "items": [
        { "name": string, "amount": string, "calories": number, "caloriesPerUnit": string }
      ]
    }
  ]
}"""


class ShoppingListAgent:
    """
    Turns a list of meal names into a shopping list grouped by store section.
    """

    WHAT = "shopping list"

    def __init__(self, chat: ChatAgent, preference_agent=None):
        self.chat = chat
        self.preference_agent = preference_agent

    def build_system_prompt(self, prefs: Optional[CaloriePreferences], timestamp: int) -> str:
        calorie_clause = ""
        if prefs:
            calorie_clause = (
                f"Daily calorie target: {prefs.daily_total}. "
                "Include calorie information for all ingredients. "
            )
        return (
            "You are a helpful chef creating organized shopping lists. "
            f"Current timestamp: {timestamp}. "
            f"{calorie_clause}"
            "Given a list of meals and servings, create a categorized shopping list with exact quantities.\n"
            f"Respond in JSON format with the following structure:\n{SHOPPING_LIST_SHAPE}\n"
            f"Categories should include: {', '.join(CATEGORIES)}.\n"
            "Always specify quantities in common measurements (cups, ounces, pounds, etc.)."
        )

    def build_user_prompt(self, meal_names: List[str]) -> str:
        return f"Create a detailed shopping list with exact quantities for these meals: {', '.join(meal_names)}"

    def generate(self, meal_names: List[str]) -> List[ShoppingCategory]:
        if isinstance(meal_names, str):
            raise ValueError("meal_names must be a list of meal names, not a single string")
        meal_names = [m.strip() for m in meal_names if m and m.strip()]
        if not meal_names:
            raise ValueError("At least one meal name is required")

        prefs = self.preference_agent.get_preferences() if self.preference_agent else None
        data = self.chat.complete_json(
            self.build_system_prompt(prefs, self.chat.timestamp()),
            self.build_user_prompt(meal_names),
            self.WHAT,
        )
        groups = self.chat.require_list(data, "shoppingList", self.WHAT)
        shopping_list = [read_response(ShoppingCategory.from_dict, g, self.WHAT) for g in groups]

        logger.info(
            "Generated shopping list: %d categories, %d items",
            len(shopping_list), sum(len(g.items) for g in shopping_list),
        )
        return shopping_list
