# meal_plan_agent.py

import logging
from typing import List, Optional

from chat_agent import ChatAgent, read_response
from models import CaloriePreferences, DayPlan

logger = logging.getLogger(__name__)

MEAL_SHAPE = """{
        "name": string,
        "calories": number,
        "macros": { "protein": number, "carbs": number, "fat": number },
        "ingredients": [ { "name": string, "amount": string, "calories": number } ]
      }"""

WEEKLY_PLAN_SHAPE = f"""{{
  "weeklyPlan": [
    {{
      "day": string,
      "breakfast": {MEAL_SHAPE},
      "lunch": {MEAL_SHAPE},
      "dinner": {MEAL_SHAPE},
      "snacks": {MEAL_SHAPE}
    }}
  ]
}}"""

USER_PROMPT = "Generate a balanced weekly meal plan with variety and nutrition in mind."


class MealPlanAgent:
    """
    Plans seven days of breakfast, lunch, dinner and snacks.
    """

    WHAT = "meal plan"

    def __init__(self, chat: ChatAgent, preference_agent=None):
        self.chat = chat
        self.preference_agent = preference_agent

    def build_system_prompt(self, prefs: Optional[CaloriePreferences], timestamp: int) -> str:
        calorie_clause = ""
        if prefs:
            calorie_clause = (
                "Daily calorie targets:\n"
                f"- Total: {prefs.daily_total} calories\n"
                f"- Breakfast: {prefs.breakfast} calories\n"
                f"- Lunch: {prefs.lunch} calories\n"
                f"- Dinner: {prefs.dinner} calories\n"
                f"- Snacks: {prefs.snacks} calories\n"
                "You must ensure all meals meet these calorie targets exactly. "
            )
        return (
            "You are a nutritionist creating weekly meal plans. "
            f"Current timestamp: {timestamp}. "
            f"{calorie_clause}"
            "Always provide unique suggestions. "
            f"Respond in JSON format with the following structure:\n{WEEKLY_PLAN_SHAPE}"
        )

    def generate(self) -> List[DayPlan]:
        prefs = self.preference_agent.get_preferences() if self.preference_agent else None
        data = self.chat.complete_json(
            self.build_system_prompt(prefs, self.chat.timestamp()),
            USER_PROMPT,
            self.WHAT,
        )
        days = self.chat.require_list(data, "weeklyPlan", self.WHAT)
        plan = [read_response(DayPlan.from_dict, d, self.WHAT) for d in days]

        if len(plan) != 7:
            # still usable, the UI shows whatever days came back
            logger.warning("Meal plan has %d day(s) instead of 7", len(plan))
        logger.info("Generated meal plan with %d day(s)", len(plan))
        return plan
