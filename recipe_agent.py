# recipe_agent.py

import logging
from typing import List, Optional

from chat_agent import ChatAgent, read_response
from models import CaloriePreferences, CustomRecipe, Ingredient, Recipe

logger = logging.getLogger(__name__)


RECIPE_SHAPE = """{
  "name": string,
  "cookTime": number,
  "servings": number,
  "calories": number,
  "macros": { "protein": number, "carbs": number, "fat": number },
  "ingredients": [ { "name": string, "amount": string, "calories": number } ],
  "instructions": string[],
  "nutritionNotes": string
}"""

CUSTOM_RECIPE_SHAPE = """{
  "name": string,
  "mealType": string,
  "targetCalories": number,
  "actualCalories": number,
  "servings": number,
  "prepTime": number,
  "cookTime": number,
  "macros": { "protein": number, "carbs": number, "fat": number },
  "ingredients": [ { "name": string, "amount": string, "calories": number } ],
  "instructions": string[],
  "nutritionNotes": string
}"""


class RecipeAgent:
    """
    Suggests one recipe from what the user has on hand.
    """

    WHAT = "recipe"

    def __init__(self, chat: ChatAgent, preference_agent=None):
        self.chat = chat
        self.preference_agent = preference_agent

    def build_system_prompt(self, prefs: Optional[CaloriePreferences], timestamp: int) -> str:
        calorie_clause = ""
        if prefs:
            calorie_clause = (
                f"Target calories per serving: {prefs.per_meal_target()}. "
                "You must ensure the recipe meets this calorie target. "
            )
        return (
            "You are a helpful chef that suggests recipes based on available ingredients. "
            f"Current timestamp: {timestamp}. "
            f"{calorie_clause}"
            "Always provide unique suggestions. "
            f"Respond in JSON format with the following structure:\n{RECIPE_SHAPE}"
        )

    def build_user_prompt(self, ingredients: List[Ingredient], prefs: Optional[CaloriePreferences]) -> str:
        ingredient_list = ", ".join(ing.name for ing in ingredients)
        prompt = (
            "Suggest a unique recipe I can make with some or all of these ingredients: "
            f"{ingredient_list}. Include additional common ingredients if needed."
        )
        if prefs:
            prompt += f" The recipe should be approximately {prefs.per_meal_target()} calories per serving."
        return prompt

    def generate(self, ingredients: List[Ingredient]) -> Recipe:
        if not ingredients:
            raise ValueError("At least one ingredient is required")

        prefs = self.preference_agent.get_preferences() if self.preference_agent else None
        data = self.chat.complete_json(
            self.build_system_prompt(prefs, self.chat.timestamp()),
            self.build_user_prompt(ingredients, prefs),
            self.WHAT,
        )
        recipe = read_response(Recipe.from_dict, data, self.WHAT)
        logger.info("Generated recipe %r", recipe.name)
        return recipe


class CustomRecipeAgent:
    """
    Answers a free-text recipe request, with a calorie breakdown against the
    user's per-meal targets when they have any.
    """

    WHAT = "custom recipe"

    def __init__(self, chat: ChatAgent, preference_agent=None):
        self.chat = chat
        self.preference_agent = preference_agent

    def build_system_prompt(self, prefs: Optional[CaloriePreferences], timestamp: int) -> str:
        calorie_clause = ""
        if prefs:
            calorie_clause = (
                f"Daily calorie targets: Total {prefs.daily_total} calories\n"
                f"- Breakfast: {prefs.breakfast} calories\n"
                f"- Lunch: {prefs.lunch} calories\n"
                f"- Dinner: {prefs.dinner} calories\n"
                f"- Snacks: {prefs.snacks} calories\n"
                "You must provide detailed calorie breakdowns and ensure recipes meet these targets. "
            )
        return (
            "You are a professional chef providing detailed cooking instructions. "
            f"Current timestamp: {timestamp}. "
            f"{calorie_clause}"
            "Always provide unique suggestions. "
            f"Format your response in JSON with the following structure:\n{CUSTOM_RECIPE_SHAPE}"
        )

    def generate(self, prompt: str) -> CustomRecipe:
        if not prompt or not prompt.strip():
            raise ValueError("A recipe request is required")

        prefs = self.preference_agent.get_preferences() if self.preference_agent else None
        data = self.chat.complete_json(
            self.build_system_prompt(prefs, self.chat.timestamp()),
            prompt,
            self.WHAT,
        )
        recipe = read_response(CustomRecipe.from_dict, data, self.WHAT)
        logger.info("Generated custom recipe %r (%s)", recipe.name, recipe.meal_type)
        return recipe
