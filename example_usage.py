import logging

from auth import SessionAuth
from chat_agent import GenerationError
from models import CaloriePreferences
from nutrition_assistant import NutritionAssistant
from settings import load_settings

settings = load_settings()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

auth = SessionAuth()
auth.sign_in("DebugUser")

assistant = NutritionAssistant(settings=settings, auth=auth)
assistant.save_calorie_preferences(
    CaloriePreferences(daily_total=1800, breakfast=450, lunch=600, dinner=600, snacks=150)
)

try:
    recipe = assistant.generate_recipe(["chicken", "rice", "broccoli"])
    print("Recipe:", recipe.name, f"({recipe.calories} kcal)")

    plan = assistant.generate_meal_plan()
    for day in plan:
        print("-", day.day, day.total_calories(), "kcal")

    for group in assistant.shopping_list_for_plan(plan):
        print(group.category)
        for item in group.items:
            print("  -", item.name, item.amount)
except GenerationError as e:
    print(e.user_message)
