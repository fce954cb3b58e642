# nutrition_assistant.py

import logging
from typing import List, Optional

from openai import OpenAI

from auth import SessionAuth, StreamlitSessionAuth
from chat_agent import ChatAgent
from meal_plan_agent import MealPlanAgent
from models import CaloriePreferences, CustomRecipe, DayPlan, Ingredient, Recipe, ShoppingCategory
from preference_agent import PreferenceAgent
from profile_store import ProfileStore
from recipe_agent import CustomRecipeAgent, RecipeAgent
from settings import Settings, load_settings
from shopping_list_agent import ShoppingListAgent

logger = logging.getLogger(__name__)


class NutritionAssistant:
    """
    Entry point for the UI layer. Builds one OpenAI client and hands it to
    every generator, all of which share the same preference lookup.

    Without an `auth` argument sign-in is tracked in-process (SessionAuth);
    a Streamlit app uses for_streamlit() so the signed-in user is whatever
    it keeps in st.session_state.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client=None,
        auth=None,
        profile_store=None,
    ):
        self.settings = settings or load_settings()

        if client is None:
            kwargs = {"api_key": self.settings.require_api_key()}
            if self.settings.request_timeout:
                kwargs["timeout"] = self.settings.request_timeout
            client = OpenAI(**kwargs)
        self.client = client

        # Identity and storage
        self.auth = auth or SessionAuth()
        self.profile_store = profile_store or ProfileStore(self.settings.profile_store_path)
        self.preference_agent = PreferenceAgent(self.auth, self.profile_store)

        # Generators share the same chat wrapper and model
        self.chat = ChatAgent(client=self.client, model=self.settings.model)
        self.recipe_agent = RecipeAgent(self.chat, self.preference_agent)
        self.custom_recipe_agent = CustomRecipeAgent(self.chat, self.preference_agent)
        self.meal_plan_agent = MealPlanAgent(self.chat, self.preference_agent)
        self.shopping_list_agent = ShoppingListAgent(self.chat, self.preference_agent)

        logger.debug("NutritionAssistant ready: %r", self.settings)

    @classmethod
    def for_streamlit(cls, settings: Optional[Settings] = None, client=None, profile_store=None, key: str = "username"):
        return cls(settings=settings, client=client, auth=StreamlitSessionAuth(key), profile_store=profile_store)

    # ---------- Generation ----------

    def generate_recipe(self, ingredients) -> Recipe:
        """
        `ingredients` may be Ingredient objects or plain names.
        """
        items = [i if isinstance(i, Ingredient) else Ingredient(name=str(i)) for i in ingredients]
        return self.recipe_agent.generate(items)

    def generate_custom_recipe(self, prompt: str) -> CustomRecipe:
        return self.custom_recipe_agent.generate(prompt)

    def generate_meal_plan(self) -> List[DayPlan]:
        return self.meal_plan_agent.generate()

    def generate_shopping_list(self, meal_names: List[str]) -> List[ShoppingCategory]:
        return self.shopping_list_agent.generate(meal_names)

    def shopping_list_for_plan(self, plan: List[DayPlan]) -> List[ShoppingCategory]:
        """Shopping list covering every distinct meal of a generated plan, in plan order."""
        names = []
        for day in plan:
            for slot in DayPlan.MEALS:
                meal = getattr(day, slot)
                if meal is not None and meal.name and meal.name not in names:
                    names.append(meal.name)
        return self.generate_shopping_list(names)

    # ---------- Preferences ----------

    def get_preferences(self) -> Optional[CaloriePreferences]:
        return self.preference_agent.get_preferences()

    def save_calorie_preferences(self, prefs: CaloriePreferences):
        user_id = self.auth.current_user()
        if not user_id:
            return {"status": "error", "message": "No signed-in user."}
        return self.profile_store.save_calorie_preferences(user_id, prefs)
