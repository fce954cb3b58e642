# preference_agent.py
import logging
from typing import Optional

from models import CaloriePreferences

logger = logging.getLogger(__name__)


class PreferenceAgent:
    """
    Looks up the signed-in user's calorie targets.

    Absence is a normal outcome: no signed-in user, nothing stored, or a
    failed lookup all return None, and callers build prompts without
    calorie constraints.
    """

    def __init__(self, auth, profile_store):
        self.auth = auth
        self.profile_store = profile_store

    def get_preferences(self) -> Optional[CaloriePreferences]:
        user_id = self.auth.current_user()
        if not user_id:
            return None

        try:
            user_data = self.profile_store.get_user_data(user_id)
            raw = user_data["preferences"]["caloriePreferences"]
        except Exception:
            logger.exception("Error getting calorie preferences for %s", user_id)
            return None

        if raw is None:
            logger.debug("No calorie preferences stored for %s", user_id)
            return None

        try:
            return CaloriePreferences.from_dict(raw)
        except ValueError as e:
            logger.warning("Malformed calorie preferences for %s: %s", user_id, e)
            return None
