# profile_store.py
import logging
import os
from typing import Optional, Dict, Any

import pandas as pd

from models import CaloriePreferences

logger = logging.getLogger(__name__)

COLUMNS = ["UserName", "DailyTotal", "Breakfast", "Lunch", "Dinner", "Snacks"]

# workbook column -> CaloriePreferences attribute
PREFERENCE_COLUMNS = {
    "DailyTotal": "daily_total",
    "Breakfast": "breakfast",
    "Lunch": "lunch",
    "Dinner": "dinner",
    "Snacks": "snacks",
}


class ProfileStore:
    """
    User-profile store kept in an Excel sheet, one row per user.
    """

    # ---------------------------------------------------------
    # INITIALISATION
    # ---------------------------------------------------------
    def __init__(self, excel_file_path: str):
        self.excel_file_path = excel_file_path

        directory = os.path.dirname(excel_file_path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory, exist_ok=True)

        if not os.path.exists(excel_file_path):
            pd.DataFrame({col: [] for col in COLUMNS}).to_excel(excel_file_path, index=False)
            logger.info("Created profile workbook at %s", excel_file_path)

        self.df = pd.read_excel(excel_file_path)

        for col in COLUMNS:
            if col not in self.df.columns:
                self.df[col] = None

        # user ids are strings even if a sheet was edited by hand
        self.df["UserName"] = self.df["UserName"].map(lambda v: str(v) if pd.notna(v) else v)

    # ---------------------------------------------------------
    # READ
    # ---------------------------------------------------------
    def _row(self, user_id: str) -> Optional[pd.Series]:
        matches = self.df[self.df["UserName"] == user_id]
        if matches.empty:
            return None
        return matches.iloc[0]

    def get_user_data(self, user_id: str) -> Dict[str, Any]:
        """
        Returns {"preferences": {"caloriePreferences": {...}}} for the user.
        Raises KeyError for an unknown user. Targets never saved come back empty.
        """
        row = self._row(user_id)
        if row is None:
            raise KeyError(f"No profile stored for user {user_id!r}")

        calorie_prefs = {}
        for col, attr in PREFERENCE_COLUMNS.items():
            val = row[col]
            if pd.notna(val):
                key = CaloriePreferences.FIELDS[attr]
                val = val.item() if hasattr(val, "item") else val
                # a column with gaps comes back as float
                if isinstance(val, float) and val.is_integer():
                    val = int(val)
                calorie_prefs[key] = val

        return {"preferences": {"caloriePreferences": calorie_prefs or None}}

    def list_all_users(self):
        return list(self.df["UserName"].dropna().unique())

    # ---------------------------------------------------------
    # WRITE
    # ---------------------------------------------------------
    def save_calorie_preferences(self, user_id: str, prefs: CaloriePreferences) -> Dict[str, Any]:
        if not user_id:
            raise ValueError("user_id is required")

        values = {col: getattr(prefs, attr) for col, attr in PREFERENCE_COLUMNS.items()}

        if user_id in self.df["UserName"].values:
            for col, val in values.items():
                self.df.loc[self.df["UserName"] == user_id, col] = val
        else:
            new_row = pd.DataFrame({"UserName": [user_id], **{c: [v] for c, v in values.items()}})
            self.df = new_row if self.df.empty else pd.concat([self.df, new_row], ignore_index=True)

        self._flush()
        logger.info("Saved calorie preferences for %s", user_id)
        return {"status": "success"}

    def delete_user(self, user_id: str) -> Dict[str, Any]:
        if user_id not in self.df["UserName"].values:
            return {"status": "error", "message": "User not found"}

        self.df = self.df[self.df["UserName"] != user_id].reset_index(drop=True)
        self._flush()
        return {"status": "success"}

    def _flush(self):
        self.df.to_excel(self.excel_file_path, index=False)
