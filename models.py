# models.py
import math
from typing import Optional, List


def _as_list(value):
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise TypeError(f"expected a list, got {type(value).__name__}")
    return list(value)


class Ingredient:
    def __init__(self, name: str, amount=None, calories=None):
        self.name = name
        self.amount = amount
        self.calories = calories

    def __repr__(self):
        return f"<Ingredient {self.name}>"


class CaloriePreferences:
    """
    A user's daily and per-meal calorie targets, as stored in the profile store.
    """

    FIELDS = {
        "daily_total": "dailyTotal",
        "breakfast": "breakfast",
        "lunch": "lunch",
        "dinner": "dinner",
        "snacks": "snacks",
    }

    def __init__(self, daily_total, breakfast, lunch, dinner, snacks):
        self.daily_total = daily_total
        self.breakfast = breakfast
        self.lunch = lunch
        self.dinner = dinner
        self.snacks = snacks

    @classmethod
    def from_dict(cls, data: dict) -> "CaloriePreferences":
        """
        Build from the store's camelCase payload.
        Raises ValueError if a target is missing or not a number.
        """
        if not isinstance(data, dict):
            raise ValueError(f"calorie preferences must be an object, got {type(data).__name__}")

        values = {}
        for attr, key in cls.FIELDS.items():
            val = data.get(key)
            # bool is an int subclass but never a calorie figure
            if isinstance(val, bool) or not isinstance(val, (int, float)):
                raise ValueError(f"calorie preference '{key}' must be a number, got {val!r}")
            values[attr] = val
        return cls(**values)

    def to_dict(self) -> dict:
        return {key: getattr(self, attr) for attr, key in self.FIELDS.items()}

    def per_meal_target(self) -> int:
        """Target per serving when a recipe stands in for one of three daily meals."""
        # halves round up
        return int(math.floor(self.daily_total / 3 + 0.5))

    def __eq__(self, other):
        return isinstance(other, CaloriePreferences) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"<CaloriePreferences {self.daily_total} kcal/day>"


class Macros:
    def __init__(self, protein=None, carbs=None, fat=None):
        self.protein = protein
        self.carbs = carbs
        self.fat = fat

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Macros":
        data = data or {}
        return cls(protein=data.get("protein"), carbs=data.get("carbs"), fat=data.get("fat"))

    def to_dict(self) -> dict:
        return {"protein": self.protein, "carbs": self.carbs, "fat": self.fat}


class RecipeIngredient:
    def __init__(self, name, amount=None, calories=None):
        self.name = name
        self.amount = amount
        self.calories = calories

    @classmethod
    def from_dict(cls, data: dict) -> "RecipeIngredient":
        return cls(name=data.get("name"), amount=data.get("amount"), calories=data.get("calories"))

    def to_dict(self) -> dict:
        return {"name": self.name, "amount": self.amount, "calories": self.calories}


class Recipe:
    def __init__(
        self,
        name: str,
        cook_time=None,
        servings=None,
        calories=None,
        macros: Optional[Macros] = None,
        ingredients=None,
        instructions=None,
        nutrition_notes=None,
    ):
        self.name = name
        self.cook_time = cook_time
        self.servings = servings
        self.calories = calories
        self.macros = macros or Macros()
        self.ingredients: List[RecipeIngredient] = ingredients or []
        self.instructions: List[str] = instructions or []
        self.nutrition_notes = nutrition_notes

    @staticmethod
    def _common_fields(data: dict) -> dict:
        return {
            "name": data.get("name"),
            "cook_time": data.get("cookTime"),
            "servings": data.get("servings"),
            "calories": data.get("calories"),
            "macros": Macros.from_dict(data.get("macros")),
            "ingredients": [RecipeIngredient.from_dict(i) for i in data.get("ingredients") or []],
            "instructions": _as_list(data.get("instructions")),
            "nutrition_notes": data.get("nutritionNotes"),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Recipe":
        return cls(**cls._common_fields(data))

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "cookTime": self.cook_time,
            "servings": self.servings,
            "calories": self.calories,
            "macros": self.macros.to_dict(),
            "ingredients": [i.to_dict() for i in self.ingredients],
            "instructions": list(self.instructions),
            "nutritionNotes": self.nutrition_notes,
        }

    def __repr__(self):
        return f"<Recipe {self.name} ({self.calories} kcal)>"


class CustomRecipe(Recipe):
    def __init__(
        self,
        name: str,
        meal_type=None,
        target_calories=None,
        actual_calories=None,
        prep_time=None,
        **kwargs,
    ):
        super().__init__(name, **kwargs)
        self.meal_type = meal_type
        self.target_calories = target_calories
        self.actual_calories = actual_calories
        self.prep_time = prep_time

    @classmethod
    def from_dict(cls, data: dict) -> "CustomRecipe":
        return cls(
            meal_type=data.get("mealType"),
            target_calories=data.get("targetCalories"),
            actual_calories=data.get("actualCalories"),
            prep_time=data.get("prepTime"),
            **cls._common_fields(data),
        )

    def to_dict(self) -> dict:
        out = super().to_dict()
        out.update(
            {
                "mealType": self.meal_type,
                "targetCalories": self.target_calories,
                "actualCalories": self.actual_calories,
                "prepTime": self.prep_time,
            }
        )
        return out

    def __repr__(self):
        return f"<CustomRecipe {self.name} ({self.meal_type}, {self.actual_calories} kcal)>"


class Meal:
    def __init__(self, name, calories=None, macros: Optional[Macros] = None, ingredients=None):
        self.name = name
        self.calories = calories
        self.macros = macros or Macros()
        self.ingredients: List[RecipeIngredient] = ingredients or []

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Meal":
        data = data or {}
        return cls(
            name=data.get("name"),
            calories=data.get("calories"),
            macros=Macros.from_dict(data.get("macros")),
            ingredients=[RecipeIngredient.from_dict(i) for i in data.get("ingredients") or []],
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "calories": self.calories,
            "macros": self.macros.to_dict(),
            "ingredients": [i.to_dict() for i in self.ingredients],
        }


class DayPlan:
    MEALS = ("breakfast", "lunch", "dinner", "snacks")

    def __init__(self, day, breakfast=None, lunch=None, dinner=None, snacks=None):
        self.day = day
        self.breakfast = breakfast
        self.lunch = lunch
        self.dinner = dinner
        self.snacks = snacks

    @classmethod
    def from_dict(cls, data: dict) -> "DayPlan":
        return cls(
            day=data.get("day"),
            **{m: Meal.from_dict(data[m]) if data.get(m) is not None else None for m in cls.MEALS},
        )

    def to_dict(self) -> dict:
        out = {"day": self.day}
        for m in self.MEALS:
            meal = getattr(self, m)
            out[m] = meal.to_dict() if meal is not None else None
        return out

    def total_calories(self):
        return sum(
            (getattr(self, m).calories or 0)
            for m in self.MEALS
            if getattr(self, m) is not None
        )

    def __repr__(self):
        return f"<DayPlan {self.day}>"


class ShoppingItem:
    def __init__(self, name, amount=None, calories=None, calories_per_unit=None):
        self.name = name
        self.amount = amount
        self.calories = calories
        self.calories_per_unit = calories_per_unit

    @classmethod
    def from_dict(cls, data: dict) -> "ShoppingItem":
        return cls(
            name=data.get("name"),
            amount=data.get("amount"),
            calories=data.get("calories"),
            calories_per_unit=data.get("caloriesPerUnit"),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "amount": self.amount,
            "calories": self.calories,
            "caloriesPerUnit": self.calories_per_unit,
        }


class ShoppingCategory:
    def __init__(self, category, items=None):
        self.category = category
        self.items: List[ShoppingItem] = items or []

    @classmethod
    def from_dict(cls, data: dict) -> "ShoppingCategory":
        return cls(
            category=data.get("category"),
            items=[ShoppingItem.from_dict(i) for i in data.get("items") or []],
        )

    def to_dict(self) -> dict:
        return {"category": self.category, "items": [i.to_dict() for i in self.items]}

    def __repr__(self):
        return f"<ShoppingCategory {self.category} ({len(self.items)} items)>"

