from typing import Annotated, Protocol

from fluentbuilder.builders import from_template, template
from fluentbuilder.domain import DefaultValue


# Declare the target type, its defaults and its builder interface
class NutritionFacts:
    serving_size: int
    servings: int
    calories: Annotated[int, DefaultValue(int_value=0)]
    fat: Annotated[int, DefaultValue(int_value=0)]

    def __init__(self, serving_size: int, servings: int, calories: int, fat: int):
        self.serving_size = serving_size
        self.servings = servings
        self.calories = calories
        self.fat = fat

    def __repr__(self):
        return f"NutritionFacts({self.serving_size}, {self.servings}, {self.calories}, {self.fat})"

    class Builder(Protocol):
        def serving_size(self, serving_size: int) -> "NutritionFacts.Builder": ...
        def servings(self, servings: int) -> "NutritionFacts.Builder": ...
        def calories(self, calories: int) -> "NutritionFacts.Builder": ...
        def fat(self, fat: int) -> "NutritionFacts.Builder": ...
        def build(self) -> "NutritionFacts": ...


# Describe once, then build as many instances as needed
nutrition_template = template(NutritionFacts)

cola = from_template(nutrition_template, NutritionFacts.Builder).serving_size(240).servings(8).calories(100).build()
water = from_template(nutrition_template, NutritionFacts.Builder).serving_size(500).servings(1).build()

print(cola)   # NutritionFacts(240, 8, 100, 0)
print(water)  # NutritionFacts(500, 1, 0, 0)
