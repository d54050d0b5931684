from typing import Sequence

from fridge_hack.schema import Recipe


class InterfaceAgent:
    def __init__(self, user_choice: int):
        self.user_choice = user_choice  # 1-based, as shown to the user

    def invoke(self, recipes: Sequence[Recipe]) -> Recipe:
        if not 1 <= self.user_choice <= len(recipes):
            raise ValueError(f"Invalid choice {self.user_choice}, must be 1-{len(recipes)}")
        return recipes[self.user_choice - 1]
