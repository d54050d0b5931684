from typing import Iterator, List

from pydantic import BaseModel


class IngredientList(BaseModel):
    """Ordered chips typed by the user, unique ignoring case and surrounding space."""

    items: List[str] = []

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[str]:
        return iter(self.items)

    def contains(self, ingredient: str) -> bool:
        key = ingredient.strip().lower()
        return any(item.lower() == key for item in self.items)

    def add(self, ingredient: str) -> bool:
        trimmed = ingredient.strip()
        if not trimmed or self.contains(trimmed):
            return False
        self.items.append(trimmed)
        return True

    def add_many(self, text: str) -> List[str]:
        # The input box commits a chip on "," as well as on Enter
        return [part.strip() for part in text.split(",") if self.add(part)]

    def remove(self, index: int) -> None:
        if 0 <= index < len(self.items):
            del self.items[index]

    def clear(self) -> None:
        self.items.clear()
