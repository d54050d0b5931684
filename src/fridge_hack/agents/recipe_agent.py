from typing import List

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import PydanticOutputParser
from langchain_core.prompts import PromptTemplate

from fridge_hack import messages
from fridge_hack.schema import Recipe, RecipeBatch


class RecipeAgent:
    """One attempt at turning an ingredient list into a recipe batch."""

    def __init__(self, llm: BaseChatModel, recipe_count: int = 3):
        self.llm = llm
        self.recipe_count = recipe_count
        self.parser = PydanticOutputParser(pydantic_object=RecipeBatch)

        raw_prompt = PromptTemplate.from_template(messages.RECIPE_PROMPT)
        self.prompt = raw_prompt.partial(
            count=str(recipe_count),
            format_instructions=self.parser.get_format_instructions(),
        )

        self.chain = self.prompt | self.llm | self.parser

    def _input(self, ingredients: List[str]) -> dict:
        return {"ingredients": ", ".join(ingredients)}

    def invoke(self, ingredients: List[str]) -> List[Recipe]:
        return self.chain.invoke(self._input(ingredients)).recipes

    async def ainvoke(self, ingredients: List[str]) -> List[Recipe]:
        batch: RecipeBatch = await self.chain.ainvoke(self._input(ingredients))
        return batch.recipes
