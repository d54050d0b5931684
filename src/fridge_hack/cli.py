import argparse
import asyncio
import logging
from typing import List

from fridge_hack.agents import CookingSession
from fridge_hack.config import load_settings
from fridge_hack.generation_client import GenerationClient
from fridge_hack.orchestrator import RecipeOrchestrator
from fridge_hack.pipeline import build_pipeline
from fridge_hack.schema import Recipe


def format_recipe_for_print(recipe: Recipe) -> str:
    lines = [f"\n--- {recipe.name} ---", recipe.description, "", "Ingredients:"]
    lines += [f"  - {item}" for item in recipe.ingredients]
    lines += ["", "Instructions:"]
    lines += [f"  {step_no}. {step}" for step_no, step in enumerate(recipe.instructions, 1)]
    lines.append(f"\nImage: {recipe.image_url or '-'}")
    return "\n".join(lines)


def ask_choice(recipes: List[Recipe]) -> int:
    print("\nRecipes found:")
    for idx, recipe in enumerate(recipes, 1):
        print(f"{idx}: {recipe.name}")
    while True:
        try:
            user_choice = int(input(f"\nSelect a recipe (1-{len(recipes)}): "))
        except ValueError:
            print("Invalid input. Enter a number.")
            continue
        if 1 <= user_choice <= len(recipes):
            return user_choice
        print("Invalid choice. Try again.")


def print_checklist(session: CookingSession) -> None:
    print(f"\nPrepared: {session.progress_percent}%")
    for idx, item in enumerate(session.recipe.ingredients, 1):
        mark = "x" if session.is_checked(idx - 1) else " "
        print(f"  [{mark}] {idx}. {item}")


async def cooking_loop(session: CookingSession) -> None:
    print(format_recipe_for_print(session.recipe))
    while True:
        print_checklist(session)
        command = input("\nToggle an ingredient number, 'v' for a video, 'q' to finish: ").strip().lower()
        if command == "q":
            return
        if command == "v":
            video_url = await session.generate_video()
            if video_url:
                print(f"🎬 Video ready: {video_url}")
            elif session.state.alert_message:
                print(f"⚠️ {session.state.alert_message}")
            continue
        if command.isdigit() and 1 <= int(command) <= len(session.recipe.ingredients):
            session.toggle_ingredient(int(command) - 1)
        else:
            print("Unknown command.")


async def run(ingredients: List[str], user_choice=None) -> int:
    settings = load_settings()
    client = GenerationClient(settings)
    orchestrator = RecipeOrchestrator(client)

    def show_progress(state) -> None:
        if state.is_video_loading and state.progress_message:
            print(f"⏳ {state.progress_message}")

    pipeline = build_pipeline(orchestrator, choose=ask_choice)
    result = await pipeline.ainvoke({"ingredients": ingredients, "user_choice": user_choice})

    if result.get("error"):
        print(f"❌ {result['error']}")
        return 1

    selected = result.get("selected_recipe")
    if selected is None:
        return 0

    session = orchestrator.select_recipe(result["user_choice"])
    session.on_change = show_progress
    await cooking_loop(session)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Suggest recipes from the ingredients in your fridge.")
    parser.add_argument("ingredients", nargs="*", help="ingredients, separated by spaces or commas")
    parser.add_argument("--choice", type=int, default=None, help="recipe number to open (1-based)")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    raw = ",".join(args.ingredients) if args.ingredients else input("Enter your ingredients (comma separated): ")
    ingredients = [part.strip() for part in raw.split(",") if part.strip()]
    return asyncio.run(run(ingredients, args.choice))


if __name__ == "__main__":
    raise SystemExit(main())
