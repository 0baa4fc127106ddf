import logging
import re
from typing import List, Optional

from pydantic import BaseModel

from ..core.ai_client import ai_client, AIServiceError
from ..core.text import clean_md, strip_code_fences
from .unit_conversion import CUP_TO_GRAM, build_fallback_recipe

logger = logging.getLogger("precision_baker.ai")


class RecipeConversion(BaseModel):
    text: str
    source: str = "ai"  # ai or fallback


class ExtractedRecipe(BaseModel):
    title: str
    ingredients: List[str]
    instructions: List[str]

    @property
    def recipe_text(self) -> str:
        ingredients = "\n".join(f"- {ing}" for ing in self.ingredients)
        steps = "\n".join(f"{idx}. {step}" for idx, step in enumerate(self.instructions, start=1))
        return f"# {self.title}\n\n## Ingredients\n{ingredients}\n\n## Instructions\n{steps}"


EXTRACT_PROMPT = (
    "You are a professional chef at PreciseBaker. "
    "Either extract a recipe from the image OR if the image shows a prepared dish (like a food photo), "
    "identify what dish it is and create a complete recipe for it. "
    "Format your response as follows:\n"
    "Title: [Recipe Title]\n"
    "Ingredients:\n"
    "- [Ingredient 1 with precise measurements]\n"
    "- [Ingredient 2 with precise measurements]\n"
    "...\n"
    "Instructions:\n"
    "1. [Step 1]\n"
    "2. [Step 2]\n"
    "...\n"
    "If there are any measurements, make sure they are specific and accurate. "
    "For dish photos where no recipe is visible, create a detailed authentic recipe "
    "based on what you can identify in the image."
)


def parse_extracted_recipe(text: str) -> ExtractedRecipe:
    """Parse the Title:/Ingredients:/Instructions: layout the vision prompt asks for."""
    title_match = re.search(r"Title: (.*)", text)
    title = clean_md(title_match.group(1)) if title_match else "Extracted Recipe"

    ingredients_match = re.search(r"Ingredients:([\s\S]*?)(?=Instructions:)", text)
    ingredients = [
        line.strip()[1:].strip()
        for line in (ingredients_match.group(1) if ingredients_match else "").split("\n")
        if line.strip().startswith("-")
    ]

    instructions_match = re.search(r"Instructions:([\s\S]*)$", text)
    instructions = [
        re.sub(r"^\d+\.\s*", "", line.strip())
        for line in (instructions_match.group(1) if instructions_match else "").split("\n")
        if re.match(r"^\d+\.", line.strip())
    ]

    return ExtractedRecipe(title=title, ingredients=ingredients, instructions=instructions)


class AIService:
    def convert_recipe(
        self,
        recipe_text: str,
        conversion_type: str,
        scale_factor: str,
        humidity_adjust: bool = False,
        pro_mode: bool = False,
    ) -> RecipeConversion:
        """Convert a recipe with Gemini, falling back to the basic listing."""
        direction = (
            "convert volume measurements to weight in grams"
            if conversion_type == CUP_TO_GRAM
            else "convert weight in grams to volume measurements"
        )
        prompt = f"""You are a professional baker and recipe converter. Please convert the following recipe according to these specifications:

        1. Conversion type: {conversion_type} ({direction})
        2. Scale factor: {scale_factor} (multiply all ingredient quantities by this number)
        {'3. Adjust for high humidity conditions.' if humidity_adjust else ''}
        {'4. Include professional baking notes and tips.' if pro_mode else ''}

        Recipe to convert:
        {recipe_text}

        Format your response as a complete recipe with a title, ingredients list, and instructions. Use markdown formatting."""

        try:
            text = strip_code_fences(ai_client.generate_text(prompt))
            return RecipeConversion(text=text, source="ai")
        except AIServiceError as e:
            logger.warning(f"Recipe conversion falling back to basic listing: {e}")
            text = build_fallback_recipe(
                recipe_text, conversion_type, scale_factor, humidity_adjust, pro_mode
            )
            return RecipeConversion(text=text, source="fallback")

    def generate_from_ingredients(
        self,
        ingredients: str,
        conversion_type: str = CUP_TO_GRAM,
        humidity_adjust: bool = False,
        pro_mode: bool = False,
    ) -> str:
        measurements = (
            "weight measurements (grams)"
            if conversion_type == CUP_TO_GRAM
            else "volume measurements (cups, tablespoons)"
        )
        prompt = f"""You are a professional chef at PreciseBaker. Please generate a detailed recipe using these ingredients:

        {ingredients}

        Please use {measurements} when listing ingredients.
        {'Adjust the recipe for high humidity conditions.' if humidity_adjust else ''}
        {'Include professional baking notes and tips.' if pro_mode else ''}

        Your recipe should include:
        1. A creative descriptive title
        2. A brief introduction to the dish
        3. Complete ingredient list with precise measurements
        4. Clear, step-by-step instructions
        5. Cooking time and servings
        6. Optional tips for perfect results

        Format your response as a complete recipe with markdown formatting. Make sure all measurements are precise and accurate."""
        return strip_code_fences(ai_client.generate_text(prompt))

    def recipe_by_dish_name(
        self,
        dish_name: str,
        cuisine: Optional[str] = None,
        dietary: Optional[str] = None,
    ) -> str:
        prompt = f'You are a professional chef at PreciseBaker. Please generate a detailed recipe for "{dish_name}"'
        if cuisine:
            prompt += f" in the {cuisine} style"
        if dietary:
            prompt += f" that is {dietary}"
        prompt += """.

        Your recipe should include:
        1. A descriptive title
        2. A brief introduction to the dish
        3. Precise ingredient measurements in both volume (cups, tablespoons) and weight (grams)
        4. Clear, step-by-step instructions
        5. Cooking time and servings
        6. Optional tips for perfect results

        Format your response as a complete recipe with markdown formatting. Make sure all measurements are precise and accurate."""
        return strip_code_fences(ai_client.generate_text(prompt))

    def extract_from_image(self, image: str) -> ExtractedRecipe:
        text = ai_client.generate_from_image(EXTRACT_PROMPT, image)
        return parse_extracted_recipe(text)


ai_service = AIService()
