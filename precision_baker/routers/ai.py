"""AI recipe endpoints (Gemini).

Endpoints:
- POST /api/convert-recipe - Convert/scale a recipe (falls back to a basic listing)
- POST /api/generate-recipe - Recipe from a list of ingredients
- POST /api/dish-recipe - Recipe for a named dish
- POST /api/extract-recipe - Recipe from a photo
- GET /api/ai/status - AI availability
"""

import logging

from fastapi import APIRouter, HTTPException, Request

from ..core.ai_client import ai_client, AIServiceError, AIUnavailableError
from ..schemas import (
    RecipeConvertRequest, RecipeConvertResponse,
    IngredientsRecipeRequest, DishRecipeRequest, GeneratedRecipeResponse,
    ExtractRecipeRequest, ExtractRecipeResponse,
)
from ..services.ai_service import ai_service
from ..rate_limit import limiter
from ..settings import settings

router = APIRouter()
logger = logging.getLogger("precision_baker.ai")


def _ai_http_error(e: AIServiceError) -> HTTPException:
    if isinstance(e, AIUnavailableError):
        return HTTPException(status_code=503, detail="AI recipe service is not available")
    return HTTPException(status_code=502, detail=f"AI recipe service failed: {e}")


@router.post("/convert-recipe", response_model=RecipeConvertResponse)
@limiter.limit(settings.ai_rate_limit)
def convert_recipe(request: Request, payload: RecipeConvertRequest):
    """
    Convert a recipe between cups and grams and scale it.
    AI failures are not fatal: the basic fallback listing is returned instead.
    """
    conversion = ai_service.convert_recipe(
        recipe_text=payload.recipe_text,
        conversion_type=payload.conversion_type,
        scale_factor=payload.scale_factor,
        humidity_adjust=payload.humidity_adjust,
        pro_mode=payload.pro_mode,
    )
    return RecipeConvertResponse(
        converted_recipe=conversion.text,
        success=True,
        source=conversion.source,
    )


@router.post("/generate-recipe", response_model=GeneratedRecipeResponse)
@limiter.limit(settings.ai_rate_limit)
def generate_recipe(request: Request, payload: IngredientsRecipeRequest):
    try:
        recipe = ai_service.generate_from_ingredients(
            ingredients=payload.ingredients,
            conversion_type=payload.conversion_type,
            humidity_adjust=payload.humidity_adjust,
            pro_mode=payload.pro_mode,
        )
    except AIServiceError as e:
        raise _ai_http_error(e)
    return GeneratedRecipeResponse(recipe=recipe)


@router.post("/dish-recipe", response_model=GeneratedRecipeResponse)
@limiter.limit(settings.ai_rate_limit)
def dish_recipe(request: Request, payload: DishRecipeRequest):
    try:
        recipe = ai_service.recipe_by_dish_name(
            dish_name=payload.dish_name,
            cuisine=payload.cuisine,
            dietary=payload.dietary,
        )
    except AIServiceError as e:
        raise _ai_http_error(e)
    return GeneratedRecipeResponse(recipe=recipe)


@router.post("/extract-recipe", response_model=ExtractRecipeResponse)
@limiter.limit(settings.ai_rate_limit)
def extract_recipe(request: Request, payload: ExtractRecipeRequest):
    """Extraction failures are reported in the body (success=false), not as HTTP errors."""
    try:
        extracted = ai_service.extract_from_image(payload.image)
    except AIServiceError as e:
        logger.error(f"Recipe extraction failed: {e}")
        return ExtractRecipeResponse(success=False, error=str(e))

    return ExtractRecipeResponse(
        recipe_text=extracted.recipe_text,
        ingredients=extracted.ingredients,
        instructions=extracted.instructions,
        success=True,
    )


@router.get("/ai/status")
def get_ai_status():
    """Debug endpoint for AI availability."""
    return {
        "ai_mode": ai_client.mode,
        "available": ai_client.is_available(),
        "has_api_key": bool(settings.gemini_api_key),
        "model_text": settings.gemini_text_model,
        "model_vision": settings.gemini_vision_model,
        "last_error": ai_client.last_error,
        "last_error_at": ai_client.last_error_at,
    }
