"""Pydantic schemas for Precision Baker API.

Request/response models for:
- Social links
- Recipes
- Conversion history
- Measurement conversion
- AI recipe conversion / generation / extraction

The wire format is camelCase (iconClass, recipeText, ...); models accept
either the alias or the Python field name.
"""

from typing import Optional, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .services.unit_conversion import Unit


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


def _number_to_text(value):
    # Clients send quantities/scale factors as "2.5" or 2.5
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _not_null(value):
    # Update bodies may omit a column but never clear a required one
    if value is None:
        raise ValueError("must not be null")
    return value


# --- Social Links ---

class SocialLinkCreate(ApiModel):
    platform: str = Field(..., min_length=1, max_length=80)
    username: str = Field(..., min_length=1, max_length=200)
    url: str = Field(..., min_length=1)
    icon_class: str = Field(..., alias="iconClass", min_length=1, max_length=80)
    bg_color_class: str = Field(..., alias="bgColorClass", min_length=1, max_length=80)
    user_id: Optional[int] = None


class SocialLinkUpdate(ApiModel):
    platform: Optional[str] = Field(None, min_length=1, max_length=80)
    username: Optional[str] = Field(None, min_length=1, max_length=200)
    url: Optional[str] = Field(None, min_length=1)
    icon_class: Optional[str] = Field(None, alias="iconClass", min_length=1, max_length=80)
    bg_color_class: Optional[str] = Field(None, alias="bgColorClass", min_length=1, max_length=80)
    user_id: Optional[int] = None

    @field_validator("platform", "username", "url", "icon_class", "bg_color_class")
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)


class SocialLinkOut(ApiModel):
    id: int
    platform: str
    username: str
    url: str
    icon_class: str = Field(..., alias="iconClass")
    bg_color_class: str = Field(..., alias="bgColorClass")
    user_id: Optional[int] = None


# --- Recipes ---

class RecipeIngredientItem(ApiModel):
    name: str = Field(..., min_length=1)
    amount: Optional[str] = None  # "2 cups"
    weight: Optional[str] = None  # "240g"


class RecipeCreate(ApiModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str
    ingredients: list[RecipeIngredientItem]
    instructions: str
    image_url: Optional[str] = Field(None, alias="imageUrl")
    featured: bool = False
    user_id: Optional[int] = None


class RecipeUpdate(ApiModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    ingredients: Optional[list[RecipeIngredientItem]] = None
    instructions: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    featured: Optional[bool] = None
    user_id: Optional[int] = None

    @field_validator("title", "description", "ingredients", "instructions", "featured")
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)


class RecipeOut(ApiModel):
    id: int
    title: str
    description: str
    ingredients: list[RecipeIngredientItem]
    instructions: str
    image_url: Optional[str] = Field(None, alias="imageUrl")
    featured: bool = False
    user_id: Optional[int] = None


# --- Conversion History ---

class ConversionHistoryCreate(ApiModel):
    original_recipe: str = Field(..., alias="originalRecipe", min_length=1)
    converted_recipe: str = Field(..., alias="convertedRecipe", min_length=1)
    conversion_type: str = Field(..., alias="conversionType", min_length=1)
    scale_factor: str = Field(..., alias="scaleFactor", min_length=1)
    timestamp: str = Field(..., min_length=1)
    user_id: Optional[int] = None

    @field_validator("scale_factor", mode="before")
    @classmethod
    def coerce_scale_factor(cls, value):
        return _number_to_text(value)


class ConversionHistoryOut(ApiModel):
    id: int
    original_recipe: str = Field(..., alias="originalRecipe")
    converted_recipe: str = Field(..., alias="convertedRecipe")
    conversion_type: str = Field(..., alias="conversionType")
    scale_factor: str = Field(..., alias="scaleFactor")
    timestamp: str
    user_id: Optional[int] = None


# --- Measurement Conversion ---

class MeasurementConvertRequest(ApiModel):
    quantity: str = Field(..., min_length=1)
    from_unit: Unit = Field(..., alias="fromUnit")
    to_unit: Unit = Field(..., alias="toUnit")
    ingredient: Optional[str] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, value):
        return _number_to_text(value)


class MeasurementConvertResponse(ApiModel):
    result: str
    success: bool = True
    converted: float
    density: Optional[float] = None


# --- AI Recipe Conversion ---

class RecipeConvertRequest(ApiModel):
    recipe_text: str = Field(..., alias="recipeText", min_length=1)
    conversion_type: str = Field(..., alias="conversionType", min_length=1)
    scale_factor: str = Field(..., alias="scaleFactor", min_length=1)
    humidity_adjust: bool = Field(False, alias="humidityAdjust")
    pro_mode: bool = Field(False, alias="proMode")

    @field_validator("scale_factor", mode="before")
    @classmethod
    def coerce_scale_factor(cls, value):
        return _number_to_text(value)


class RecipeConvertResponse(ApiModel):
    converted_recipe: str = Field(..., alias="convertedRecipe")
    success: bool = True
    source: Literal["ai", "fallback"] = "ai"


class IngredientsRecipeRequest(ApiModel):
    ingredients: str = Field(..., min_length=1)
    conversion_type: str = Field("cup-to-gram", alias="conversionType")
    humidity_adjust: bool = Field(False, alias="humidityAdjust")
    pro_mode: bool = Field(False, alias="proMode")


class DishRecipeRequest(ApiModel):
    dish_name: str = Field(..., alias="dishName", min_length=1, max_length=200)
    cuisine: Optional[str] = None
    dietary: Optional[str] = None


class GeneratedRecipeResponse(ApiModel):
    recipe: str
    success: bool = True


class ExtractRecipeRequest(ApiModel):
    image: str = Field(..., min_length=1, description="Base64 image, optionally a data: URL")


class ExtractRecipeResponse(ApiModel):
    recipe_text: str = Field("", alias="recipeText")
    ingredients: list[str] = []
    instructions: list[str] = []
    success: bool
    error: Optional[str] = None


# --- Dev Seed ---

class SeedResponse(BaseModel):
    social_links_created: int
    recipes_created: int
    message: str
