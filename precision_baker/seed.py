"""Default bio-page data: social links and featured recipes.

seed_defaults() only fills empty tables, so it is safe to run on every
startup or from the dev endpoint.
"""

import logging

from .repository import Repository

logger = logging.getLogger("precision_baker.seed")


DEFAULT_SOCIAL_LINKS = [
    {"platform": "Instagram", "username": "@precision_baking", "url": "#", "icon_class": "ri-instagram-line", "bg_color_class": "primary"},
    {"platform": "Twitter", "username": "@precision_baking", "url": "#", "icon_class": "ri-twitter-x-line", "bg_color_class": "accent"},
    {"platform": "GitHub", "username": "@precision_baking", "url": "#", "icon_class": "ri-github-fill", "bg_color_class": "secondary"},
    {"platform": "Pinterest", "username": "@precision_baking", "url": "#", "icon_class": "ri-pinterest-line", "bg_color_class": "primary"},
    {"platform": "YouTube", "username": "Precision Baking", "url": "#", "icon_class": "ri-youtube-line", "bg_color_class": "secondary"},
    {"platform": "Facebook", "username": "Precision Baking", "url": "#", "icon_class": "ri-facebook-circle-line", "bg_color_class": "accent"},
]

DEFAULT_RECIPES = [
    {
        "title": "Perfect Chocolate Chip Cookies",
        "description": "Precision measurements for the perfect chewy texture.",
        "ingredients": [
            {"name": "all-purpose flour", "amount": "2 cups", "weight": "240g"},
            {"name": "granulated sugar", "amount": "1 cup", "weight": "200g"},
            {"name": "brown sugar, packed", "amount": "1 cup", "weight": "220g"},
            {"name": "unsalted butter", "amount": "1/2 cup", "weight": "113g"},
            {"name": "vanilla extract", "amount": "1 tsp", "weight": "5g"},
            {"name": "salt", "amount": "1 tsp", "weight": "6g"},
            {"name": "chocolate chips", "amount": "1 cup", "weight": "170g"},
        ],
        "instructions": "Mix dry ingredients. Cream butter and sugars. Add vanilla. Combine and fold in chocolate chips. Bake at 350°F for 12-15 minutes.",
        "image_url": "https://images.unsplash.com/photo-1565958011703-44f9829ba187?ixlib=rb-1.2.1&auto=format&fit=crop&w=800&q=80",
        "featured": True,
    },
    {
        "title": "Vanilla Bean Cupcakes",
        "description": "Light and fluffy cupcakes with precise measurements.",
        "ingredients": [
            {"name": "cake flour", "amount": "1 3/4 cups", "weight": "190g"},
            {"name": "granulated sugar", "amount": "1 cup", "weight": "200g"},
            {"name": "baking powder", "amount": "1.5 tsp", "weight": "6g"},
            {"name": "unsalted butter", "amount": "1/2 cup", "weight": "113g"},
            {"name": "vanilla bean paste", "amount": "2 tsp", "weight": "10g"},
            {"name": "eggs", "amount": "2 large", "weight": "100g"},
            {"name": "milk", "amount": "3/4 cup", "weight": "180g"},
        ],
        "instructions": "Cream butter and sugar. Add eggs one at a time. Alternate adding dry ingredients and milk. Bake at 350°F for 18-20 minutes.",
        "image_url": "https://images.unsplash.com/photo-1486427944299-d1955d23e34d?ixlib=rb-1.2.1&auto=format&fit=crop&w=800&q=80",
        "featured": True,
    },
]


def seed_defaults(repo: Repository) -> tuple[int, int]:
    """Insert default links/recipes into empty tables.

    Returns (social_links_created, recipes_created).
    """
    links_created = 0
    recipes_created = 0

    if not repo.get_social_links():
        for link in DEFAULT_SOCIAL_LINKS:
            repo.create_social_link({**link, "user_id": None})
            links_created += 1
        logger.info("Inserted %d default social links", links_created)

    if not repo.get_recipes():
        for recipe in DEFAULT_RECIPES:
            repo.create_recipe({**recipe, "user_id": None})
            recipes_created += 1
        logger.info("Inserted %d default recipes", recipes_created)

    return links_created, recipes_created
