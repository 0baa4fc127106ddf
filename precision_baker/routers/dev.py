"""Dev-only endpoints for seeding.

Endpoints:
- POST /api/dev/seed - Insert default social links + featured recipes
"""

from fastapi import APIRouter, Depends

from ..deps import get_repository
from ..repository import Repository
from ..schemas import SeedResponse
from ..seed import seed_defaults

router = APIRouter()


@router.post("/dev/seed", response_model=SeedResponse)
def seed(repo: Repository = Depends(get_repository)):
    """Idempotent: only empty tables are filled."""
    links_created, recipes_created = seed_defaults(repo)
    if links_created or recipes_created:
        message = f"Created {links_created} social links and {recipes_created} recipes"
    else:
        message = "Already seeded"
    return SeedResponse(
        social_links_created=links_created,
        recipes_created=recipes_created,
        message=message,
    )
