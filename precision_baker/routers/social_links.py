"""Social links CRUD API router.

Endpoints:
- GET /api/social-links - List links (optional ?userId=)
- POST /api/social-links - Create link
- PUT /api/social-links/{id} - Partial update
- DELETE /api/social-links/{id} - Delete link
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from ..deps import get_repository
from ..repository import Repository
from ..schemas import SocialLinkCreate, SocialLinkUpdate, SocialLinkOut

router = APIRouter()
logger = logging.getLogger("precision_baker.social_links")


@router.get("/social-links", response_model=list[SocialLinkOut])
def list_social_links(
    user_id: Optional[int] = Query(None, alias="userId"),
    repo: Repository = Depends(get_repository),
):
    return repo.get_social_links(user_id)


@router.post("/social-links", response_model=SocialLinkOut, status_code=201)
def create_social_link(
    payload: SocialLinkCreate,
    repo: Repository = Depends(get_repository),
):
    link = repo.create_social_link(payload.model_dump())
    logger.info("Created social link id=%s platform=%s", link.id, link.platform)
    return link


@router.put("/social-links/{link_id}", response_model=SocialLinkOut)
def update_social_link(
    link_id: int,
    payload: SocialLinkUpdate,
    repo: Repository = Depends(get_repository),
):
    """Apply only the fields present in the request body."""
    link = repo.update_social_link(link_id, payload.model_dump(exclude_unset=True))
    if not link:
        raise HTTPException(status_code=404, detail="Social link not found")
    return link


@router.delete("/social-links/{link_id}", status_code=204)
def delete_social_link(
    link_id: int,
    repo: Repository = Depends(get_repository),
):
    if not repo.delete_social_link(link_id):
        raise HTTPException(status_code=404, detail="Social link not found")
    return Response(status_code=204)
