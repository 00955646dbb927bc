from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from postboard.routers import get_post_service
from postboard.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


class PostCreate(BaseModel):
    userEmail: str
    text: str


@router.post("", status_code=201)
def create_post(payload: PostCreate, svc: PostService = Depends(get_post_service)):
    return svc.publish(payload.userEmail, payload.text).to_dict()


@router.get("")
def list_posts(userEmail: str = Query(...), svc: PostService = Depends(get_post_service)):
    return [post.to_dict() for post in svc.list_for_user(userEmail)]


@router.get("/{post_id}")
def get_post(post_id: str, svc: PostService = Depends(get_post_service)):
    return svc.get(post_id).to_dict()


@router.delete("/{post_id}")
def delete_post(post_id: str, svc: PostService = Depends(get_post_service)):
    svc.delete(post_id)
    return {}
