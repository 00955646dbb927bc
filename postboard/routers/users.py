from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from postboard.routers import get_user_service
from postboard.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


class UserCreate(BaseModel):
    email: str
    password: str
    name: str
    age: int


class UserUpdate(BaseModel):
    password: str
    name: str
    age: int
    # Optional rename; the path segment stays the lookup key.
    email: Optional[str] = None


@router.post("", status_code=201)
def create_user(payload: UserCreate, svc: UserService = Depends(get_user_service)):
    user = svc.register(payload.email, payload.password, payload.name, payload.age)
    return user.public_dict()


@router.get("/{email}")
def get_user(email: str, svc: UserService = Depends(get_user_service)):
    return svc.get(email).public_dict()


@router.put("/{email}")
def update_user(email: str, payload: UserUpdate, svc: UserService = Depends(get_user_service)):
    user = svc.update(email, payload.password, payload.name, payload.age, new_email=payload.email)
    return user.public_dict()


@router.delete("/{email}")
def delete_user(email: str, svc: UserService = Depends(get_user_service)):
    svc.delete(email)
    return {}
