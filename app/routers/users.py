# app/routers/users.py
"""Staff and client account administration."""

from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.user import Role
from app.schemas.user import UserCreate, UserRoleUpdate, UserStatusUpdate, UserOut
from app.services import user_service

router = APIRouter()


@router.post("/users", response_model=UserOut, status_code=201, summary="Create a user with a role")
async def create_user(body: UserCreate, db: Session = Depends(get_db)):
    return await user_service.create_user(db, body.email, body.full_name, body.role)


@router.get("/users", response_model=list[UserOut], summary="List users, newest first")
def list_users(role: Optional[Role] = None, is_active: Optional[bool] = None,
               db: Session = Depends(get_db)):
    return user_service.list_users(db, role, is_active)


@router.patch("/users/{user_id}/role", response_model=UserOut, summary="Change a user's role")
async def update_role(user_id: int, body: UserRoleUpdate, db: Session = Depends(get_db)):
    return await user_service.update_role(db, user_id, body.role)


@router.patch("/users/{user_id}/status", response_model=UserOut, summary="Activate or deactivate a user")
async def update_status(user_id: int, body: UserStatusUpdate, db: Session = Depends(get_db)):
    return await user_service.update_status(db, user_id, body.is_active)
