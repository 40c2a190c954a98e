# app/services/user_service.py
"""
User administration: create staff or client accounts, list them, change role or status.
Accounts carry no credentials here.
"""

from typing import Optional
from sqlalchemy.orm import Session
from app.database import unit_of_work, upsert
from app.errors import NotFoundError, ConflictError, ValidationFailure
from app.models.user import User, Role
from app.utils.clock import utcnow
from app.utils.logger import get_logger

logger = get_logger(__name__)


def _role(value) -> str:
    try:
        return Role(value).value
    except ValueError:
        raise ValidationFailure(f"Invalid role {value!r}. Must be one of: "
                                f"{', '.join(r.value for r in Role)}") from None


def _get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("Usuario no encontrado")
    return user


async def create_user(db: Session, email: str, full_name: str, role) -> User:
    role = _role(role)
    email = email.strip().lower()
    full_name = full_name.strip()

    with unit_of_work(db):
        inserted = upsert(
            db,
            User,
            values={"email": email, "full_name": full_name, "role": role,
                    "is_active": True, "created_at": utcnow()},
            conflict_cols=["email"],
            update_cols=[],
        )
        if inserted.rowcount == 0:
            raise ConflictError("El correo ya está registrado")
        user = db.query(User).filter(User.email == email).one()

    logger.info(f"[USER] Created #{user.id} {email} role={role}")
    return user


def list_users(db: Session, role=None, is_active: Optional[bool] = None) -> list[User]:
    """Newest first. Both filters are optional."""
    q = db.query(User)
    if role is not None:
        q = q.filter(User.role == _role(role))
    if is_active is not None:
        q = q.filter(User.is_active == is_active)
    return q.order_by(User.created_at.desc(), User.id.desc()).all()


async def update_role(db: Session, user_id: int, role) -> User:
    role = _role(role)
    with unit_of_work(db):
        user = _get_user(db, user_id)
        previous = user.role
        user.role = role
        db.flush()
    logger.info(f"[USER] #{user_id} role {previous} → {role}")
    return user


async def update_status(db: Session, user_id: int, is_active: bool) -> User:
    with unit_of_work(db):
        user = _get_user(db, user_id)
        user.is_active = is_active
        db.flush()
    logger.info(f"[USER] #{user_id} {'activated' if is_active else 'deactivated'}")
    return user
