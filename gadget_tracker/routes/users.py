from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from ..db import get_db
from ..errors import NotFound
from ..schemas.users import UserCreate, UserResponse, UserType, UserUpdate
from ..services import users as user_service


router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    return user_service.create_user(db, payload)


@router.get("", response_model=List[UserResponse])
def list_users(
    search: Optional[str] = None,
    user_type: Optional[UserType] = None,
    unit: Optional[str] = None,
    location: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
    db: Session = Depends(get_db),
):
    return user_service.list_users(
        db,
        search=search,
        user_type=user_type,
        unit=unit,
        location=location,
        page=page,
        limit=limit,
    )


@router.get("/by-nik/{nik}", response_model=Optional[UserResponse])
def get_user_by_nik(nik: str, db: Session = Depends(get_db)):
    """Lookup used by the asset form to prefill the user snapshot; null when unknown."""
    return user_service.get_user_by_nik(db, nik)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db)):
    row = user_service.get_user(db, user_id)
    if not row:
        raise NotFound(f"User with id {user_id} not found")
    return row


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(user_id: int, payload: UserUpdate, db: Session = Depends(get_db)):
    return user_service.update_user(db, user_id, payload)


@router.delete("/{user_id}")
def delete_user(user_id: int, db: Session = Depends(get_db)):
    user_service.delete_user(db, user_id)
    return {"success": True, "id": user_id}
