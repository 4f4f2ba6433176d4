from datetime import timedelta
from typing import List, Optional

import structlog
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import ConstraintViolation, NotFound
from ..models.models import User, utcnow
from ..schemas.users import UserCreate, UserType, UserUpdate


logger = structlog.get_logger(__name__)


def create_user(db: Session, data: UserCreate) -> User:
    row = User(**data.model_dump(mode="json"))
    db.add(row)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConstraintViolation(f"User with NIK {data.nik} already exists") from e
    db.refresh(row)
    logger.info("user_created", user_id=row.id, nik=row.nik)
    return row


def list_users(
    db: Session,
    search: Optional[str] = None,
    user_type: Optional[UserType] = None,
    unit: Optional[str] = None,
    location: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> List[User]:
    page = max(1, page)
    limit = max(1, min(100, limit))
    offset = (page - 1) * limit

    query = db.query(User)
    if search:
        like = f"%{search}%"
        query = query.filter(or_(
            User.name.ilike(like),
            User.nik.ilike(like),
            User.position.ilike(like),
            User.unit.ilike(like),
            User.location.ilike(like),
        ))
    if user_type:
        query = query.filter(User.user_type == UserType(user_type).value)
    if unit:
        query = query.filter(User.unit == unit)
    if location:
        query = query.filter(User.location == location)

    return query.order_by(User.created_at.desc(), User.id.desc()).offset(offset).limit(limit).all()


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_nik(db: Session, nik: str) -> Optional[User]:
    if not nik:
        return None
    return db.query(User).filter(User.nik == nik).first()


def update_user(db: Session, user_id: int, changes: UserUpdate) -> User:
    row = get_user(db, user_id)
    if not row:
        raise NotFound(f"User with id {user_id} not found")

    for field, value in changes.model_dump(exclude_unset=True, mode="json").items():
        setattr(row, field, value)

    now = utcnow()
    if row.updated_at is not None and now <= row.updated_at:
        now = row.updated_at + timedelta(microseconds=1)
    row.updated_at = now

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConstraintViolation(f"User with NIK {changes.nik} already exists") from e
    db.refresh(row)
    logger.info("user_updated", user_id=row.id, fields=sorted(changes.model_fields_set))
    return row


def delete_user(db: Session, user_id: int) -> None:
    """Remove the user row; asset snapshots of this user are left untouched."""
    row = get_user(db, user_id)
    if not row:
        raise NotFound(f"User with id {user_id} not found")
    nik = row.nik
    db.delete(row)
    db.commit()
    logger.info("user_deleted", user_id=user_id, nik=nik)
