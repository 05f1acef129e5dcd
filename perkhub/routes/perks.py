from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlmodel import Session, col, select
from sqlalchemy import func
from typing import Optional
import logging

from ..database import get_session
from ..directory import ALL_MERCHANTS
from ..models import Perk, User, utc_now
from ..schemas.perk import PerkCreate, PerkListResponse, PerkRead, PerkResponse, PerkUpdate
from ..services.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter()


def _title_taken(db: Session, owner_id: int, title: str, exclude_id: Optional[int] = None) -> bool:
    query = select(Perk).where(Perk.created_by == owner_id).where(Perk.title == title)
    if exclude_id is not None:
        query = query.where(Perk.id != exclude_id)
    return db.exec(query).first() is not None


def _get_owned_perk(db: Session, perk_id: int, current_user: User) -> Perk:
    perk = db.get(Perk, perk_id)
    if not perk:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Perk not found"
        )
    if perk.created_by != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to modify this perk"
        )
    return perk


@router.get("/all", response_model=PerkListResponse)
def get_public_perks(
    search: Optional[str] = None,
    merchant: Optional[str] = None,
    db: Session = Depends(get_session)
):
    query = select(Perk)

    if search and search.strip():
        query = query.where(
            func.lower(Perk.title).contains(search.strip().lower(), autoescape=True)
        )
    if merchant and merchant != ALL_MERCHANTS:
        query = query.where(Perk.merchant == merchant)

    query = query.order_by(col(Perk.created_at).desc(), col(Perk.id).desc())
    perks = db.exec(query).all()
    return PerkListResponse(perks=[PerkRead.model_validate(perk) for perk in perks])


@router.get("", response_model=PerkListResponse)
def get_my_perks(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session)
):
    perks = db.exec(
        select(Perk)
        .where(Perk.created_by == current_user.id)
        .order_by(col(Perk.created_at).desc(), col(Perk.id).desc())
    ).all()
    return PerkListResponse(perks=[PerkRead.model_validate(perk) for perk in perks])


@router.get("/{perk_id}", response_model=PerkResponse)
def get_perk(perk_id: int, db: Session = Depends(get_session)):
    perk = db.get(Perk, perk_id)
    if not perk:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Perk not found"
        )
    return PerkResponse(perk=PerkRead.model_validate(perk))


@router.post("", response_model=PerkResponse, status_code=status.HTTP_201_CREATED)
def create_perk(
    perk: PerkCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session)
):
    if _title_taken(db, current_user.id, perk.title):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Perk with this title already exists"
        )

    db_perk = Perk(**perk.model_dump(), created_by=current_user.id)
    db.add(db_perk)
    db.commit()
    db.refresh(db_perk)
    logger.info(f"User {current_user.id} created perk {db_perk.id}")
    return PerkResponse(perk=PerkRead.model_validate(db_perk))


@router.put("/{perk_id}", response_model=PerkResponse)
def update_perk(
    perk_id: int,
    perk_update: PerkUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session)
):
    db_perk = _get_owned_perk(db, perk_id, current_user)
    changes = perk_update.model_dump(exclude_unset=True, exclude_none=True)

    if "title" in changes and _title_taken(db, current_user.id, changes["title"], exclude_id=perk_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Perk with this title already exists"
        )

    # Update perk fields
    for field, value in changes.items():
        setattr(db_perk, field, value)
    db_perk.updated_at = utc_now()

    db.add(db_perk)
    db.commit()
    db.refresh(db_perk)
    logger.info(f"User {current_user.id} updated perk {perk_id}")
    return PerkResponse(perk=PerkRead.model_validate(db_perk))


@router.delete("/{perk_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_perk(
    perk_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session)
):
    db_perk = _get_owned_perk(db, perk_id, current_user)
    db.delete(db_perk)
    db.commit()
    logger.info(f"User {current_user.id} deleted perk {perk_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
