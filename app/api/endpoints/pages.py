from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.models.user import User
from app.api.services.page_service import PageService
from app.core.security import get_current_user
from app.schemas.page import (
    AddressesIn,
    BlocksIn,
    PageAddressIn,
    PageAddressOut,
    PageCreate,
    PageDeletedOut,
    PageOut,
    PageUpdate,
    SocialLinksIn,
)

router = APIRouter(prefix="/pages", tags=["Pages"])


@router.get("", response_model=List[PageOut])
def list_pages(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return PageService.list_for_user(db, current_user)


@router.post("", response_model=PageOut, status_code=201)
def create_page(payload: PageCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return PageService.create(db, current_user, payload)


@router.get("/{page_id}", response_model=PageOut)
def get_page(page_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return PageService.get_owned(db, current_user, page_id)


@router.put("/{page_id}", response_model=PageOut)
def update_page(
    page_id: int,
    payload: PageUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    page = PageService.get_owned(db, current_user, page_id)
    return PageService.update(db, current_user, page, payload)


@router.delete("/{page_id}", response_model=PageDeletedOut)
def delete_page(
    page_id: int,
    confirmation: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    page = PageService.get_owned(db, current_user, page_id)
    return PageService.delete(db, page, confirmation)


@router.put("/{page_id}/blocks", response_model=PageOut)
def replace_blocks(
    page_id: int,
    payload: BlocksIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    page = PageService.get_owned(db, current_user, page_id)
    return PageService.replace_blocks(db, page, payload)


@router.put("/{page_id}/social-links", response_model=PageOut)
def replace_social_links(
    page_id: int,
    payload: SocialLinksIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    page = PageService.get_owned(db, current_user, page_id)
    return PageService.replace_social_links(db, page, payload)


@router.get("/{page_id}/addresses", response_model=List[PageAddressOut])
def list_addresses(page_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return PageService.get_owned(db, current_user, page_id).addresses


@router.post("/{page_id}/addresses", response_model=PageAddressOut, status_code=201)
def add_address(
    page_id: int,
    payload: PageAddressIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    page = PageService.get_owned(db, current_user, page_id)
    return PageService.add_address(db, page, payload)


@router.put("/{page_id}/addresses", response_model=PageOut)
def replace_addresses(
    page_id: int,
    payload: AddressesIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    page = PageService.get_owned(db, current_user, page_id)
    return PageService.replace_addresses(db, page, payload)
