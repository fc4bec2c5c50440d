"""
Category API Routes
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from framebox.core.database import get_db, commit_or_conflict
from framebox.core.security import get_current_session
from framebox.schemas import (
    CategoryCreate, CategoryUpdate, CategoryResponse, MessageResponse, TransactionTypeEnum
)
from framebox.services.catalog_service import CategoryService

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
    dependencies=[Depends(get_current_session)]
)


@router.get("", response_model=List[CategoryResponse])
async def list_categories(
    type: Optional[TransactionTypeEnum] = None,
    db: Session = Depends(get_db)
):
    """List categories, optionally only income or expense ones"""
    return CategoryService(db).get_all(type.value if type else None)


@router.post("", response_model=CategoryResponse)
async def create_category(
    category_data: CategoryCreate,
    db: Session = Depends(get_db)
):
    """Create a new category"""
    category = CategoryService(db).create(category_data)
    commit_or_conflict(db, "Category could not be saved")
    return category


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: UUID, db: Session = Depends(get_db)):
    category = CategoryService(db).get_by_id(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: UUID,
    category_data: CategoryUpdate,
    db: Session = Depends(get_db)
):
    """Update category"""
    category = CategoryService(db).update(category_id, category_data)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    commit_or_conflict(db, "Category could not be saved")
    return category


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(category_id: UUID, db: Session = Depends(get_db)):
    """Delete category"""
    if not CategoryService(db).delete(category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    commit_or_conflict(db, "Category is used by transactions and cannot be deleted")
    return {"message": "Category deleted successfully"}
