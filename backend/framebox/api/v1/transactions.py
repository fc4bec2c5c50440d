"""
Cash Flow API Routes - Transactions
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
from uuid import UUID

from framebox.core.config import settings
from framebox.core.database import get_db, commit_or_conflict
from framebox.core.security import get_current_session
from framebox.schemas import (
    TransactionCreate, TransactionUpdate, TransactionResponse, TransactionSummary,
    TransactionTypeEnum, MessageResponse
)
from framebox.services.transaction_service import TransactionService

router = APIRouter(
    prefix="/transactions",
    tags=["Cash Flow"],
    dependencies=[Depends(get_current_session)]
)


@router.get("", response_model=List[TransactionResponse])
async def list_transactions(
    type: Optional[TransactionTypeEnum] = None,
    client_id: Optional[UUID] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    skip: int = 0,
    limit: Optional[int] = None,
    db: Session = Depends(get_db)
):
    """List transactions, most recent first"""
    return TransactionService(db).get_all(
        type.value if type else None,
        client_id,
        start_date,
        end_date,
        max(skip, 0),
        settings.page_size(limit)
    )


@router.get("/summary", response_model=TransactionSummary)
async def get_transaction_summary(
    type: Optional[TransactionTypeEnum] = None,
    client_id: Optional[UUID] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db)
):
    """Total income, total expense and balance"""
    return TransactionService(db).get_summary(
        type.value if type else None,
        client_id,
        start_date,
        end_date
    )


@router.post("", response_model=TransactionResponse)
async def create_transaction(
    transaction_data: TransactionCreate,
    db: Session = Depends(get_db)
):
    """Record a transaction"""
    try:
        transaction = TransactionService(db).create(transaction_data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    commit_or_conflict(db, "Transaction could not be saved")
    return transaction


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(transaction_id: UUID, db: Session = Depends(get_db)):
    transaction = TransactionService(db).get_by_id(transaction_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.put("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: UUID,
    transaction_data: TransactionUpdate,
    db: Session = Depends(get_db)
):
    """Update transaction"""
    try:
        transaction = TransactionService(db).update(transaction_id, transaction_data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    commit_or_conflict(db, "Transaction could not be saved")
    return transaction


@router.delete("/{transaction_id}", response_model=MessageResponse)
async def delete_transaction(transaction_id: UUID, db: Session = Depends(get_db)):
    """Delete transaction"""
    if not TransactionService(db).delete(transaction_id):
        raise HTTPException(status_code=404, detail="Transaction not found")
    commit_or_conflict(db, "Transaction could not be deleted")
    return {"message": "Transaction deleted successfully"}
