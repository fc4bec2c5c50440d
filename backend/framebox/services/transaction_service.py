"""
Transaction Service - Cash flow (income and expense entries)
"""
from typing import Optional, List
from uuid import UUID
from decimal import Decimal
from datetime import date
from sqlalchemy import func
from sqlalchemy.orm import Session

from framebox.models import Transaction, TransactionType, Category, Client
from framebox.schemas import TransactionCreate, TransactionUpdate
from framebox.services.catalog_service import apply_update

TWO_PLACES = Decimal("0.01")


class TransactionService:
    def __init__(self, db: Session):
        self.db = db

    def _filtered(self, type: str = None, client_id: UUID = None,
                  start_date: date = None, end_date: date = None):
        query = self.db.query(Transaction)
        if type:
            query = query.filter(Transaction.type == type)
        if client_id:
            query = query.filter(Transaction.client_id == client_id)
        if start_date:
            query = query.filter(Transaction.transaction_date >= start_date)
        if end_date:
            query = query.filter(Transaction.transaction_date <= end_date)
        return query

    def _check_references(self, category_id: Optional[UUID], client_id: Optional[UUID]):
        if category_id and not self.db.query(Category.id).filter(Category.id == category_id).first():
            raise ValueError("Category not found")
        if client_id and not self.db.query(Client.id).filter(Client.id == client_id).first():
            raise ValueError("Client not found")

    def get_by_id(self, transaction_id: UUID) -> Optional[Transaction]:
        return self.db.query(Transaction).filter(Transaction.id == transaction_id).first()

    def get_all(self, type: str = None, client_id: UUID = None, start_date: date = None,
                end_date: date = None, skip: int = 0, limit: int = None) -> List[Transaction]:
        """Most recent first"""
        query = self._filtered(type, client_id, start_date, end_date).order_by(
            Transaction.transaction_date.desc(),
            Transaction.created_at.desc()
        ).offset(skip)
        if limit:
            query = query.limit(limit)
        return query.all()

    def sum_amount(self, type: str, start_date: date = None, end_date: date = None,
                   client_id: UUID = None) -> Decimal:
        """Sum of amounts for one transaction type over an inclusive date range"""
        total = self._filtered(type, client_id, start_date, end_date).with_entities(
            func.sum(Transaction.amount)
        ).scalar() or Decimal("0")
        return Decimal(total).quantize(TWO_PLACES)

    def get_summary(self, type: str = None, client_id: UUID = None,
                    start_date: date = None, end_date: date = None) -> dict:
        """Income, expense and balance over the same filter the list uses"""
        income = Decimal("0.00")
        expense = Decimal("0.00")
        if type in (None, TransactionType.INCOME.value):
            income = self.sum_amount(TransactionType.INCOME.value, start_date, end_date, client_id)
        if type in (None, TransactionType.EXPENSE.value):
            expense = self.sum_amount(TransactionType.EXPENSE.value, start_date, end_date, client_id)

        count = self._filtered(type, client_id, start_date, end_date).with_entities(
            func.count(Transaction.id)
        ).scalar() or 0

        return {
            "total_income": income,
            "total_expense": expense,
            "balance": income - expense,
            "count": count
        }

    def create(self, transaction_data: TransactionCreate) -> Transaction:
        self._check_references(transaction_data.category_id, transaction_data.client_id)

        transaction = Transaction(
            type=transaction_data.type.value,
            amount=transaction_data.amount,
            description=transaction_data.description,
            category_id=transaction_data.category_id,
            client_id=transaction_data.client_id,
            transaction_date=transaction_data.transaction_date
        )
        self.db.add(transaction)
        self.db.flush()
        return transaction

    def update(self, transaction_id: UUID, transaction_data: TransactionUpdate) -> Optional[Transaction]:
        transaction = self.get_by_id(transaction_id)
        if not transaction:
            return None

        update_data = transaction_data.model_dump(exclude_unset=True)
        self._check_references(update_data.get("category_id"), update_data.get("client_id"))

        apply_update(
            transaction,
            update_data,
            required=("type", "amount", "description", "transaction_date")
        )
        self.db.flush()
        return transaction

    def delete(self, transaction_id: UUID) -> bool:
        transaction = self.get_by_id(transaction_id)
        if not transaction:
            return False

        self.db.delete(transaction)
        return True
