"""
Catalog Service - Transaction categories and sellable services
"""
from enum import Enum
from typing import Optional, List
from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from framebox.models import Category, Service
from framebox.schemas import CategoryCreate, CategoryUpdate, ServiceCreate, ServiceUpdate


def apply_update(instance, update_data: dict, required: tuple = ()):
    """Copy submitted fields onto a row; a blank required field keeps its value"""
    for key, value in update_data.items():
        if value is None and key in required:
            continue
        if isinstance(value, Enum):
            value = value.value
        setattr(instance, key, value)


def matches_search(search: str, *columns):
    """
    Case-insensitive substring match on any of the columns. Both sides go
    through `lower`, so accented letters fold too; LIKE wildcards in the
    search text match literally.
    """
    term = search.strip().lower()
    for char in ("\\", "%", "_"):
        term = term.replace(char, "\\" + char)
    pattern = f"%{term}%"
    return or_(*(func.lower(column).like(pattern, escape="\\") for column in columns))


class CategoryService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, category_id: UUID) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()

    def get_all(self, type: str = None) -> List[Category]:
        query = self.db.query(Category)
        if type:
            query = query.filter(Category.type == type)
        return query.order_by(Category.name).all()

    def create(self, category_data: CategoryCreate) -> Category:
        category = Category(
            name=category_data.name,
            type=category_data.type.value,
            color=category_data.color or "#8B5CF6",
            description=category_data.description
        )
        self.db.add(category)
        self.db.flush()
        return category

    def update(self, category_id: UUID, category_data: CategoryUpdate) -> Optional[Category]:
        category = self.get_by_id(category_id)
        if not category:
            return None

        apply_update(category, category_data.model_dump(exclude_unset=True), required=("name", "type", "color"))
        self.db.flush()
        return category

    def delete(self, category_id: UUID) -> bool:
        """Delete a category. The store rejects it while transactions reference it."""
        category = self.get_by_id(category_id)
        if not category:
            return False

        self.db.delete(category)
        return True


class ServiceCatalogService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, service_id: UUID) -> Optional[Service]:
        return self.db.query(Service).filter(Service.id == service_id).first()

    def get_by_ids(self, service_ids) -> dict:
        """Map of id -> Service for the given ids"""
        ids = set(service_ids)
        if not ids:
            return {}
        services = self.db.query(Service).filter(Service.id.in_(ids)).all()
        return {service.id: service for service in services}

    def get_all(self, search: str = None, skip: int = 0, limit: int = None) -> List[Service]:
        query = self.db.query(Service)
        if search:
            query = query.filter(matches_search(search, Service.name, Service.description))
        query = query.order_by(Service.created_at.desc(), Service.name).offset(skip)
        if limit:
            query = query.limit(limit)
        return query.all()

    def create(self, service_data: ServiceCreate) -> Service:
        service = Service(
            name=service_data.name,
            description=service_data.description,
            base_price=service_data.base_price,
            duration_hours=service_data.duration_hours
        )
        self.db.add(service)
        self.db.flush()
        return service

    def update(self, service_id: UUID, service_data: ServiceUpdate) -> Optional[Service]:
        service = self.get_by_id(service_id)
        if not service:
            return None

        apply_update(service, service_data.model_dump(exclude_unset=True), required=("name", "base_price", "duration_hours"))
        self.db.flush()
        return service

    def delete(self, service_id: UUID) -> bool:
        """Delete a service. The store rejects it while line items reference it."""
        service = self.get_by_id(service_id)
        if not service:
            return False

        self.db.delete(service)
        return True
