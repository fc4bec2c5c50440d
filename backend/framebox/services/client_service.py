"""
Client Service - Studio customers
"""
from typing import Optional, List
from uuid import UUID
from sqlalchemy.orm import Session

from framebox.models import Client
from framebox.schemas import ClientCreate, ClientUpdate
from framebox.services.catalog_service import apply_update, matches_search


class ClientService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, client_id: UUID) -> Optional[Client]:
        return self.db.query(Client).filter(Client.id == client_id).first()

    def get_all(self, search: str = None, skip: int = 0, limit: int = None) -> List[Client]:
        """Newest first; search matches name, email or phone, case-insensitive"""
        query = self.db.query(Client)
        if search:
            query = query.filter(matches_search(search, Client.name, Client.email, Client.phone))
        query = query.order_by(Client.created_at.desc(), Client.name).offset(skip)
        if limit:
            query = query.limit(limit)
        return query.all()

    def create(self, client_data: ClientCreate) -> Client:
        client = Client(
            name=client_data.name,
            email=client_data.email,
            phone=client_data.phone,
            address=client_data.address,
            notes=client_data.notes
        )
        self.db.add(client)
        self.db.flush()
        return client

    def update(self, client_id: UUID, client_data: ClientUpdate) -> Optional[Client]:
        client = self.get_by_id(client_id)
        if not client:
            return None

        apply_update(client, client_data.model_dump(exclude_unset=True), required=("name",))
        self.db.flush()
        return client

    def delete(self, client_id: UUID) -> bool:
        """Delete a client. Rejected by the store while transactions or appointments reference it."""
        client = self.get_by_id(client_id)
        if not client:
            return False

        self.db.delete(client)
        return True
