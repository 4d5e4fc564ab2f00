"""CRUD operations for clients, always scoped to the owning user."""

from typing import List, Optional

from sqlalchemy.orm import Session

from invoicer.app.db.session import atomic
from invoicer.app.models.client import Client
from invoicer.app.schemas.client import ClientUpdate


class CRUDClient:
    def get(self, db: Session, *, client_id: int, owner_id: int) -> Optional[Client]:
        return db.query(Client).filter(Client.id == client_id, Client.user_id == owner_id).first()

    def get_by_name(self, db: Session, *, name: str, owner_id: int) -> Optional[Client]:
        return db.query(Client).filter(Client.user_id == owner_id, Client.name == name).first()

    def get_multi(self, db: Session, *, owner_id: int) -> List[Client]:
        return (
            db.query(Client)
            .filter(Client.user_id == owner_id)
            .order_by(Client.name.asc(), Client.id.asc())
            .all()
        )

    def upsert_by_name(self, db: Session, *, name: str, address: Optional[str], owner_id: int) -> Client:
        """Create the client on first use of a name; refresh its address when a new one is given.

        Flushes only. The caller's transaction commits.
        """
        client = self.get_by_name(db, name=name, owner_id=owner_id)
        if client is None:
            client = Client(user_id=owner_id, name=name, address=address or None)
            db.add(client)
        elif address and address != client.address:
            client.address = address
        db.flush()
        return client

    def update(self, db: Session, *, client_id: int, obj_in: ClientUpdate, owner_id: int) -> Optional[Client]:
        client = self.get(db, client_id=client_id, owner_id=owner_id)
        if not client:
            return None
        update_data = obj_in.model_dump(exclude_unset=True)
        with atomic(db, conflict_message="A client with this name already exists"):
            if update_data.get("name") is not None:
                client.name = update_data["name"]
            if "address" in update_data:
                client.address = update_data["address"] or None
        db.refresh(client)
        return client

    def delete(self, db: Session, *, client_id: int, owner_id: int) -> bool:
        # Invoices keep their own copy of the client details, so nothing cascades
        with atomic(db):
            removed = (
                db.query(Client)
                .filter(Client.id == client_id, Client.user_id == owner_id)
                .delete(synchronize_session=False)
            )
        return removed > 0


client_crud = CRUDClient()
