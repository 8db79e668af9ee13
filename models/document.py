"""
Document model: one row per schema-free JSON document.
Rows are partitioned by collection name ("blogs", "comments", "wishlists");
(collection, id) is the primary key.
"""
from sqlalchemy import Column, String, JSON

from models.base_model import Base, BaseModel


class Document(BaseModel, Base):
    __tablename__ = "documents"

    collection = Column(String(64), primary_key=True)
    data = Column(JSON, nullable=False, default=dict)

    def as_document(self) -> dict:
        """Client-facing shape: stored fields plus the store id as `_id`."""
        return {"_id": self.id, **(self.data or {})}
