from models.db_storage import DBStorage, Collection, InsertOneResult, UpdateResult, DeleteResult
from models.document import Document

__all__ = [
    "DBStorage",
    "Collection",
    "Document",
    "InsertOneResult",
    "UpdateResult",
    "DeleteResult",
]
