from .integration import DbDep, attach_mongo, get_db
from .repository import NoSqlRepository, serialize, to_object_id
from .service import NoSqlService, validate_document
from .session import MongoConnection
from .settings import MongoSettings, get_mongo_settings

__all__ = [
    "DbDep",
    "attach_mongo",
    "get_db",
    "MongoConnection",
    "MongoSettings",
    "get_mongo_settings",
    "NoSqlRepository",
    "NoSqlService",
    "serialize",
    "to_object_id",
    "validate_document",
]
