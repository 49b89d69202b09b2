# conversa_api/core/enums.py
from enum import Enum


class PermissionAction(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class MessageType(str, Enum):
    TEXT = "text"
    FILE = "file"
    MIXED = "mixed"
