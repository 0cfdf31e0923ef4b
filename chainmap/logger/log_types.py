from enum import Enum


class LogEvent(str, Enum):
    MAP_REHASHED = "map_rehashed"
    KEY_STORED = "key_stored"
    KEY_UPDATED = "key_updated"
    KEY_RETRIEVED = "key_retrieved"
    KEY_NOT_FOUND = "key_not_found"
    KEY_DELETED = "key_deleted"
    INVALID_REQUEST = "invalid_request"
