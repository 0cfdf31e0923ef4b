from chainmap.logger.log_types import LogEvent
import json
import logging

# Handlers are attached by whoever runs the map (kv_store config, the dedupe CLI)
logger = logging.getLogger('chainmap_logger')


def log_rehash_event(old_bucket_count: int, new_bucket_count: int, element_count: int):
    """Log a bucket array rebuild"""
    logger.info(json.dumps({
        "event": LogEvent.MAP_REHASHED,
        "old_bucket_count": old_bucket_count,
        "new_bucket_count": new_bucket_count,
        "element_count": element_count
    }))


def log_key_event(event: LogEvent, key: str):
    """Log a key-level store event"""
    logger.info(json.dumps({
        "event": event,
        "key": key
    }))


def log_error_event(event: LogEvent, error: str, key: str = None):
    """Log an error event (with optional key)"""
    log_data = {
        "event": event,
        "error": error
    }
    if key:
        log_data["key"] = key

    logger.error(json.dumps(log_data))
