
from flask import Blueprint, current_app, jsonify, request

from chainmap.logger.log_types import LogEvent
from chainmap.logger.logger import log_error_event, log_key_event
from kv_store.store import MISSING

keys_api = Blueprint('keys', __name__)


def _store():
    return current_app.extensions['kv_store']


def _validate_key(key):
    if len(key) > current_app.config['MAX_KEY_LENGTH']:
        return f"key longer than {current_app.config['MAX_KEY_LENGTH']} characters"
    return None


@keys_api.route('/keys/<key>', methods=['PUT'])
def put_key(key):
    error = _validate_key(key)
    if error:
        log_error_event(LogEvent.INVALID_REQUEST, error)
        return jsonify({"error": error}), 400

    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'value' not in data:
        log_error_event(LogEvent.INVALID_REQUEST, "value is required", key)
        return jsonify({"error": "value is required"}), 400

    existed, previous = _store().put(key, data['value'])
    if existed:
        log_key_event(LogEvent.KEY_UPDATED, key)
        return jsonify({"previous": previous}), 200

    log_key_event(LogEvent.KEY_STORED, key)
    return "", 201


@keys_api.route('/keys/<key>', methods=['GET'])
def get_key(key):
    value = _store().get(key)
    if value is MISSING:
        log_key_event(LogEvent.KEY_NOT_FOUND, key)
        return jsonify({"error": "Key not found"}), 404

    log_key_event(LogEvent.KEY_RETRIEVED, key)
    return jsonify({"key": key, "value": value})


@keys_api.route('/keys/<key>', methods=['DELETE'])
def delete_key(key):
    if not _store().delete(key):
        log_key_event(LogEvent.KEY_NOT_FOUND, key)
        return jsonify({"error": "Key not found"}), 404

    log_key_event(LogEvent.KEY_DELETED, key)
    return "", 204


@keys_api.route('/keys', methods=['GET'])
def list_keys():
    return jsonify({"keys": _store().keys()})


@keys_api.route('/stats', methods=['GET'])
def stats():
    return jsonify(_store().stats())
