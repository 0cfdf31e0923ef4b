import logging
import logging.config

from flask import Flask, jsonify

from kv_store import config
from kv_store.api.v0.keys_routes import keys_api
from kv_store.store import KeyValueStore


def make_app():
    app = Flask(__name__)

    # Application configuration
    app.config['INITIAL_BUCKET_COUNT'] = config.INITIAL_BUCKET_COUNT
    app.config['MAX_LOAD_FACTOR'] = config.MAX_LOAD_FACTOR
    app.config['MAX_KEY_LENGTH'] = config.MAX_KEY_LENGTH

    # Logging setup
    logging.config.dictConfig(config.LOGGING)
    logger = logging.getLogger('chainmap_logger')

    app.extensions['kv_store'] = KeyValueStore(
        app.config['INITIAL_BUCKET_COUNT'],
        app.config['MAX_LOAD_FACTOR'],
    )
    logger.info(
        f"Key-value store ready with {app.config['INITIAL_BUCKET_COUNT']} buckets, "
        f"max load factor {app.config['MAX_LOAD_FACTOR']}"
    )

    @app.route('/health', methods=['GET'])
    def health_check():
        return jsonify({"status": "ready"}), 200

    app.register_blueprint(keys_api, url_prefix='/api/v0')

    return app


if __name__ == '__main__':
    app = make_app()
    app.run(host='0.0.0.0', port=5001, debug=False, use_reloader=False)
