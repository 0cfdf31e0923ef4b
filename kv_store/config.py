import os

LOGZIO_API_KEY = os.getenv("logzIO_api_key")

# Check if we're in test mode
IS_TESTING = os.getenv("TESTING", "false").lower() == "true"

if not LOGZIO_API_KEY and not IS_TESTING:
    raise RuntimeError("Missing environment variable: LOGZIO_API_KEY")

INITIAL_BUCKET_COUNT = int(os.getenv("KV_INITIAL_BUCKETS", "10"))
MAX_LOAD_FACTOR = float(os.getenv("KV_MAX_LOAD_FACTOR", "1.0"))
MAX_KEY_LENGTH = int(os.getenv("KV_MAX_KEY_LENGTH", "200"))
LOG_LEVEL = os.getenv("KV_LOG_LEVEL", "INFO").upper()


def _logging_profile(handlers, event_handlers, server_handlers):
    """
    chainmap_logger carries the JSON key and rehash events; werkzeug only
    reports server-side problems, never the per-request access lines.
    """
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            # event lines are already JSON
            'event': {'format': '%(message)s'},
            'server': {'format': '%(asctime)s %(levelname)s %(name)s: %(message)s'},
        },
        'handlers': handlers,
        'loggers': {
            'chainmap_logger': {
                'level': LOG_LEVEL,
                'handlers': event_handlers,
                'propagate': False
            },
            'werkzeug': {
                'level': 'WARNING',
                'handlers': server_handlers,
                'propagate': False
            }
        }
    }


TEST_LOGGING = _logging_profile(
    handlers={'null': {'class': 'logging.NullHandler'}},
    event_handlers=['null'],
    server_handlers=['null'],
)

# Events ship to logz.io; server warnings stay on stderr next to the process
PRODUCTION_LOGGING = _logging_profile(
    handlers={
        'logzio': {
            'class': 'logzio.handler.LogzioHandler',
            'level': LOG_LEVEL,
            'formatter': 'event',
            'token': LOGZIO_API_KEY,
            'logzio_type': 'chainmap-kv-events',
            'logs_drain_timeout': 5,
            'url': 'https://listener-eu.logz.io:8071',
            'retries_no': 4,
            'retry_timeout': 2,
        },
        'stderr': {
            'class': 'logging.StreamHandler',
            'level': 'WARNING',
            'formatter': 'server',
            'stream': 'ext://sys.stderr'
        }
    },
    event_handlers=['logzio'],
    server_handlers=['stderr'],
)

LOGGING = TEST_LOGGING if IS_TESTING else PRODUCTION_LOGGING
