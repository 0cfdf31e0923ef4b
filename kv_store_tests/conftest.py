import os
from unittest.mock import MagicMock, patch

import pytest

os.environ.setdefault('TESTING', 'true')

from kv_store.app import make_app


@pytest.fixture
def app():
    app = make_app()
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def mock_logger():
    with patch('chainmap.logger.logger.logger') as mock_logger:
        mock_logger.info = MagicMock()
        mock_logger.error = MagicMock()
        yield mock_logger


@pytest.fixture
def sample_scores():
    return {
        "Alice": 92,
        "Bob": 87,
    }
