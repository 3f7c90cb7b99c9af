import pytest
from unittest.mock import MagicMock
import os

from hissatsu.gateway.server import create_app

# Never build a real client from the environment during tests
os.environ["OPENAI_API_KEY"] = "test_key"


@pytest.fixture
def mock_openai():
    """
    Stand-in for the OpenAI client injected into the app.
    """
    return MagicMock()


@pytest.fixture
def app(mock_openai):
    app = create_app(config={"SKILL_PARSE_MODE": "json", "MAX_UPLOAD_MB": 5}, openai_client=mock_openai)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def text_mode_app(mock_openai):
    app = create_app(config={"SKILL_PARSE_MODE": "text"}, openai_client=mock_openai)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def text_mode_client(text_mode_app):
    return text_mode_app.test_client()
