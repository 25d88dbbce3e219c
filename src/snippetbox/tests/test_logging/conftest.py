import pytest

from snippetbox.core.logging.builder import setup_logging
from snippetbox.core.logging.filters import set_request_id, reset_request_id

from ..test_fixtures.settings_fixtures import make_test_settings


@pytest.fixture(autouse=True)
def restore_logging():
    """Tests here reconfigure logging and touch the request id; put both back afterwards."""
    token = set_request_id(None)
    yield
    reset_request_id(token)
    setup_logging(make_test_settings())
