import logging

import pytest


@pytest.fixture(autouse=True)
def reset_ferris_logger():
    """Clients bind their console handler to the stderr of the test that started them."""
    yield
    logger = logging.getLogger("ferris")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
