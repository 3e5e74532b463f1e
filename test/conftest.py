import logging

import matplotlib

# Headless backend for the rendering tests
matplotlib.use("Agg")


def pytest_configure(config):
    """Set up test environment before tests run."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
