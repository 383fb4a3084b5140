"""Shared pytest fixtures"""

import pytest

import deepstore.config as config_module


@pytest.fixture(autouse=True)
def restore_default_config():
    """Restore the process-wide default configuration after each test"""
    saved = config_module.get_default_config()
    yield
    config_module._default_config = saved
