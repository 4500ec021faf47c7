# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from nestedfst.core.configuration import create_config
from nestedfst.machines.traffic_light import (
    PEDESTRIAN_LIGHT_NAME,
    Light,
    PedestrianSymbol,
    build_pedestrian_light,
    build_traffic_light,
)


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")
    config.addinivalue_line("markers", "integration: mark test as an end-to-end scenario")


@pytest.fixture
def pedestrian_light():
    """The pedestrian signal child machine."""
    return build_pedestrian_light()


@pytest.fixture
def traffic_light(pedestrian_light):
    """The traffic light with its nested pedestrian signal."""
    return build_traffic_light(pedestrian_light)


@pytest.fixture
def pedestrian_red_config():
    """Traffic light waiting in PedestrianRed with the pedestrian signal at Stop."""
    return create_config(Light.PEDESTRIAN_RED).with_child(PEDESTRIAN_LIGHT_NAME, create_config(PedestrianSymbol.STOP))
