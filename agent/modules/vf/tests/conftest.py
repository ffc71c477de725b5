"""Shared fixtures for VectorForge module tests."""

from __future__ import annotations

import pytest

from modules.vf.client import VectorForgeClient
from modules.vf.registry import ToolRegistry
from modules.vf.tests.fixtures import FakeVectorForgeAPI, make_settings
from modules.vf.tools import VFTools


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def api():
    return FakeVectorForgeAPI()


@pytest.fixture
def vf_client(settings, api):
    return VectorForgeClient(settings, transport=api.transport)


@pytest.fixture
def tools(vf_client):
    return VFTools(vf_client)


@pytest.fixture
def registry(tools):
    return ToolRegistry(tools)
