"""Shared fixtures."""

from __future__ import annotations

import pytest

from docker_monitor.core.schemas import ContainerIdentity


@pytest.fixture
def container_a() -> ContainerIdentity:
    return ContainerIdentity(id="a" * 64, name="web")


@pytest.fixture
def container_b() -> ContainerIdentity:
    return ContainerIdentity(id="b" * 64, name="db")
