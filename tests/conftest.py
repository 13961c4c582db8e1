"""Shared fixtures for the faultmap test suite."""

import logging

import pytest

from faultmap.infrastructure.handling.response_sink import BufferedResponseSink


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("tests.faultmap")


@pytest.fixture
def sink() -> BufferedResponseSink:
    return BufferedResponseSink()
