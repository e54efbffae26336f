# SPDX-License-Identifier: GPL-2.0-or-later
"""Pytest configuration - shared fixtures."""

import pytest

from simulated_device import SimulatedDevice


@pytest.fixture
def dev():
    """Scripted keyboard; the test fails if not every scripted exchange was used."""
    device = SimulatedDevice()
    yield device
    device.finish()


@pytest.fixture
def no_sleep():
    """Replacement for time.sleep that records the requested delays."""
    calls = []

    def sleep(seconds):
        calls.append(seconds)

    sleep.calls = calls
    return sleep
