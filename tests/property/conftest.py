"""Hypothesis profiles and markers for the property-based tests.

Select a profile with HYPOTHESIS_PROFILE=ci|dev|quick.
"""

import os

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings

settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile("dev", max_examples=50, deadline=None, verbosity=Verbosity.verbose)
settings.register_profile("quick", max_examples=10, deadline=None, phases=[Phase.generate])

_profile = os.environ.get("HYPOTHESIS_PROFILE")
if _profile in ("ci", "dev", "quick"):
    settings.load_profile(_profile)


def pytest_collection_modifyitems(config, items):
    """Mark everything under tests/property with the 'property' marker."""
    for item in items:
        if "property" in str(item.fspath):
            item.add_marker(pytest.mark.property)
