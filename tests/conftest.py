"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_dir(temp_dir):
    """Create a sample configuration directory structure."""
    config_dir = temp_dir / "config"
    (config_dir / "puzzles").mkdir(parents=True)

    decaminx_config = """
puzzle:
  name: "Test Decaminx"
  ball_radius: 18.0
  min_angle: 0.7619934

classifier:
  deep_interior_enabled: false
  corner_rounding_k: 1.0

sampling:
  spacing: 2.0
  tries: 8
"""
    (config_dir / "puzzles" / "test_decaminx.yaml").write_text(decaminx_config)

    deep_config = """
puzzle:
  name: "Deep Decaminx"

classifier:
  deep_interior_enabled: true
"""
    (config_dir / "puzzles" / "deep.yaml").write_text(deep_config)

    return config_dir


@pytest.fixture
def classifier():
    """Default classifier with the deep-interior branch disabled."""
    from decaminx.geometry.classifier import PartClassifier

    return PartClassifier()


@pytest.fixture
def deep_classifier():
    """Classifier with the deep-interior branch enabled."""
    from decaminx.geometry.classifier import PartClassifier

    return PartClassifier(deep_interior_enabled=True)
