"""
Pytest fixtures for classification tests.
"""

import sys
from pathlib import Path

import pytest

# Add repository root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from classification.core import ClassificationCore  # noqa: E402
from classification.node import setup_classifier_logger  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def classifier_logging():
    """Configure loguru once for the test session."""
    setup_classifier_logger("WARNING")


@pytest.fixture
def core():
    """Return a fresh owning context for classifier nodes."""
    return ClassificationCore()


@pytest.fixture
def separable_features():
    """Four well separated 2-d points, one per class."""
    return [[0.0, 0.0], [10.0, 0.0], [0.0, 10.0], [10.0, 10.0]]


@pytest.fixture
def binary_training_set():
    """Linearly separable two-class training set."""
    features = [[-2.0, -2.0], [-1.0, -2.0], [-2.0, -1.0], [2.0, 2.0], [1.0, 2.0], [2.0, 1.0]]
    labels = ["off", "off", "off", "on", "on", "on"]
    return features, labels
