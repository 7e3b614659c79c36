"""
Classification Layer Package
Pluggable statistical classifiers that let a simulated network node map its
inputs to a one-hot output vector each tick.
"""

# Import algorithm functionality
from .algorithm import (
    NO_PREDICTION,
    AlgorithmParameters,
    ClassificationAlgorithm,
    ClassifierConfigurationError,
    ClassIndexOutOfRangeError,
    one_hot,
)
from .knn_classifier import KNNClassifier, KNNParameters
from .svm_classifier import SVMClassifier, SVMParameters
from .registry import build_algorithm, list_types, register_algorithm

# Import training data functionality
from .training_data import LabelIndexMap, TrainingDataStore

# Import node and core functionality
from .events import Event, NodeEvents
from .node import ClassifierNode, setup_classifier_logger
from .core import ClassificationCore, IdManager
from .creator import ClassifierCreator, load_creator, load_creator_from_string

__all__ = [
    # Algorithms
    "NO_PREDICTION",
    "AlgorithmParameters",
    "ClassificationAlgorithm",
    "ClassifierConfigurationError",
    "ClassIndexOutOfRangeError",
    "one_hot",
    "KNNClassifier",
    "KNNParameters",
    "SVMClassifier",
    "SVMParameters",
    "build_algorithm",
    "list_types",
    "register_algorithm",
    # Training data
    "LabelIndexMap",
    "TrainingDataStore",
    # Nodes
    "Event",
    "NodeEvents",
    "ClassifierNode",
    "setup_classifier_logger",
    "ClassificationCore",
    "IdManager",
    "ClassifierCreator",
    "load_creator",
    "load_creator_from_string",
]

__version__ = "0.1.0"
