"""
Algorithm registry: maps algorithm type tags to classifier classes.
Used by ClassifierCreator to build a configured algorithm by name.
"""

from typing import Dict, Type

from .algorithm import AlgorithmParameters, ClassificationAlgorithm, ClassifierConfigurationError
from .knn_classifier import KNNClassifier
from .svm_classifier import SVMClassifier

# Map algorithm tag -> classifier class
ALGORITHM_REGISTRY: Dict[str, Type[ClassificationAlgorithm]] = {
    "svm": SVMClassifier,
    "knn": KNNClassifier,
}


def register_algorithm(tag: str, algorithm_class: Type[ClassificationAlgorithm]) -> None:
    """Add an algorithm type to the registry under ``tag``."""
    tag = tag.strip().lower()
    if tag in ALGORITHM_REGISTRY:
        raise ValueError(f"Algorithm type '{tag}' is already registered")
    ALGORITHM_REGISTRY[tag] = algorithm_class


def get_algorithm_class(tag: str) -> Type[ClassificationAlgorithm]:
    """
    Return the classifier class registered under ``tag``.

    Raises:
        ClassifierConfigurationError: If the tag is unknown.
    """
    key = tag.strip().lower()
    if key not in ALGORITHM_REGISTRY:
        raise ClassifierConfigurationError(
            f"Unknown classifier type '{tag}'. "
            f"Valid options: {list(ALGORITHM_REGISTRY.keys())}"
        )
    return ALGORITHM_REGISTRY[key]


def build_algorithm(tag: str, **named_parameters) -> ClassificationAlgorithm:
    """
    Build an untrained algorithm from named parameters.

    Only the names declared by the algorithm's parameter record are used;
    the rest fall back to that record's defaults.
    """
    algorithm_class = get_algorithm_class(tag)
    params: AlgorithmParameters = algorithm_class.parameters_class(**named_parameters)
    return algorithm_class.from_parameters(params)


def list_types() -> list[str]:
    """Return the registered algorithm tags."""
    return list(ALGORITHM_REGISTRY.keys())
