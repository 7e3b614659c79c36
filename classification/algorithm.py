"""
Classification Algorithm Base
Common fit/predict/encode contract shared by every pluggable classifier.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional, Sequence, Type

import numpy as np
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from sklearn.metrics import accuracy_score

# Returned by predict() when no trained model is available
NO_PREDICTION = -1

# One-hot position used to encode NO_PREDICTION
NO_PREDICTION_POSITION = 0


class ClassifierConfigurationError(ValueError):
    """Raised when training data or parameters do not fit the classifier."""

    pass


class ClassIndexOutOfRangeError(ValueError):
    """Raised when a class index cannot be encoded into the output vector."""

    pass


class AlgorithmParameters(BaseModel):
    """Named construction parameters common to all algorithms.

    Unknown names are ignored so a creator can pass its full parameter set and
    each algorithm only picks up the fields it declares.
    """

    model_config = ConfigDict(extra="ignore")

    input_size: int = Field(default=4, ge=1)
    output_size: int = Field(default=4, ge=1)


def one_hot(position: int, size: int, value: float = 1.0) -> np.ndarray:
    """Return a vector of ``size`` zeros with ``value`` at ``position``."""
    if not 0 <= position < size:
        raise ClassIndexOutOfRangeError(
            f"One-hot position {position} outside output size of {size}"
        )
    vector = np.zeros(size)
    vector[position] = value
    return vector


class ClassificationAlgorithm(ABC):
    """
    Trainable mapping from a feature vector to a discrete class index.

    Subclasses provide the underlying estimator (``_build_model``), the
    one-hot encoding convention (``get_output_vector``) and ``copy``.
    ``model`` is None until ``fit`` succeeds.
    """

    name: ClassVar[str] = "Classifier"
    parameters_class: ClassVar[Type[AlgorithmParameters]] = AlgorithmParameters
    # Inherently binary algorithms ignore the requested output size
    binary: ClassVar[bool] = False

    def __init__(self, input_size: int = 4, output_size: int = 4):
        self.input_size = input_size
        self.output_size = 2 if self.binary else output_size
        self.model: Optional[Any] = None
        self.accuracy: Optional[float] = None
        self.stats: str = ""

    @classmethod
    def from_parameters(cls, params: AlgorithmParameters) -> "ClassificationAlgorithm":
        """Construct an instance from a validated parameter record."""
        return cls(**params.model_dump())

    @property
    def is_trained(self) -> bool:
        return self.model is not None

    @abstractmethod
    def _build_model(self) -> Any:
        """Return a fresh, unfitted estimator configured with the hyperparameters."""

    @abstractmethod
    def get_output_vector(
        self, class_index: int, output_size: Optional[int] = None
    ) -> np.ndarray:
        """Encode a predicted class index as a one-hot output vector."""

    @abstractmethod
    def copy(self) -> "ClassificationAlgorithm":
        """Return an untrained instance with identical hyperparameters."""

    def _validate_training_set(
        self, features: np.ndarray, targets: np.ndarray
    ) -> None:
        if len(targets) == 0:
            raise ClassifierConfigurationError("Cannot fit on an empty training set")
        if features.shape[0] != len(targets):
            raise ClassifierConfigurationError(
                f"Got {features.shape[0]} feature vectors but {len(targets)} targets"
            )
        if features.ndim != 2 or features.shape[1] != self.input_size:
            raise ClassifierConfigurationError(
                f"Feature vectors must have length {self.input_size}, "
                f"got shape {features.shape}"
            )

    def fit(self, features: Sequence[Sequence[float]], targets: Sequence[int]) -> None:
        """Train a new model, replacing any previous one.

        Raises:
            ClassifierConfigurationError: If the training set is empty, the
                sequences differ in length or a vector has the wrong length.
        """
        try:
            x = np.asarray(features, dtype=np.float64)
        except ValueError as e:
            raise ClassifierConfigurationError(
                f"Feature vectors must all have length {self.input_size}: {e}"
            ) from e
        y = np.asarray(targets, dtype=np.int64)
        self._validate_training_set(x, y)

        model = self._build_model()
        try:
            model.fit(x, y)
            accuracy = float(accuracy_score(y, model.predict(x)))
        except ValueError as e:
            raise ClassifierConfigurationError(f"{self.name} could not be fitted: {e}") from e

        self.model = model
        self.accuracy = accuracy
        self.stats = f"Training accuracy: {self.accuracy:.3f}"
        logger.info(
            f"{self.name} fitted on {len(y)} examples "
            f"({len(np.unique(y))} classes), accuracy={self.accuracy:.3f}"
        )

    def predict(self, input_vector: Sequence[float]) -> int:
        """Predict a class index, or NO_PREDICTION when untrained."""
        if self.model is None:
            return NO_PREDICTION
        x = np.asarray(input_vector, dtype=np.float64).reshape(1, -1)
        if x.shape[1] != self.input_size:
            raise ClassifierConfigurationError(
                f"Input vector must have length {self.input_size}, got {x.shape[1]}"
            )
        return int(self.model.predict(x)[0])

    def __repr__(self) -> str:
        state = "trained" if self.is_trained else "untrained"
        return f"{type(self).__name__}({self.input_size} -> {self.output_size}, {state})"
