"""
K nearest neighbors classifier variant.
"""

from typing import Optional

import numpy as np
from pydantic import Field
from sklearn.neighbors import KNeighborsClassifier

from .algorithm import (
    NO_PREDICTION,
    NO_PREDICTION_POSITION,
    AlgorithmParameters,
    ClassificationAlgorithm,
    ClassIndexOutOfRangeError,
    one_hot,
)


class KNNParameters(AlgorithmParameters):
    """Construction parameters for KNNClassifier."""

    k: int = Field(default=2, ge=1)


class KNNClassifier(ClassificationAlgorithm):
    """Wrapper for scikit-learn's KNeighborsClassifier."""

    name = "K Nearest Neighbors"
    parameters_class = KNNParameters

    def __init__(self, input_size: int = 4, output_size: int = 4, k: int = 2):
        super().__init__(input_size, output_size)
        self.k = k

    def _build_model(self) -> KNeighborsClassifier:
        return KNeighborsClassifier(n_neighbors=self.k)

    def get_output_vector(
        self, class_index: int, output_size: Optional[int] = None
    ) -> np.ndarray:
        """
        One-hot encode ``class_index`` at position ``class_index - 1``.

        The shift by one is kept so existing configurations keep producing the
        same outputs. NO_PREDICTION encodes at NO_PREDICTION_POSITION.

        Raises:
            ClassIndexOutOfRangeError: If ``class_index > output_size`` or the
                shifted position falls outside the vector.
        """
        size = self.output_size if output_size is None else output_size
        if class_index > size:
            raise ClassIndexOutOfRangeError(
                f"Prediction of {class_index} > output size of {size}"
            )
        if class_index == NO_PREDICTION:
            return one_hot(NO_PREDICTION_POSITION, size)
        return one_hot(class_index - 1, size)

    def copy(self) -> "KNNClassifier":
        return KNNClassifier(self.input_size, self.output_size, k=self.k)
