"""
Support vector machine classifier variant (binary only).
"""

from typing import Optional

import numpy as np
from pydantic import Field
from sklearn.svm import SVC

from .algorithm import (
    NO_PREDICTION,
    NO_PREDICTION_POSITION,
    AlgorithmParameters,
    ClassificationAlgorithm,
    ClassifierConfigurationError,
    one_hot,
)


class SVMParameters(AlgorithmParameters):
    """Construction parameters for SVMClassifier."""

    output_size: int = Field(default=2, ge=1)
    kernel_degree: int = Field(default=2, ge=1)
    C: float = Field(default=1000.0, gt=0.0)  # soft margin penalty
    tolerance: float = Field(default=1e-3, gt=0.0)  # convergence test


class SVMClassifier(ClassificationAlgorithm):
    """Wrapper for scikit-learn's SVC with a polynomial kernel."""

    name = "Support Vector Machine"
    parameters_class = SVMParameters
    binary = True

    def __init__(
        self,
        input_size: int = 4,
        output_size: int = 2,
        kernel_degree: int = 2,
        C: float = 1000.0,
        tolerance: float = 1e-3,
    ):
        super().__init__(input_size, output_size)
        self.kernel_degree = kernel_degree
        self.C = C
        self.tolerance = tolerance

    def _build_model(self) -> SVC:
        return SVC(kernel="poly", degree=self.kernel_degree, C=self.C, tol=self.tolerance)

    def _validate_training_set(self, features: np.ndarray, targets: np.ndarray) -> None:
        super()._validate_training_set(features, targets)
        classes = np.unique(targets)
        if len(classes) > 2:
            raise ClassifierConfigurationError(
                f"{self.name} is binary but training set has {len(classes)} classes"
            )

    def get_output_vector(
        self, class_index: int, output_size: Optional[int] = None
    ) -> np.ndarray:
        """
        [1, 0] for NO_PREDICTION or the model's first (negative) class,
        [0, 1] for the second (positive) class.

        Without a trained model any index other than NO_PREDICTION counts as
        a positive prediction.
        """
        size = self.output_size if output_size is None else output_size
        if class_index == NO_PREDICTION:
            return one_hot(NO_PREDICTION_POSITION, size)
        if self.model is not None and class_index == self.model.classes_[0]:
            return one_hot(NO_PREDICTION_POSITION, size)
        return one_hot(1, size)

    def copy(self) -> "SVMClassifier":
        return SVMClassifier(
            self.input_size,
            self.output_size,
            kernel_degree=self.kernel_degree,
            C=self.C,
            tolerance=self.tolerance,
        )
