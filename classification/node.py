#!/usr/bin/env python3
"""
Classifier Node
Network-facing layer that delegates its input -> output mapping to a
pluggable classification algorithm and publishes the prediction as a one-hot
output vector each simulation tick.
"""

import sys
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np
from loguru import logger

from .algorithm import NO_PREDICTION, ClassificationAlgorithm, ClassIndexOutOfRangeError
from .events import NodeEvents
from .training_data import TrainingDataStore

if TYPE_CHECKING:
    from .core import ClassificationCore

# Winner value before the first prediction
UNINITIALIZED_WINNER = -(2**31)


def setup_classifier_logger(level: str = "INFO", sink=sys.stderr) -> int:
    """
    Replace loguru's sinks with one that tags records by layer label.

    Meant for entry points and test sessions; library objects never call it.
    Returns the id of the added sink.
    """
    logger.remove()
    logger.configure(extra={"layer": "-"})
    return logger.add(
        sink,
        format="{time:HH:mm:ss.SSS} <level>{level: <8}</level> "
        "[<cyan>{extra[layer]}</cyan>] {message}",
        level=level,
    )


class ClassifierNode:
    """
    Wraps one ClassificationAlgorithm and one TrainingDataStore.

    Upstream connections write into ``inputs`` between ticks; ``update``
    consumes them, writes ``outputs`` and clears ``inputs``. Nothing is
    buffered across ticks, so writers must write before ``update`` runs.
    """

    def __init__(
        self,
        core: "ClassificationCore",
        classifier: ClassificationAlgorithm,
        training_data: Optional[TrainingDataStore] = None,
        label: Optional[str] = None,
        log_level: str = "INFO",
    ):
        self.core = core
        self.classifier = classifier
        self.training_data = (
            training_data if training_data is not None else TrainingDataStore()
        )
        self.label = label or core.id_manager.get_proposed_id("Classifier")
        self.events = NodeEvents()

        # Per-tick debug logging is only formatted when requested
        self.logger_active = log_level.upper() == "DEBUG"
        self.logger = logger.bind(layer=self.label)

        self.inputs = np.zeros(classifier.input_size)
        self.outputs = np.zeros(classifier.output_size)
        self.winner: int = UNINITIALIZED_WINNER

        self.logger.info(f"Initialized {self}")

    @property
    def winning_label(self) -> str:
        """Label associated with the last winning class, or "" if unmapped."""
        return self.training_data.label_for(self.winner) or ""

    def output_size(self) -> int:
        return self.classifier.output_size

    def input_size(self) -> int:
        return self.classifier.input_size

    def get_outputs(self) -> np.ndarray:
        return self.outputs

    def set_inputs(self, values: Sequence[float]) -> None:
        """Overwrite the input buffer."""
        vector = np.asarray(values, dtype=np.float64)
        if vector.shape != self.inputs.shape:
            raise ValueError(
                f"Expected {self.input_size()} inputs, got shape {vector.shape}"
            )
        self.inputs = vector.copy()

    def add_inputs(self, values: Sequence[float]) -> None:
        """Accumulate an upstream contribution into the input buffer."""
        vector = np.asarray(values, dtype=np.float64)
        if vector.shape != self.inputs.shape:
            raise ValueError(
                f"Expected {self.input_size()} inputs, got shape {vector.shape}"
            )
        self.inputs += vector

    def train(self) -> None:
        """
        Train the classifier on the current training data.

        Raises:
            ClassifierConfigurationError: If the training data does not fit
                the classifier.
        """
        self.logger.info(
            f"Training {self.classifier.name} on {len(self.training_data)} examples"
        )
        self.classifier.fit(
            self.training_data.feature_vectors,
            self.training_data.get_integer_targets(),
        )
        self.logger.info(f"Training finished. {self.classifier.stats}")
        self.events.updated.fire_and_forget()

    def update(self) -> None:
        """
        Run one tick: predict from ``inputs``, encode ``outputs``, notify
        observers and clear ``inputs``. Never raises.
        """
        if self.classifier.model is not None:
            try:
                self.winner = self.classifier.predict(self.inputs)
            except Exception as e:
                self.logger.error(f"Prediction failed: {e}")
                self.winner = NO_PREDICTION
                self.outputs = np.zeros(self.output_size())
            else:
                if self.classifier.model is not None:
                    try:
                        self.outputs = self.classifier.get_output_vector(self.winner)
                    except ClassIndexOutOfRangeError as e:
                        self.logger.error(str(e))
                        self.outputs = np.zeros(self.output_size())

            if self.logger_active:
                self.logger.debug(
                    f"Prediction: {self.winner} ({self.winning_label!r}), "
                    f"outputs={self.outputs}"
                )

        self.events.updated.fire_and_forget()
        self.inputs = np.zeros(self.input_size())

    def copy(self, core: Optional["ClassificationCore"] = None) -> "ClassifierNode":
        """Duplicate this node with an untrained classifier and copied training data."""
        return ClassifierNode(
            core or self.core,
            self.classifier.copy(),
            self.training_data.copy(),
            log_level="DEBUG" if self.logger_active else "INFO",
        )

    def __str__(self) -> str:
        return (
            f"{self.label} ({self.classifier.name}): "
            f"{self.input_size()} -> {self.output_size()}"
        )
