"""
Training Data Store
Accumulates labelled feature vectors for a classifier node and keeps the
bidirectional mapping between human-readable labels and integer targets.
"""

import copy as _copy
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np


class LabelIndexMap:
    """Bidirectional label <-> integer class index mapping.

    Indices are allocated densely in insertion order starting at 0, so no two
    labels ever share an index.
    """

    def __init__(self):
        self._label_to_index: Dict[str, int] = {}
        self._index_to_label: Dict[int, str] = {}

    def get_or_allocate(self, label: str) -> int:
        """Return the index for ``label``, allocating the next free one if needed."""
        index = self._label_to_index.get(label)
        if index is None:
            index = len(self._label_to_index)
            self._label_to_index[label] = index
            self._index_to_label[index] = label
        return index

    def index_for(self, label: str) -> Optional[int]:
        return self._label_to_index.get(label)

    def label_for(self, index: int) -> Optional[str]:
        return self._index_to_label.get(index)

    @property
    def labels(self) -> List[str]:
        """Labels ordered by their class index."""
        return [self._index_to_label[i] for i in sorted(self._index_to_label)]

    def clear(self) -> None:
        self._label_to_index.clear()
        self._index_to_label.clear()

    def __contains__(self, label: object) -> bool:
        return label in self._label_to_index

    def __len__(self) -> int:
        return len(self._label_to_index)

    def __repr__(self) -> str:
        return f"LabelIndexMap({self._label_to_index})"


class TrainingDataStore:
    """
    Pure accumulator of (label, feature vector) training examples.

    ``feature_vectors`` and ``targets`` are parallel lists; every target has a
    label in ``label_index_map``. No algorithm logic lives here.
    """

    def __init__(self):
        self.feature_vectors: List[np.ndarray] = []
        self.targets: List[int] = []
        self.label_index_map = LabelIndexMap()

    def add_example(self, label: str, features: Sequence[float]) -> None:
        """Append one example, resolving or allocating the label's index."""
        vector = np.asarray(features, dtype=np.float64)
        if vector.ndim != 1:
            raise ValueError(
                f"Feature vector for '{label}' must be one-dimensional, got shape {vector.shape}"
            )
        index = self.label_index_map.get_or_allocate(label)
        self.feature_vectors.append(vector)
        self.targets.append(index)

    def replace(
        self, features: Iterable[Sequence[float]], labels: Iterable[str]
    ) -> None:
        """Replace the whole data set (used between training runs)."""
        features = list(features)
        labels = list(labels)
        if len(features) != len(labels):
            raise ValueError(
                f"Got {len(features)} feature vectors but {len(labels)} labels"
            )
        self.clear()
        for label, vector in zip(labels, features):
            self.add_example(label, vector)

    def clear(self) -> None:
        self.feature_vectors = []
        self.targets = []
        self.label_index_map.clear()

    def get_integer_targets(self) -> List[int]:
        """Targets are already integer encoded; returned as-is."""
        return self.targets

    def feature_matrix(self) -> np.ndarray:
        """Stack the feature vectors into an (n_samples, n_features) array."""
        if not self.feature_vectors:
            return np.zeros((0, 0))
        return np.vstack(self.feature_vectors)

    def label_for(self, index: int) -> Optional[str]:
        return self.label_index_map.label_for(index)

    def index_for(self, label: str) -> Optional[int]:
        return self.label_index_map.index_for(label)

    def copy(self) -> "TrainingDataStore":
        return _copy.deepcopy(self)

    def __len__(self) -> int:
        return len(self.targets)

    def __repr__(self) -> str:
        return (
            f"TrainingDataStore(examples={len(self)}, "
            f"labels={self.label_index_map.labels})"
        )
