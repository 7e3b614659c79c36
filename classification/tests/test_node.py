"""
Tests for the classifier node tick contract.
"""

import numpy as np
import pytest

from classification.algorithm import NO_PREDICTION, ClassifierConfigurationError
from classification.knn_classifier import KNNClassifier
from classification.node import UNINITIALIZED_WINNER, ClassifierNode
from classification.svm_classifier import SVMClassifier


@pytest.fixture
def knn_node(core, separable_features):
    """KNN node (k=1) trained on one example per class."""
    node = ClassifierNode(core, KNNClassifier(input_size=2, output_size=4, k=1))
    for label, vector in zip(["w", "x", "y", "z"], separable_features):
        node.training_data.add_example(label, vector)
    node.train()
    return node


class TestNodeConstruction:
    def test_label_from_allocator(self, core):
        first = ClassifierNode(core, KNNClassifier())
        second = ClassifierNode(core, KNNClassifier())
        assert first.label == "Classifier1"
        assert second.label == "Classifier2"

    def test_initial_state(self, core):
        node = ClassifierNode(core, KNNClassifier(input_size=3, output_size=5))
        assert node.winner == UNINITIALIZED_WINNER
        assert node.winning_label == ""
        assert node.output_size() == 5
        np.testing.assert_array_equal(node.inputs, np.zeros(3))
        np.testing.assert_array_equal(node.outputs, np.zeros(5))

    def test_str(self, core):
        node = ClassifierNode(core, SVMClassifier(input_size=3), label="Sorter")
        assert str(node) == "Sorter (Support Vector Machine): 3 -> 2"

    def test_empty_store_is_kept(self, core):
        store = ClassifierNode(core, KNNClassifier()).training_data
        node = ClassifierNode(core, KNNClassifier(), training_data=store)
        assert node.training_data is store


class TestTrain:
    def test_train_notifies_observers(self, core):
        node = ClassifierNode(core, KNNClassifier(input_size=2, output_size=2))
        node.training_data.add_example("a", [0, 0])
        node.training_data.add_example("b", [1, 1])
        calls = []
        node.events.updated.connect(lambda: calls.append("updated"))

        node.train()
        assert node.classifier.is_trained
        assert calls == ["updated"]

    def test_train_without_data_raises(self, core):
        node = ClassifierNode(core, KNNClassifier(input_size=2))
        with pytest.raises(ClassifierConfigurationError):
            node.train()

    def test_train_with_wrong_feature_length_raises(self, core):
        node = ClassifierNode(core, KNNClassifier(input_size=3))
        node.training_data.add_example("a", [0, 0])
        with pytest.raises(ClassifierConfigurationError):
            node.train()


class TestUpdate:
    """Tests for the per-tick update."""

    def test_knn_label_prediction(self, core):
        """k=2 KNN trained on a/b predicts "a" for [0, 0]."""
        node = ClassifierNode(core, KNNClassifier(input_size=2, output_size=2, k=2))
        node.training_data.replace([[0, 0], [1, 1]], ["a", "b"])
        node.train()

        node.set_inputs([0, 0])
        node.update()
        assert node.winner == 0
        assert node.winning_label == "a"

    def test_shifted_class_encoded(self, knn_node):
        knn_node.set_inputs([0.0, 10.0])
        knn_node.update()
        assert knn_node.winner == 2
        assert knn_node.winning_label == "y"
        np.testing.assert_array_equal(knn_node.outputs, [0.0, 1.0, 0.0, 0.0])

    def test_unencodable_class_falls_back_to_zeros(self, knn_node):
        """Class 0 shifts to position -1; the tick degrades to a zero vector."""
        knn_node.set_inputs([10.0, 10.0])
        knn_node.update()
        knn_node.set_inputs([0.0, 0.0])
        knn_node.update()

        assert knn_node.winner == 0
        np.testing.assert_array_equal(knn_node.outputs, np.zeros(4))

    def test_inputs_cleared_after_update(self, knn_node):
        knn_node.add_inputs([3.0, 4.0])
        knn_node.add_inputs([1.0, 1.0])
        np.testing.assert_array_equal(knn_node.inputs, [4.0, 5.0])
        knn_node.update()
        np.testing.assert_array_equal(knn_node.inputs, np.zeros(2))

    def test_inputs_cleared_when_untrained(self, core):
        node = ClassifierNode(core, SVMClassifier(input_size=2))
        node.set_inputs([5.0, 6.0])
        node.update()

        np.testing.assert_array_equal(node.inputs, np.zeros(2))
        np.testing.assert_array_equal(node.outputs, np.zeros(2))
        assert node.winner == UNINITIALIZED_WINNER
        assert node.winning_label == ""

    def test_repeated_update_without_input(self, knn_node):
        knn_node.set_inputs([0.0, 0.0])
        knn_node.update()
        first_outputs = knn_node.outputs.copy()
        knn_node.update()

        np.testing.assert_array_equal(knn_node.outputs, first_outputs)
        np.testing.assert_array_equal(knn_node.inputs, np.zeros(2))

    def test_prediction_failure_does_not_abort_tick(self, knn_node):
        # Upstream wrote a vector of the wrong length directly into the buffer
        knn_node.inputs = np.zeros(5)
        knn_node.update()

        assert knn_node.winner == NO_PREDICTION
        np.testing.assert_array_equal(knn_node.outputs, np.zeros(4))
        np.testing.assert_array_equal(knn_node.inputs, np.zeros(2))

    def test_observer_failure_is_isolated(self, knn_node):
        calls = []

        def broken():
            raise RuntimeError("observer exploded")

        knn_node.events.updated.connect(broken)
        knn_node.events.updated.connect(lambda: calls.append(True))

        knn_node.set_inputs([0.0, 10.0])
        knn_node.update()
        assert calls == [True]
        assert knn_node.winning_label == "y"

    def test_svm_outputs(self, core, binary_training_set):
        features, labels = binary_training_set
        node = ClassifierNode(core, SVMClassifier(input_size=2, kernel_degree=1))
        node.training_data.replace(features, labels)
        node.train()

        node.set_inputs([2.0, 2.0])
        node.update()
        assert node.winning_label == "on"
        np.testing.assert_array_equal(node.outputs, [0.0, 1.0])

        node.set_inputs([-2.0, -2.0])
        node.update()
        assert node.winning_label == "off"
        np.testing.assert_array_equal(node.outputs, [1.0, 0.0])

    def test_outputs_snapshot_survives_next_update(self, knn_node):
        knn_node.set_inputs([0.0, 10.0])
        knn_node.update()
        snapshot = knn_node.get_outputs()
        knn_node.set_inputs([10.0, 0.0])
        knn_node.update()

        np.testing.assert_array_equal(snapshot, [0.0, 1.0, 0.0, 0.0])
        np.testing.assert_array_equal(knn_node.outputs, [1.0, 0.0, 0.0, 0.0])


class TestInputs:
    def test_set_inputs_wrong_shape(self, core):
        node = ClassifierNode(core, KNNClassifier(input_size=2))
        with pytest.raises(ValueError, match="Expected 2 inputs"):
            node.set_inputs([1.0, 2.0, 3.0])

    def test_add_inputs_wrong_shape(self, core):
        node = ClassifierNode(core, KNNClassifier(input_size=2))
        with pytest.raises(ValueError, match="Expected 2 inputs"):
            node.add_inputs([1.0])


class TestCopy:
    def test_copy_is_untrained_with_copied_data(self, knn_node):
        duplicate = knn_node.copy()

        assert duplicate.label != knn_node.label
        assert duplicate.classifier.model is None
        assert duplicate.classifier.k == 1
        assert duplicate.training_data.get_integer_targets() == [0, 1, 2, 3]

        duplicate.training_data.add_example("extra", [5.0, 5.0])
        assert len(knn_node.training_data) == 4

    def test_copy_can_be_trained(self, knn_node):
        duplicate = knn_node.copy()
        duplicate.train()
        duplicate.set_inputs([10.0, 10.0])
        duplicate.update()
        assert duplicate.winning_label == "z"
