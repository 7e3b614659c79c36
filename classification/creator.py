"""
Classifier creation module.

Provides the Pydantic model the editor fills in to configure a new classifier
node, plus YAML loaders for the same configuration.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .node import ClassifierNode
from .registry import build_algorithm, get_algorithm_class, list_types
from .training_data import TrainingDataStore

if TYPE_CHECKING:
    from .core import ClassificationCore


class ClassifierCreator(BaseModel):
    """Transient builder for a single ClassifierNode.

    Unknown top-level keys are rejected so a misspelt field cannot silently
    fall back to a default.
    """

    model_config = ConfigDict(extra="forbid")

    label: str | None = None
    nin: int = Field(default=4, ge=1, description="Number of inputs")
    nout: int = Field(
        default=2,
        ge=1,
        description="Number of outputs (classes). Ignored for binary classifiers (e.g. SVM)",
    )
    classifier_type: str = "svm"
    parameters: dict[str, Any] = Field(default_factory=dict)

    @field_validator("classifier_type")
    @classmethod
    def validate_classifier_type(cls, v):
        v = v.strip().lower()
        if v not in list_types():
            raise ValueError(f"Invalid classifier type: {v}. Allowed: {list_types()}")
        return v

    def uses_outputs(self) -> bool:
        """Whether the number of outputs is editable for the selected type."""
        return not get_algorithm_class(self.classifier_type).binary

    def visible_parameters(self) -> list[str]:
        """Names of the fields the editor should present for the selected type."""
        names = ["label", "nin"]
        if self.uses_outputs():
            names.append("nout")
        names.append("classifier_type")
        parameters_class = get_algorithm_class(self.classifier_type).parameters_class
        names.extend(
            name
            for name in parameters_class.model_fields
            if name not in ("input_size", "output_size")
        )
        return names

    def named_parameters(self) -> dict[str, Any]:
        """Full named-parameter set offered to the algorithm constructor."""
        return {**self.parameters, "input_size": self.nin, "output_size": self.nout}

    def create(self, core: "ClassificationCore") -> ClassifierNode:
        """Build an untrained node with empty training data owned by ``core``."""
        classifier = build_algorithm(self.classifier_type, **self.named_parameters())
        return ClassifierNode(
            core, classifier, training_data=TrainingDataStore(), label=self.label
        )

    @staticmethod
    def get_types() -> list[str]:
        return list_types()


def _creator_from_yaml(text: str, source: str) -> ClassifierCreator:
    raw_config = yaml.safe_load(text)
    if raw_config is None:
        raise ValueError(f"Empty classifier configuration in {source}")
    if not isinstance(raw_config, dict):
        raise ValueError(
            f"Classifier configuration in {source} must be a mapping, "
            f"got {type(raw_config).__name__}"
        )
    return ClassifierCreator(**raw_config)


def load_creator(config_path: str | Path) -> ClassifierCreator:
    """Read a creator from a YAML file; a missing file raises FileNotFoundError."""
    config_path = Path(config_path)
    return _creator_from_yaml(config_path.read_text(), str(config_path))


def load_creator_from_string(config_string: str) -> ClassifierCreator:
    """Read a creator from YAML text, e.g. a block pasted into the editor."""
    return _creator_from_yaml(config_string, "string")
