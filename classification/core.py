#!/usr/bin/env python3
"""
Classification Core Engine
Owning context for classifier nodes: allocates node labels and drives the
per-tick update of every hosted node. Single-threaded; logging is configured
by the caller (see setup_classifier_logger).
"""

import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .events import Event
from .node import ClassifierNode


class IdManager:
    """Hands out proposed labels such as ``Classifier1``, ``Classifier2``."""

    def __init__(self):
        self._counters: Dict[str, int] = defaultdict(int)

    def get_proposed_id(self, kind: str) -> str:
        self._counters[kind] += 1
        return f"{kind}{self._counters[kind]}"


@dataclass
class ClassificationCoreState:
    """State container for the classification core"""

    current_tick: int = 0


class ClassificationCore:
    """
    Classification Core Engine
    Hosts classifier nodes and updates each of them once per tick
    """

    def __init__(self):
        self.state = ClassificationCoreState()
        self.id_manager = IdManager()
        self.nodes: Dict[str, ClassifierNode] = {}
        self.update_completed = Event("update_completed")

    def add_node(self, node: ClassifierNode) -> ClassifierNode:
        """Add a node created for this core"""
        if node.label in self.nodes:
            raise ValueError(f"A node labelled '{node.label}' already exists")
        self.nodes[node.label] = node
        return node

    def remove_node(self, label: str) -> bool:
        """Remove a node by label"""
        node = self.nodes.pop(label, None)
        if node is None:
            return False
        node.events.deleted.fire_and_forget()
        return True

    def do_tick(self) -> Dict[str, Any]:
        """Execute a single simulation tick"""
        start_time = time.perf_counter()
        for node in self.nodes.values():
            node.update()
        execution_time_ms = (time.perf_counter() - start_time) * 1000

        self.state.current_tick += 1
        winners = {label: node.winning_label for label, node in self.nodes.items()}

        self.update_completed.fire_and_forget()
        return {
            "tick": self.state.current_tick,
            "execution_time_ms": execution_time_ms,
            "winners": winners,
        }

    def do_n_ticks(self, n: int) -> List[Dict[str, Any]]:
        """Execute N simulation ticks"""
        return [self.do_tick() for _ in range(n)]

    def get_node(self, label: str) -> Optional[Dict[str, Any]]:
        """Get node information by label"""
        node = self.nodes.get(label)
        if node is None:
            return None
        return {
            "label": node.label,
            "classifier": node.classifier.name,
            "trained": node.classifier.is_trained,
            "stats": node.classifier.stats,
            "input_size": node.input_size(),
            "output_size": node.output_size(),
            "winner": node.winner,
            "winning_label": node.winning_label,
            "outputs": node.outputs.tolist(),
            "examples": len(node.training_data),
        }
