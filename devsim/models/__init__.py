"""Example atomic models."""

from .machine import Drill, Machine, Press

MODEL_TYPES = {
    "machine": Machine,
    "press": Press,
    "drill": Drill,
}

__all__ = ["Machine", "Press", "Drill", "MODEL_TYPES"]
