"""Steps, position mapping and transforms over plain-text documents."""

from .mapping import LEFT, RIGHT, MapResult, Mapping, StepMap
from .steps import ReplaceStep, Step, StepError, StepResult, register_step
from .transform import Transaction, Transform

__all__ = [
    "LEFT",
    "RIGHT",
    "MapResult",
    "Mapping",
    "StepMap",
    "Step",
    "StepError",
    "StepResult",
    "ReplaceStep",
    "register_step",
    "Transform",
    "Transaction",
]
