"""Animators for tree operations."""

import warnings
from typing import Callable, Dict, List

from bstanim.animators.base import Animator, Mode
from bstanim.animators.delete import DeleteAnimator, DeletePhase
from bstanim.animators.insert import InsertAnimator
from bstanim.animators.search import SearchAnimator
from bstanim.animators.traversal import (
    TraversalAnimator,
    TraversalFrame,
    TraversalOrder,
)
from bstanim.errors import UnknownOperationError

AnimatorFactory = Callable[[int], Animator]


def _traversal_factory(order: TraversalOrder) -> AnimatorFactory:
    def factory(key: int) -> Animator:
        return TraversalAnimator(order)

    return factory


_ANIMATOR_REGISTRY: Dict[str, AnimatorFactory] = {
    "insert": InsertAnimator,
    "search": SearchAnimator,
    "delete": DeleteAnimator,
    "inorder": _traversal_factory(TraversalOrder.INORDER),
    "preorder": _traversal_factory(TraversalOrder.PREORDER),
    "postorder": _traversal_factory(TraversalOrder.POSTORDER),
}


def register_animator(operation: str, factory: AnimatorFactory) -> None:
    """
    Register an animator factory for an operation name.

    Args:
        operation: Operation name (e.g., "search")
        factory: Callable taking the operation key and returning an animator
    """
    operation = operation.lower()
    if operation in _ANIMATOR_REGISTRY:
        warnings.warn(
            f"Animator for operation '{operation}' is already registered. Overwriting."
        )
    _ANIMATOR_REGISTRY[operation] = factory


def get_animator(operation: str, key: int) -> Animator:
    """
    Create a fresh animator for an operation.

    Args:
        operation: Registered operation name
        key: Key the operation acts on (ignored by traversals)

    Returns:
        New animator instance

    Raises:
        UnknownOperationError: If no animator is registered for the name
    """
    factory = _ANIMATOR_REGISTRY.get(operation.lower())
    if factory is None:
        raise UnknownOperationError(
            f"Unknown operation: {operation}. "
            f"Registered operations: {', '.join(list_operations())}"
        )
    return factory(key)


def list_operations() -> List[str]:
    return sorted(_ANIMATOR_REGISTRY)


__all__ = [
    "Animator",
    "Mode",
    "DeleteAnimator",
    "DeletePhase",
    "InsertAnimator",
    "SearchAnimator",
    "TraversalAnimator",
    "TraversalFrame",
    "TraversalOrder",
    "register_animator",
    "get_animator",
    "list_operations",
]
