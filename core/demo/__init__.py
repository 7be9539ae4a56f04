"""
Module D1/D2 - Demo Controller
Interactive leaf-count state machine over the forest builder.

This module provides:
- DemoController: add/remove leaves, reset, auto sequence, node selection
- DemoState: IDLE, GROWING, SHRINKING, AUTO_SEQUENCING
- TransitionHistory: bounded log of controller calls

Usage:
    controller = DemoController()
    await controller.add_leaf()
    controller.select_node("leaf-0")
    view = controller.render()
"""
from .controller import DemoController, DemoState, Listener
from .history import TransitionHistory, TransitionRecord

__all__ = [
    "DemoController",
    "DemoState",
    "Listener",
    "TransitionHistory",
    "TransitionRecord",
]
