"""
Module D1 - Demo Controller
Leaf-count state machine driving the forest builder.

Owner: Visualization Engineer
Module ID: D1

States:
    IDLE --add_leaf--> GROWING --(transition delay)--> IDLE
    IDLE --remove_leaf--> SHRINKING --(transition delay)--> IDLE
    IDLE --start_auto_sequence--> AUTO_SEQUENCING --(max reached | stop)--> IDLE

Concurrency Notes:
- Single event loop, cooperative scheduling; no locks
- The transition delay is the only suspension point of GROWING/SHRINKING
- Calls that are not valid in the current state are rejected as no-ops
  (return False), never raised
- The auto sequence carries a generation number; stop_auto_sequence bumps
  the controller generation and every tick checks it first, so no stale tick
  can apply after stop returns
"""
from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from enum import Enum
from typing import Callable, Optional

from core.config.runtime import DemoConfig
from core.demo.history import TransitionHistory
from core.forest.builder import EMPTY_FOREST, Forest, build_forest
from core.forest.layout import DEFAULT_LAYOUT, LayoutConfig
from core.forest.render import NodeDetails, RenderedForest, node_details, render_forest


logger = logging.getLogger(__name__)


class DemoState(str, Enum):
    IDLE = "idle"
    GROWING = "growing"
    SHRINKING = "shrinking"
    AUTO_SEQUENCING = "auto_sequencing"


Listener = Callable[["DemoController"], None]


class DemoController:
    """
    Owns the current leaf count and forest model.

    Each accepted transition rebuilds the whole forest and replaces the model
    in one assignment; listeners are notified after every model or selection
    change.

    Example:
        >>> controller = DemoController(DemoConfig(initial_leaf_count=3, transition_delay=0))
        >>> asyncio.run(controller.add_leaf())
        True
        >>> len(controller.forest.roots)
        1
    """

    def __init__(
        self,
        config: Optional[DemoConfig] = None,
        layout: Optional[LayoutConfig] = None,
        salt_factory: Optional[Callable[[], object]] = None,
    ) -> None:
        self.config = config or DemoConfig()
        self.layout = layout or DEFAULT_LAYOUT
        self.history = TransitionHistory(self.config.history_size)
        self._salt_factory = salt_factory
        self._state = DemoState.IDLE
        self._leaf_count = 0
        self._forest: Forest = EMPTY_FOREST
        self._selected_id: Optional[str] = None
        self._generation = 0
        self._auto_task: Optional[asyncio.Task] = None
        self._listeners: list[Listener] = []

        if self.config.initial_leaf_count:
            self._apply(self.config.initial_leaf_count)

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def state(self) -> DemoState:
        return self._state

    @property
    def leaf_count(self) -> int:
        return self._leaf_count

    @property
    def forest(self) -> Forest:
        return self._forest

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected_node(self) -> Optional[NodeDetails]:
        return node_details(self._forest, self._selected_id)

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_idle(self) -> bool:
        return self._state is DemoState.IDLE

    @property
    def can_remove(self) -> bool:
        return self.is_idle and self._leaf_count > 1

    def render(self) -> RenderedForest:
        return render_forest(self._forest, self._selected_id)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def add_leaf(self) -> bool:
        if not self.is_idle:
            return self._reject("add_leaf", f"controller is {self._state.value}")
        return await self._step("add_leaf", DemoState.GROWING, +1)

    async def remove_leaf(self) -> bool:
        if not self.is_idle:
            return self._reject("remove_leaf", f"controller is {self._state.value}")
        if self._leaf_count <= 1:
            return self._reject("remove_leaf", "a single leaf is the minimum forest")
        return await self._step("remove_leaf", DemoState.SHRINKING, -1)

    def reset(self) -> bool:
        if not self.is_idle:
            return self._reject("reset", f"controller is {self._state.value}")

        before = self._leaf_count
        self._leaf_count = 0
        self._forest = EMPTY_FOREST
        self._selected_id = None
        self.history.record("reset", True, before, 0)
        logger.info(f"Forest reset (was {before} leaves)")
        self._notify()
        return True

    def start_auto_sequence(self) -> bool:
        """
        Start the auto-incrementing demonstration.

        Leaf count 1 is built immediately; the following counts are built one
        per auto_interval until auto_max_leaves. Must be called with a running
        event loop.

        Raises:
            RuntimeError: If the controller is idle and no event loop is running
        """
        if not self.is_idle:
            return self._reject("start_auto_sequence", f"controller is {self._state.value}")
        loop = asyncio.get_running_loop()

        before = self._leaf_count
        self._state = DemoState.AUTO_SEQUENCING
        self._generation += 1
        generation = self._generation
        logger.info(
            f"Auto sequence started (generation {generation}, "
            f"up to {self.config.auto_max_leaves} leaves)"
        )
        self.history.record("start_auto_sequence", True, before, 1)
        # Task exists before the first build so a listener may stop it right away
        self._auto_task = loop.create_task(self._run_auto_sequence(generation))
        self._apply(1)
        return True

    def stop_auto_sequence(self) -> bool:
        if self._state is not DemoState.AUTO_SEQUENCING:
            return self._reject("stop_auto_sequence", f"controller is {self._state.value}")

        self._generation += 1
        task, self._auto_task = self._auto_task, None
        if task is not None and not task.done():
            task.cancel()
        self._state = DemoState.IDLE
        self.history.record("stop_auto_sequence", True, self._leaf_count, self._leaf_count)
        logger.info(f"Auto sequence stopped at {self._leaf_count} leaves")
        return True

    async def wait_auto_sequence(self) -> None:
        """Wait until the running auto sequence finishes or is stopped."""
        task = self._auto_task
        if task is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await task

    def select_node(self, node_id: Optional[str]) -> bool:
        """
        Toggle the selected node.

        None clears the selection, selecting the selected node again clears
        it, and ids missing from the current model are ignored.
        """
        if node_id is not None and node_id not in self._forest:
            return self._reject("select_node", f"unknown node {node_id!r}")

        if node_id is None or node_id == self._selected_id:
            self._selected_id = None
        else:
            self._selected_id = node_id
        self.history.record("select_node", True, self._leaf_count, self._leaf_count)
        self._notify()
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _step(self, action: str, busy: DemoState, delta: int) -> bool:
        before = self._leaf_count
        started = time.perf_counter()
        self._state = busy
        try:
            self._apply(before + delta)
            await asyncio.sleep(self.config.transition_delay)
        finally:
            self._state = DemoState.IDLE

        duration_ms = (time.perf_counter() - started) * 1000
        self.history.record(action, True, before, self._leaf_count, duration_ms)
        logger.info(f"{action}: {before} -> {self._leaf_count} leaves")
        return True

    async def _run_auto_sequence(self, generation: int) -> None:
        count = 1
        try:
            while count < self.config.auto_max_leaves:
                await asyncio.sleep(self.config.auto_interval)
                if self._generation != generation:
                    return
                started = time.perf_counter()
                count += 1
                self._apply(count)
                self.history.record(
                    "auto_tick", True, count - 1, count,
                    (time.perf_counter() - started) * 1000,
                )
        except Exception:
            logger.exception(f"Auto sequence aborted at {self._leaf_count} leaves")
        finally:
            if self._generation == generation:
                self._state = DemoState.IDLE
                self._auto_task = None
                logger.info(f"Auto sequence finished at {self._leaf_count} leaves")

    def _apply(self, leaf_count: int) -> None:
        salt = self._salt_factory() if self._salt_factory is not None else None
        self._forest = build_forest(leaf_count, salt=salt, layout=self.layout)
        self._leaf_count = leaf_count
        self._notify()

    def _reject(self, action: str, reason: str) -> bool:
        logger.debug(f"Ignored {action}: {reason}")
        self.history.record(action, False, self._leaf_count, self._leaf_count)
        return False

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)


__all__ = ["DemoState", "DemoController", "Listener"]
