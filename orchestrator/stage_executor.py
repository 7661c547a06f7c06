"""
Stage Executor

Purpose: Keep pipeline stages composable and testable with minimal abstraction.

Provides:
- Stage: Protocol for individual pipeline stages
- PipelineState: Dataclass holding intermediate products incrementally
- StageExecutor: Runner that executes stages in sequence

Unlike a best-effort runner, a failing stage always aborts the run: the
exception is recorded and re-raised to the caller unchanged.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

from core.merkle.merkle_proofs import EntitlementTree
from core.schemas.artifact import ProofArtifact
from core.schemas.records import EntitlementRecord


logger = logging.getLogger(__name__)


@dataclass
class PipelineState:
    """
    Holds intermediate products as the pipeline progresses.

    Each stage reads what earlier stages produced and fills in its own
    fields. Fields are Optional to allow incremental population.
    """

    # Input
    input_text: Optional[str] = None

    # Stage 1: Input parser
    records: Optional[list[EntitlementRecord]] = None

    # Stage 2: Leaf encoder
    leaves: Optional[list[bytes]] = None

    # Stage 3/4: Tree builder + proof extractor
    tree: Optional[EntitlementTree] = None
    artifact: Optional[ProofArtifact] = None

    # Stage 5: Artifact writer
    artifact_path: Optional[str] = None
    artifact_sha256: Optional[str] = None
    artifact_size: Optional[int] = None

    # Per-stage wall time in seconds
    timings: dict[str, float] = field(default_factory=dict)


class Stage(Protocol):
    """
    Protocol for a single pipeline stage.

    Each stage has a name and a run method that transforms state.
    """

    @property
    def name(self) -> str:
        """Unique name for this stage."""
        ...

    def run(self, state: PipelineState) -> PipelineState:
        """
        Execute this stage, filling in its part of the state.

        Raises:
            MerklegenException: Any failure; the run aborts
        """
        ...


@dataclass
class FunctionStage:
    """
    Adapter to create a Stage from a plain function.

    Example:
        stage = FunctionStage("my_stage", lambda s: do_something(s))
    """

    _name: str
    _func: Callable[[PipelineState], PipelineState]

    @property
    def name(self) -> str:
        return self._name

    def run(self, state: PipelineState) -> PipelineState:
        return self._func(state)


class StageExecutor:
    """
    Executor that runs a sequence of stages.

    Provides:
    - Sequential execution of stages
    - Per-stage timing and result tracking
    - Fail-fast: the first exception is re-raised
    """

    def __init__(self) -> None:
        self._stage_results: list[tuple[str, bool, Optional[str]]] = []

    def execute(
        self,
        stages: list[Stage],
        state: PipelineState,
    ) -> PipelineState:
        """
        Execute all stages in sequence.

        Args:
            stages: List of stages to execute
            state: Initial pipeline state

        Returns:
            Final pipeline state after all stages

        Raises:
            Exception: Whatever the failing stage raised
        """
        self._stage_results = []

        for stage in stages:
            started = time.perf_counter()
            try:
                state = stage.run(state)
            except Exception as e:
                self._stage_results.append((stage.name, False, str(e)))
                logger.error(f"Stage '{stage.name}' failed: {e}")
                raise
            finally:
                state.timings[stage.name] = time.perf_counter() - started

            self._stage_results.append((stage.name, True, None))
            logger.debug(f"Stage '{stage.name}' done in {state.timings[stage.name]:.3f}s")

        return state

    @property
    def stage_results(self) -> list[tuple[str, bool, Optional[str]]]:
        """
        Get results of each stage execution.

        Returns:
            List of (stage_name, success, error_message) tuples
        """
        return self._stage_results.copy()

    def get_failed_stages(self) -> list[str]:
        """Get names of failed stages."""
        return [name for name, success, _ in self._stage_results if not success]


def make_stage(name: str, func: Callable[[PipelineState], PipelineState]) -> Stage:
    """
    Convenience function to create a stage from a function.

    Args:
        name: Stage name
        func: Function that takes and returns PipelineState

    Returns:
        Stage wrapping the function
    """
    return FunctionStage(name, func)
