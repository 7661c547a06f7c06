"""
Generation Pipeline (In-Process Runtime Wiring)

This module provides a deterministic, testable, in-process pipeline runner
that composes the input parser, leaf encoder, tree builder, proof extractor
and artifact writer into one fail-closed flow.

Public API:
- Pipeline: Main pipeline runner class
- RunResult: Summary of a generation run
- generate_commitment: One-call entry point
- StageExecutor: Step executor for composable pipeline stages
- PipelineState: State container for pipeline execution
"""

from orchestrator.pipeline import (
    Pipeline,
    RunResult,
    create_pipeline,
    generate_commitment,
)
from orchestrator.stage_executor import (
    FunctionStage,
    PipelineState,
    Stage,
    StageExecutor,
    make_stage,
)


__all__ = [
    # Main pipeline
    "Pipeline",
    "RunResult",
    "create_pipeline",
    "generate_commitment",
    # Stage executor
    "StageExecutor",
    "Stage",
    "FunctionStage",
    "PipelineState",
    "make_stage",
]
