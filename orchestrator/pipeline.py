"""
Generation Pipeline

Single-pass, in-process runner composing the five stages:

    parse_input -> hash_leaves -> build_tree -> extract_proofs -> write_artifact

Key features:
- Fail-closed: any stage error aborts the run before the artifact is written
- Optional self-check folding every proof back to the root before writing
- Deterministic: the same input (in any line order) yields the same root
  and the same proof for every address
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from core.config.runtime import RuntimeConfig
from core.ingest.parser import decode_input, parse_entitlements
from core.merkle.leaves import hash_leaves
from core.merkle.merkle_proofs import EntitlementTree
from core.merkle.merkle_tree import verify_merkle_proof
from core.schemas.artifact import ProofArtifact
from core.schemas.errors import EmptyInputError, ProofVerificationError
from core.schemas.records import EntitlementRecord

from orchestrator.artifacts.io import build_artifact, save_artifact
from orchestrator.stage_executor import PipelineState, StageExecutor, make_stage


logger = logging.getLogger(__name__)


# =============================================================================
# Run Result
# =============================================================================

@dataclass
class RunResult:
    """Summary of a generation run."""
    root: str
    leaf_count: int
    depth: int
    total_amount: int
    artifact: ProofArtifact
    artifact_path: Optional[str] = None
    artifact_sha256: Optional[str] = None
    artifact_size: Optional[int] = None
    timings: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        d = {
            "root": self.root,
            "leaf_count": self.leaf_count,
            "depth": self.depth,
            "total_amount": str(self.total_amount),
        }
        if self.artifact_path is not None:
            d["artifact_path"] = self.artifact_path
            d["artifact_sha256"] = self.artifact_sha256
            d["artifact_size"] = self.artifact_size
        return d


# =============================================================================
# Pipeline
# =============================================================================

class Pipeline:
    """
    Merkle commitment generator.

    Example:
        >>> pipeline = Pipeline(RuntimeConfig())
        >>> result = pipeline.run("user_points.csv", "whitelist-proofs.json")
        >>> result.root
        '0x...'
    """

    def __init__(self, config: Optional[RuntimeConfig] = None) -> None:
        self.config = config or RuntimeConfig()
        self._executor = StageExecutor()

    @property
    def executor(self) -> StageExecutor:
        return self._executor

    def run(
        self,
        input_path: str | Path | None = None,
        output_path: str | Path | None = None,
    ) -> RunResult:
        """
        Read entitlements from input_path and write the artifact to output_path.

        Paths default to the configured ones.

        Raises:
            MalformedRecordError, EmptyInputError, ProofVerificationError,
            WriteError: The run aborted; no artifact was written
            OSError: The input could not be read
        """
        input_path = Path(input_path or self.config.input.path)
        output_path = Path(output_path or self.config.artifact.path)

        logger.info(f"Generating Merkle commitment: {input_path} -> {output_path}")
        text = decode_input(input_path.read_bytes(), self.config.input.encoding)

        state = PipelineState(input_text=text, artifact_path=str(output_path))
        stages = [make_stage("parse_input", self._stage_parse_input)]
        stages.extend(self._build_stages(write=True))

        state = self._executor.execute(stages, state)
        return self._state_to_result(state)

    def generate(self, records: Sequence[EntitlementRecord]) -> RunResult:
        """
        Build the tree and artifact for already-parsed records, without writing.

        Raises:
            EmptyInputError: If records is empty
            ProofVerificationError: If the self-check fails
        """
        state = PipelineState(records=list(records))
        state = self._executor.execute(self._build_stages(write=False), state)
        return self._state_to_result(state)

    def _build_stages(self, *, write: bool) -> list:
        stages = [
            make_stage("hash_leaves", self._stage_hash_leaves),
            make_stage("build_tree", self._stage_build_tree),
            make_stage("extract_proofs", self._stage_extract_proofs),
        ]
        if self.config.build.verify_proofs:
            stages.append(make_stage("verify_proofs", self._stage_verify_proofs))
        if write:
            stages.append(make_stage("write_artifact", self._stage_write_artifact))
        return stages

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    def _stage_parse_input(self, state: PipelineState) -> PipelineState:
        """Stage 1: raw text -> records."""
        state.records = parse_entitlements(
            state.input_text or "",
            has_header=self.config.input.has_header,
        )
        logger.info(f"Parsed {len(state.records)} entitlement records")
        return state

    def _stage_hash_leaves(self, state: PipelineState) -> PipelineState:
        """Stage 2: records -> leaf digests (input order)."""
        if not state.records:
            raise EmptyInputError()
        state.leaves = hash_leaves(state.records, workers=self.config.build.workers)
        return state

    def _stage_build_tree(self, state: PipelineState) -> PipelineState:
        """Stage 3: leaf digests -> sorted-pair tree."""
        state.tree = EntitlementTree(state.records, state.leaves)
        logger.info(
            f"Built tree: {len(state.tree)} leaves, depth {state.tree.depth}, "
            f"root {state.tree.hex_root}"
        )
        return state

    def _stage_extract_proofs(self, state: PipelineState) -> PipelineState:
        """Stage 4: tree -> per-address proofs (AddressNotFoundError is fatal here)."""
        state.artifact = build_artifact(state.tree)
        return state

    def _stage_verify_proofs(self, state: PipelineState) -> PipelineState:
        """Fold every proof back to the root before anything is written."""
        tree = state.tree
        for record in tree.records:
            proof = tree.proof_for(record.address)
            if not verify_merkle_proof(proof.leaf, proof.siblings, tree.root):
                raise ProofVerificationError(
                    "Generated proof does not reproduce the root",
                    address=record.address,
                )
        logger.debug(f"Verified {len(tree)} proofs against root")
        return state

    def _stage_write_artifact(self, state: PipelineState) -> PipelineState:
        """Stage 5: artifact -> disk, atomically."""
        sha256, size = save_artifact(
            state.artifact,
            state.artifact_path,
            indent=self.config.artifact.indent,
        )
        state.artifact_sha256 = sha256
        state.artifact_size = size
        return state

    def _state_to_result(self, state: PipelineState) -> RunResult:
        tree = state.tree
        return RunResult(
            root=tree.hex_root,
            leaf_count=len(tree),
            depth=tree.depth,
            total_amount=sum(r.amount for r in tree.records),
            artifact=state.artifact,
            artifact_path=state.artifact_path if state.artifact_sha256 else None,
            artifact_sha256=state.artifact_sha256,
            artifact_size=state.artifact_size,
            timings=dict(state.timings),
        )


def create_pipeline(config: Optional[RuntimeConfig] = None) -> Pipeline:
    """Create a pipeline, loading configuration from the environment if none is given."""
    return Pipeline(config or RuntimeConfig.from_env())


def generate_commitment(
    input_path: str | Path,
    output_path: str | Path,
    *,
    config: Optional[RuntimeConfig] = None,
) -> RunResult:
    """One-call entry point: parse, build, prove, write."""
    return Pipeline(config).run(input_path, output_path)
