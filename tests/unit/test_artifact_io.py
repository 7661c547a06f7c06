"""
Artifact IO Unit Tests
Tests for orchestrator/artifacts/io.py

Tests:
- Artifact structure (root, proofs, decimal amounts, lower-case hex)
- Serialization (tab indent, trailing newline, input order)
- Atomic write: a failed write leaves no file behind
- load_artifact validation
"""
import json

import pytest

from core.merkle import EntitlementTree
from core.schemas.artifact import ProofArtifact, ProofEntry
from core.schemas.errors import ArtifactFormatError, WriteError
from orchestrator.artifacts import (
    build_artifact,
    compute_sha256,
    dump_json,
    load_artifact,
    save_artifact,
)

from fixtures.common import ADDRESS_A, ADDRESS_B, make_record, make_records


@pytest.fixture
def artifact(five_records):
    return build_artifact(EntitlementTree.from_records(five_records))


class TestBuildArtifact:
    """Tests for build_artifact()."""

    def test_root_matches_tree(self, five_records):
        tree = EntitlementTree.from_records(five_records)
        assert build_artifact(tree).root == tree.hex_root

    def test_one_entry_per_record(self, artifact, five_records):
        assert set(artifact.proofs) == {r.address for r in five_records}

    def test_entries_follow_input_order(self, artifact, five_records):
        assert list(artifact.proofs) == [r.address for r in five_records]

    def test_amount_is_decimal_string(self):
        big = 2**255 + 1
        tree = EntitlementTree.from_records([make_record(ADDRESS_A, big)])
        assert build_artifact(tree).proofs[ADDRESS_A].amount == str(big)

    def test_addresses_are_lower_case(self):
        upper = "0x" + ADDRESS_B[2:].upper()
        tree = EntitlementTree.from_records([make_record(ADDRESS_A, 1), make_record(upper, 2)])
        assert ADDRESS_B in build_artifact(tree).proofs

    def test_proofs_match_tree(self, five_records):
        tree = EntitlementTree.from_records(five_records)
        artifact = build_artifact(tree)
        for record in five_records:
            assert artifact.proofs[record.address].proof == tree.hex_proof_for(record.address)

    def test_get_entry_case_insensitive(self):
        tree = EntitlementTree.from_records([make_record(ADDRESS_A, 1), make_record(ADDRESS_B, 2)])
        artifact = build_artifact(tree)
        assert artifact.get_entry("0x" + ADDRESS_A[2:].upper()) == artifact.proofs[ADDRESS_A]
        assert artifact.get_entry("0x" + "ff" * 20) is None


class TestDumpJson:
    """Tests for dump_json()."""

    def test_top_level_keys(self, artifact):
        data = json.loads(dump_json(artifact))
        assert list(data) == ["root", "proofs"]

    def test_entry_keys(self, artifact):
        data = json.loads(dump_json(artifact))
        for entry in data["proofs"].values():
            assert list(entry) == ["amount", "proof"]
            assert isinstance(entry["amount"], str)

    def test_tab_indent_and_trailing_newline(self, artifact):
        text = dump_json(artifact)
        assert text.endswith("}\n")
        assert '\n\t"root"' in text

    def test_numeric_indent(self, artifact):
        assert '\n  "root"' in dump_json(artifact, indent="  ")

    def test_compact(self, artifact):
        text = dump_json(artifact, indent=None)
        assert text.count("\n") == 1

    def test_deterministic(self, five_records):
        first = dump_json(build_artifact(EntitlementTree.from_records(five_records)))
        second = dump_json(build_artifact(EntitlementTree.from_records(five_records)))
        assert first == second


class TestSaveArtifact:
    """Tests for save_artifact()."""

    def test_save_and_load(self, tmp_path, artifact):
        path = tmp_path / "whitelist-proofs.json"
        sha256, size = save_artifact(artifact, path)

        data = path.read_bytes()
        assert size == len(data)
        assert sha256 == compute_sha256(data)
        assert load_artifact(path) == artifact

    def test_creates_parent_directories(self, tmp_path, artifact):
        path = tmp_path / "out" / "nested" / "proofs.json"
        save_artifact(artifact, path)
        assert path.exists()

    def test_overwrites_existing(self, tmp_path, artifact):
        path = tmp_path / "proofs.json"
        path.write_text("stale")
        save_artifact(artifact, path)
        assert load_artifact(path) == artifact

    def test_no_temp_files_left(self, tmp_path, artifact):
        save_artifact(artifact, tmp_path / "proofs.json")
        assert [p.name for p in tmp_path.iterdir()] == ["proofs.json"]

    def test_failed_rename_leaves_nothing(self, tmp_path, artifact, monkeypatch):
        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("orchestrator.artifacts.io.os.replace", fail_replace)
        path = tmp_path / "proofs.json"

        with pytest.raises(WriteError) as exc_info:
            save_artifact(artifact, path)

        assert exc_info.value.code == "WRITE_ERROR"
        assert exc_info.value.details["path"] == str(path)
        assert list(tmp_path.iterdir()) == []

    def test_failed_rename_keeps_previous_file(self, tmp_path, artifact, monkeypatch):
        path = tmp_path / "proofs.json"
        path.write_text("previous")

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("orchestrator.artifacts.io.os.replace", fail_replace)

        with pytest.raises(WriteError):
            save_artifact(artifact, path)

        assert path.read_text() == "previous"
        assert [p.name for p in tmp_path.iterdir()] == ["proofs.json"]

    def test_unwritable_target_raises_write_error(self, tmp_path, artifact):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(WriteError):
            save_artifact(artifact, blocker / "proofs.json")


class TestLoadArtifact:
    """Tests for load_artifact()."""

    def write(self, tmp_path, content):
        path = tmp_path / "artifact.json"
        path.write_text(content, encoding="utf-8")
        return path

    def valid_data(self):
        tree = EntitlementTree.from_records(make_records(3))
        return build_artifact(tree).model_dump(mode="json")

    def test_not_json(self, tmp_path):
        with pytest.raises(ArtifactFormatError, match="not valid JSON"):
            load_artifact(self.write(tmp_path, "{not json"))

    def test_missing_root(self, tmp_path):
        data = self.valid_data()
        del data["root"]
        with pytest.raises(ArtifactFormatError):
            load_artifact(self.write(tmp_path, json.dumps(data)))

    def test_bad_root(self, tmp_path):
        data = self.valid_data()
        data["root"] = "0x1234"
        with pytest.raises(ArtifactFormatError):
            load_artifact(self.write(tmp_path, json.dumps(data)))

    def test_empty_proofs(self, tmp_path):
        data = self.valid_data()
        data["proofs"] = {}
        with pytest.raises(ArtifactFormatError):
            load_artifact(self.write(tmp_path, json.dumps(data)))

    def test_numeric_amount_rejected(self, tmp_path):
        data = self.valid_data()
        first = next(iter(data["proofs"]))
        data["proofs"][first]["amount"] = 1000
        with pytest.raises(ArtifactFormatError):
            load_artifact(self.write(tmp_path, json.dumps(data)))

    def test_bad_proof_digest(self, tmp_path):
        data = self.valid_data()
        first = next(iter(data["proofs"]))
        data["proofs"][first]["proof"] = ["0xzz"]
        with pytest.raises(ArtifactFormatError):
            load_artifact(self.write(tmp_path, json.dumps(data)))

    def test_upper_case_key_rejected(self, tmp_path):
        tree = EntitlementTree.from_records([make_record(ADDRESS_A, 1), make_record(ADDRESS_B, 2)])
        data = build_artifact(tree).model_dump(mode="json")
        data["proofs"]["0x" + ADDRESS_A[2:].upper()] = data["proofs"].pop(ADDRESS_A)
        with pytest.raises(ArtifactFormatError):
            load_artifact(self.write(tmp_path, json.dumps(data)))

    def test_extra_field_rejected(self, tmp_path):
        data = self.valid_data()
        data["version"] = 1
        with pytest.raises(ArtifactFormatError):
            load_artifact(self.write(tmp_path, json.dumps(data)))

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_artifact(tmp_path / "missing.json")


class TestArtifactModels:
    """Tests for the ProofArtifact / ProofEntry models."""

    def test_entry_is_frozen(self):
        entry = ProofEntry(amount="1", proof=[])
        with pytest.raises(Exception):
            entry.amount = "2"

    def test_artifact_round_trips_through_model_validate(self, artifact):
        assert ProofArtifact.model_validate(artifact.model_dump(mode="json")) == artifact
