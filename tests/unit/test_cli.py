"""
Module 03 - CLI Unit Tests
Tests for merklekit_cli/main.py and merklekit_cli/commands/

Commands are run in-process through main(argv).
"""
import json

import pytest

from fixtures.common import h, make_abc_expectations

from merklekit.merkle import build_merkle_root
from merklekit_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
)
from merklekit_cli.commands.demo import SAMPLE_ITEMS
from merklekit_cli.main import main


def run_json(capsys, argv):
    """Run the CLI with --json and parse stdout."""
    code = main(argv + ["--json"])
    out = capsys.readouterr().out
    return code, json.loads(out)


class TestRootCommand:

    def test_root_of_items(self, capsys):
        code, data = run_json(capsys, ["root", "a", "b", "c"])

        assert code == EXIT_SUCCESS
        assert data == {"leaf_count": 3, "root": make_abc_expectations()["root"]}

    def test_root_human_output(self, capsys):
        code = main(["root", "a", "b", "c"])

        assert code == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == make_abc_expectations()["root"]

    def test_root_from_file(self, capsys, tmp_path):
        items_file = tmp_path / "items.txt"
        items_file.write_text("a\nb\nc\n", encoding="utf-8")

        code, data = run_json(capsys, ["root", "--file", str(items_file)])

        assert code == EXIT_SUCCESS
        assert data["root"] == make_abc_expectations()["root"]

    def test_root_prehashed(self, capsys):
        leaves = [h(b"a"), h(b"b"), h(b"c")]

        code, data = run_json(capsys, ["root", "--prehashed", *leaves])

        assert code == EXIT_SUCCESS
        assert data["root"] == make_abc_expectations()["root"]

    def test_root_prehashed_with_prefix(self, capsys):
        leaves = ["0x" + h(b"a"), "0x" + h(b"b").upper(), h(b"c")]

        code, data = run_json(capsys, ["root", "--prehashed", *leaves])

        assert code == EXIT_SUCCESS
        assert data["root"] == make_abc_expectations()["root"]

    def test_root_prehashed_malformed_leaf(self, capsys):
        code, data = run_json(capsys, ["root", "--prehashed", "zz"])

        assert code == EXIT_RUNTIME_ERROR
        assert data["error"]["code"] == "INVALID_DIGEST"

    def test_tree_prehashed_malformed_leaf(self, capsys):
        code = main(["tree", "--prehashed", h(b"a"), "zz"])

        assert code == EXIT_RUNTIME_ERROR
        assert "INVALID_DIGEST" in capsys.readouterr().err

    def test_root_empty_input(self, capsys):
        code, data = run_json(capsys, ["root"])

        assert code == EXIT_RUNTIME_ERROR
        assert data["error"]["code"] == "EMPTY_INPUT"


class TestTreeCommand:

    def test_tree_levels(self, capsys):
        abc = make_abc_expectations()

        code, data = run_json(capsys, ["tree", "a", "b", "c"])

        assert code == EXIT_SUCCESS
        assert data["levels"] == [abc["leaves"], abc["level1"], [abc["root"]]]
        assert data["depth"] == 3

    def test_tree_human_output(self, capsys):
        code = main(["tree", "a", "b"])
        out = capsys.readouterr().out

        assert code == EXIT_SUCCESS
        assert "level 0 (2):" in out
        assert f"root: {build_merkle_root([b'a', b'b'])}" in out


class TestProveCommand:

    def test_prove_json(self, capsys):
        abc = make_abc_expectations()

        code, data = run_json(capsys, ["prove", "b", "a", "b", "c"])

        assert code == EXIT_SUCCESS
        assert data["root"] == abc["root"]
        assert data["proof"] == abc["proof_b"]

    def test_prove_not_found(self, capsys):
        code, data = run_json(capsys, ["prove", "z", "a", "b", "c"])

        assert code == EXIT_RUNTIME_ERROR
        assert data["error"]["code"] == "TARGET_NOT_FOUND"

    def test_prove_writes_document(self, capsys, tmp_path):
        out = tmp_path / "proof.json"

        code = main(["prove", "b", "a", "b", "c", "--out", str(out)])
        capsys.readouterr()

        assert code == EXIT_SUCCESS
        saved = json.loads(out.read_text(encoding="utf-8"))
        assert saved["proof"] == make_abc_expectations()["proof_b"]


class TestVerifyCommand:

    def test_verify_valid_document(self, capsys, proof_file):
        code, data = run_json(capsys, ["verify", str(proof_file)])

        assert code == EXIT_SUCCESS
        assert data["verified"] is True
        assert data["computed_root"] == data["expected_root"]

    def test_verify_against_other_root(self, capsys, proof_file):
        code, data = run_json(capsys, ["verify", str(proof_file), "--root", h(b"other")])

        assert code == EXIT_VERIFICATION_FAILED
        assert data["verified"] is False

    @pytest.mark.parametrize("prefix", ["0x", "0X"])
    def test_verify_against_prefixed_root(self, capsys, proof_file, prefix):
        root = json.loads(proof_file.read_text(encoding="utf-8"))["root"]

        code, data = run_json(capsys, ["verify", str(proof_file), "--root", prefix + root.upper()])

        assert code == EXIT_SUCCESS
        assert data["verified"] is True
        assert data["expected_root"] == root

    def test_verify_with_item(self, capsys, proof_file):
        code, data = run_json(capsys, ["verify", str(proof_file), "--item", "item0"])

        assert code == EXIT_SUCCESS
        assert data["leaf_ok"] is True

    def test_verify_with_wrong_item(self, capsys, proof_file):
        code, data = run_json(capsys, ["verify", str(proof_file), "--item", "item1"])

        assert code == EXIT_VERIFICATION_FAILED
        assert data["leaf_ok"] is False

    def test_verify_empty_proof(self, capsys, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"root": h(b"r"), "proof": []}), encoding="utf-8")

        code, data = run_json(capsys, ["verify", str(path)])

        assert code == EXIT_VERIFICATION_FAILED
        assert data["error"]["code"] == "EMPTY_PROOF"

    def test_verify_invalid_document(self, capsys, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"root": "nope", "proof": []}), encoding="utf-8")

        code, data = run_json(capsys, ["verify", str(path)])

        assert code == EXIT_RUNTIME_ERROR
        assert data["error"]["code"] == "SCHEMA_VALIDATION_ERROR"

    def test_verify_missing_file(self, capsys, tmp_path):
        code = main(["verify", str(tmp_path / "missing.json")])

        assert code == EXIT_RUNTIME_ERROR
        assert "not found" in capsys.readouterr().err

    def test_prove_then_verify(self, capsys, tmp_path):
        out = tmp_path / "proof.json"
        main(["prove", "c", "a", "b", "c", "d", "e", "--out", str(out)])
        capsys.readouterr()

        code, data = run_json(capsys, ["verify", str(out), "--item", "c"])

        assert code == EXIT_SUCCESS
        assert data["computed_root"] == build_merkle_root([b"a", b"b", b"c", b"d", b"e"])


class TestDemoCommand:

    def test_demo_matches(self, capsys):
        code, data = run_json(capsys, ["demo"])

        assert code == EXIT_SUCCESS
        assert data["matches"] is True
        assert data["index"] == 4
        assert data["root"] == build_merkle_root(list(SAMPLE_ITEMS))
        assert len(data["tree"][0]) == len(SAMPLE_ITEMS)

    @pytest.mark.parametrize("index", range(len(SAMPLE_ITEMS)))
    def test_demo_every_index(self, capsys, index):
        code, data = run_json(capsys, ["demo", "--index", str(index)])

        assert code == EXIT_SUCCESS
        assert data["root_from_proof"] == data["root"]

    def test_demo_index_out_of_range(self, capsys):
        code = main(["demo", "--index", "99"])

        assert code == EXIT_RUNTIME_ERROR

    def test_demo_human_output(self, capsys):
        code = main(["demo"])
        out = capsys.readouterr().out

        assert code == EXIT_SUCCESS
        assert "root from proof == merkle root: true" in out


class TestMainEntry:

    def test_no_command_prints_help(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR
        assert "usage" in capsys.readouterr().out.lower()

    def test_config_init_and_show(self, capsys, tmp_path):
        path = tmp_path / "merklekit.json"

        assert main(["config", "--init", "--path", str(path)]) == EXIT_SUCCESS
        assert path.exists()
        assert main(["config", "--init", "--path", str(path)]) == EXIT_RUNTIME_ERROR
        capsys.readouterr()

        assert main(["config", "--show"]) == EXIT_SUCCESS
        shown = json.loads(capsys.readouterr().out)
        assert shown["item_encoding"] == "utf-8"

    def test_config_file_selects_json_output(self, capsys, tmp_path):
        config_path = tmp_path / "custom.json"
        config_path.write_text(json.dumps({"default_output_format": "json"}), encoding="utf-8")

        code = main(["--config", str(config_path), "root", "a"])

        assert code == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["root"] == h(b"a")
