"""Tests for ABI and artifact parsing."""

import hashlib
import json
from unittest.mock import patch

import pytest

from contract_registry.core.errors import ArtifactBundleError, MalformedAbi, MalformedArtifact
from contract_registry.infrastructure.contract_abis import ContractAbi, bytecode_hash, load_abi, load_artifact
from contract_registry.tests.conftest import STAKE_ABI, TOKEN_ABI


class TestLoadAbi:
    """Test shape detection and ABI validation."""

    def test_bare_and_wrapped_shapes_are_equivalent(self):
        """Bare ABI array and {abi, bytecode} wrapper yield the same ABI."""
        bare = load_abi(json.dumps(STAKE_ABI))
        wrapped = load_abi(json.dumps({"abi": STAKE_ABI, "bytecode": "0x6080"}))

        assert bare == wrapped
        assert bare.to_list() == STAKE_ABI

    def test_decoded_input(self):
        assert load_abi(STAKE_ABI) == load_abi({"abi": STAKE_ABI})

    def test_abi_embedded_as_string(self):
        """Some exporters store the ABI as a JSON string inside the artifact."""
        abi = load_abi(json.dumps({"abi": json.dumps(STAKE_ABI)}))
        assert abi.list_functions() == ["stake"]

    def test_invalid_json(self):
        with pytest.raises(MalformedArtifact):
            load_abi("[{\"type\": ")

    def test_invalid_embedded_json(self):
        with pytest.raises(MalformedArtifact):
            load_abi(json.dumps({"abi": "[not json"}))

    @pytest.mark.parametrize("document", [
        json.dumps({"bytecode": "0x6080"}),
        "\"stake\"",
        "42",
        "null",
    ])
    def test_neither_shape(self, document):
        """Anything but an array or an object with an abi key is a broken artifact."""
        with pytest.raises(MalformedArtifact) as exc_info:
            load_abi(document, contract_name="Staking")
        assert exc_info.value.contract == "Staking"

    def test_embedded_abi_not_an_array(self):
        with pytest.raises(MalformedAbi):
            load_abi(json.dumps({"abi": {"stake": "uint256"}}))

    def test_deeply_nested_json(self):
        with patch("contract_registry.infrastructure.contract_abis.json.loads", side_effect=RecursionError("maximum recursion depth exceeded")):
            with pytest.raises(MalformedArtifact) as exc_info:
                load_abi("[" * 100 + "]" * 100, contract_name="Staking")
        assert isinstance(exc_info.value.__cause__, RecursionError)

    @pytest.mark.parametrize("entry", [
        {"type": "function", "inputs": []},
        {"type": "event", "name": "", "inputs": []},
        {"type": "method", "name": "stake"},
        {"type": "function", "name": "stake", "inputs": [{"name": "amount"}]},
        {"type": "function", "name": "stake", "inputs": "uint256"},
        "stake(uint256)",
    ])
    def test_invalid_entries(self, entry):
        with pytest.raises(MalformedAbi) as exc_info:
            load_abi([entry], contract_name="Staking")
        assert exc_info.value.contract == "Staking"
        assert isinstance(exc_info.value, ArtifactBundleError)

    def test_missing_type_defaults_to_function(self):
        abi = load_abi([{"name": "stake", "inputs": []}])
        assert abi.list_functions() == ["stake"]

    def test_empty_abi(self):
        assert len(load_abi("[]")) == 0


class TestContractAbi:
    """Test ABI lookups."""

    def setup_method(self):
        self.abi = ContractAbi(TOKEN_ABI, "SQToken")

    def test_list_functions_and_events(self):
        assert self.abi.list_functions() == ["transfer"]
        assert self.abi.list_events() == ["Transfer"]

    def test_hashable(self):
        same = ContractAbi(json.loads(json.dumps(TOKEN_ABI)), "SQToken")

        assert hash(self.abi) == hash(same)
        assert len({self.abi, same}) == 1
        assert self.abi != ContractAbi(STAKE_ABI)

    def test_get_function(self):
        assert self.abi.get_function("transfer")["outputs"] == [{"name": "", "type": "bool"}]
        assert self.abi.get_function("approve") is None

    def test_get_event_signature(self):
        assert self.abi.get_event_signature("Transfer")["anonymous"] is False
        assert self.abi.get_event_signature("Approval") is None

    def test_function_selector(self):
        assert self.abi.get_function_selector("transfer") == "0xa9059cbb"
        assert self.abi.get_function_selector("approve") is None

    def test_event_topic(self):
        assert self.abi.get_event_topic("Transfer") == (
            "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
        )

    def test_entries_are_copies(self):
        """Mutating returned entries leaves the ABI untouched."""
        entries = self.abi.to_list()
        entries[0]["name"] = "changed"
        self.abi.get_function("transfer")["name"] = "changed"

        assert self.abi.list_functions() == ["transfer"]


class TestLoadArtifact:
    """Test full artifact parsing."""

    def test_hardhat_artifact(self):
        artifact = load_artifact(json.dumps({
            "contractName": "Staking",
            "sourceName": "contracts/Staking.sol",
            "abi": STAKE_ABI,
            "bytecode": "0x6080",
            "deployedBytecode": "0x6081"
        }))

        assert artifact.contract_name == "Staking"
        assert artifact.bytecode == "0x6080"
        assert artifact.deployed_bytecode == "0x6081"
        assert artifact.metadata == {"contractName": "Staking", "sourceName": "contracts/Staking.sol"}

    def test_foundry_artifact(self):
        artifact = load_artifact({"abi": STAKE_ABI, "bytecode": {"object": "0x6080"}}, "Staking")
        assert artifact.bytecode == "0x6080"
        assert artifact.contract_name == "Staking"

    def test_bare_abi_has_no_bytecode(self):
        artifact = load_artifact(STAKE_ABI, "Staking")
        assert artifact.bytecode is None
        assert artifact.bytecode_hash is None

    def test_empty_bytecode(self):
        """Interfaces compile to empty bytecode."""
        assert load_artifact({"abi": STAKE_ABI, "bytecode": "0x"}).bytecode is None

    def test_bytecode_hash(self):
        artifact = load_artifact({"abi": STAKE_ABI, "bytecode": "0x6080"})
        assert artifact.bytecode_hash == "0x" + hashlib.sha256(bytes.fromhex("6080")).hexdigest()


class TestBytecodeHash:

    def test_prefix_is_optional(self):
        assert bytecode_hash("0x6080") == bytecode_hash("6080")

    def test_unlinked_bytecode(self):
        assert bytecode_hash("0x6080__$abcdef$__") is None
