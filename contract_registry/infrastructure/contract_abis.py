"""
Contract ABI parsing for the contract registry.

Artifacts come from the contract build pipeline in one of two shapes:

    bare ABI:  [{"type": "function", "name": "stake", ...}, ...]
    wrapped:   {"abi": [...], "bytecode": "0x...", ...compiler metadata}

The shape is detected by the presence of the ``abi`` key. Foundry output
stores bytecode as {"object": "0x..."}; Hardhat stores a plain string.
"""

import hashlib
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Literal, Mapping, Optional, Union

from eth_utils import event_abi_to_log_topic, function_abi_to_4byte_selector
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, model_validator

from ..core.errors import MalformedAbi, MalformedArtifact

logger = logging.getLogger(__name__)

AbiEntryType = Literal["function", "constructor", "event", "fallback", "receive", "error"]

# Entry types that must carry a name
NAMED_ENTRY_TYPES = {"function", "event", "error"}


class AbiParameter(BaseModel):
    """Input or output parameter of an ABI entry."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = ""
    type: str = Field(min_length=1)
    internal_type: Optional[str] = Field(default=None, alias="internalType")
    components: Optional[List["AbiParameter"]] = None
    indexed: Optional[bool] = None


class AbiEntry(BaseModel):
    """One element of a contract ABI."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    # Solidity treats a missing type as "function"
    type: AbiEntryType = "function"
    name: Optional[str] = None
    inputs: List[AbiParameter] = Field(default_factory=list)
    outputs: Optional[List[AbiParameter]] = None
    state_mutability: Optional[str] = Field(default=None, alias="stateMutability")
    anonymous: Optional[bool] = None

    @model_validator(mode="after")
    def check_name(self) -> "AbiEntry":
        if self.type in NAMED_ENTRY_TYPES and not self.name:
            raise ValueError(f"{self.type} entry has no name")
        return self


_ABI_ADAPTER = TypeAdapter(List[AbiEntry])


class ContractAbi:
    """
    Validated, read-only contract ABI.

    Wraps the raw ABI entries (as web3 expects them) and provides lookups
    for functions and events.
    """

    def __init__(self, entries: List[Dict[str, Any]], contract_name: Optional[str] = None):
        self.contract_name = contract_name
        self._entries = [dict(entry) for entry in entries]

    def __repr__(self):
        return f"ContractAbi(contract={self.contract_name}, entries={len(self._entries)})"

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self.to_list())

    def __eq__(self, other) -> bool:
        if isinstance(other, ContractAbi):
            return self._entries == other._entries
        if isinstance(other, list):
            return self._entries == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(json.dumps(self._entries, sort_keys=True))

    def to_list(self) -> List[Dict[str, Any]]:
        """Get a copy of the raw ABI entries."""
        return json.loads(json.dumps(self._entries))

    def _entries_of_type(self, entry_type: str) -> List[Dict[str, Any]]:
        # Entries without a type default to functions
        return [entry for entry in self._entries if entry.get("type", "function") == entry_type]

    def list_functions(self) -> List[str]:
        """List all function names in the contract."""
        return [entry["name"] for entry in self._entries_of_type("function")]

    def list_events(self) -> List[str]:
        """List all event names in the contract."""
        return [entry["name"] for entry in self._entries_of_type("event")]

    def has_function(self, function_name: str) -> bool:
        return function_name in self.list_functions()

    def has_event(self, event_name: str) -> bool:
        return event_name in self.list_events()

    def get_function(self, function_name: str) -> Optional[Dict[str, Any]]:
        """
        Get the ABI entry of a function.

        Overloaded functions return the first declaration.
        """
        for entry in self._entries_of_type("function"):
            if entry.get("name") == function_name:
                return dict(entry)
        return None

    def get_event_signature(self, event_name: str) -> Optional[Dict[str, Any]]:
        """
        Get the ABI entry of an event.

        Args:
            event_name: Name of the event

        Returns:
            Event ABI entry, or None if not found
        """
        for entry in self._entries_of_type("event"):
            if entry.get("name") == event_name:
                return dict(entry)
        return None

    def get_function_selector(self, function_name: str) -> Optional[str]:
        """
        Get the 4-byte selector of a function.

        Args:
            function_name: Name of the function

        Returns:
            Selector as 0x-prefixed hex string, or None if not found
        """
        entry = self.get_function(function_name)
        if entry is None:
            return None
        return "0x" + function_abi_to_4byte_selector(entry).hex()

    def get_event_topic(self, event_name: str) -> Optional[str]:
        """Get the topic0 hash of an event, or None if not found."""
        entry = self.get_event_signature(event_name)
        if entry is None:
            return None
        return "0x" + event_abi_to_log_topic(entry).hex()


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract output: ABI plus optional bytecode and metadata."""

    abi: ContractAbi
    contract_name: Optional[str] = None
    bytecode: Optional[str] = None
    deployed_bytecode: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def bytecode_hash(self) -> Optional[str]:
        """
        SHA-256 of the creation bytecode, as recorded in address books.

        Returns:
            0x-prefixed hex digest, or None if the artifact has no plain bytecode
        """
        return bytecode_hash(self.bytecode) if self.bytecode else None


def bytecode_hash(code: str) -> Optional[str]:
    """
    Hash hex bytecode the way the deployment pipeline does.

    Unlinked bytecode (with library placeholders) has no hash.
    """
    unprefixed = code[2:] if code.startswith(("0x", "0X")) else code
    try:
        raw = bytes.fromhex(unprefixed)
    except ValueError:
        logger.warning("Bytecode is not plain hex (unlinked libraries?), skipping hash")
        return None
    return "0x" + hashlib.sha256(raw).hexdigest()


def _decode_json(value: Any, what: str, contract_name: Optional[str]) -> Any:
    """Decode JSON text; already decoded values pass through."""
    if not isinstance(value, (str, bytes, bytearray)):
        return value
    try:
        return json.loads(value)
    except (ValueError, RecursionError) as e:
        logger.error(f"{what} for {contract_name or 'unknown contract'} is not valid JSON: {e}")
        raise MalformedArtifact(f"{what} is not valid JSON: {e}", contract=contract_name) from e


def _split_artifact(artifact: Any, contract_name: Optional[str]) -> tuple:
    """Return (raw abi, wrapping document or None) for either artifact shape."""
    document = _decode_json(artifact, "Artifact", contract_name)

    if isinstance(document, Mapping) and "abi" in document:
        return _decode_json(document["abi"], "Embedded ABI", contract_name), document
    if isinstance(document, list):
        return document, None

    logger.error(f"Artifact for {contract_name or 'unknown contract'} is neither an ABI array nor an object with an abi key")
    raise MalformedArtifact(
        f"Artifact must be an ABI array or an object with an abi key, got {type(document).__name__}",
        contract=contract_name
    )


def _validate_abi(raw_abi: Any, contract_name: Optional[str]) -> ContractAbi:
    if not isinstance(raw_abi, list):
        raise MalformedAbi(
            f"ABI must be a JSON array, got {type(raw_abi).__name__}",
            contract=contract_name
        )
    try:
        _ABI_ADAPTER.validate_python(raw_abi)
    except ValidationError as e:
        logger.error(f"Invalid ABI for {contract_name or 'unknown contract'}: {e.error_count()} error(s)")
        raise MalformedAbi(f"Invalid ABI definition: {e}", contract=contract_name) from e

    return ContractAbi(raw_abi, contract_name)


def load_abi(
    artifact: Union[str, bytes, Mapping[str, Any], List[Any]],
    contract_name: Optional[str] = None
) -> ContractAbi:
    """
    Parse and validate the ABI of a contract artifact.

    Args:
        artifact: Artifact JSON text, or an already decoded artifact
        contract_name: Contract name, used in error messages

    Returns:
        Validated ContractAbi

    Raises:
        MalformedArtifact: If the artifact or its embedded ABI is not valid JSON,
            or the artifact is neither an ABI array nor an object with an abi key
        MalformedAbi: If the extracted value is not a valid ABI
    """
    raw_abi, _ = _split_artifact(artifact, contract_name)
    return _validate_abi(raw_abi, contract_name)


def _bytecode_of(value: Any) -> Optional[str]:
    # Foundry: {"object": "0x..", "linkReferences": {...}}
    if isinstance(value, Mapping):
        value = value.get("object")
    if isinstance(value, str) and value not in ("", "0x"):
        return value
    return None


def load_artifact(
    artifact: Union[str, bytes, Mapping[str, Any], List[Any]],
    contract_name: Optional[str] = None
) -> ContractArtifact:
    """
    Parse a full contract artifact, including bytecode when present.

    Raises:
        MalformedArtifact: If the artifact or its embedded ABI is not valid JSON,
            or the artifact is neither an ABI array nor an object with an abi key
        MalformedAbi: If the extracted value is not a valid ABI
    """
    raw_abi, document = _split_artifact(artifact, contract_name)
    abi = _validate_abi(raw_abi, contract_name)

    if document is None:
        return ContractArtifact(abi=abi, contract_name=contract_name)

    metadata = {
        key: value for key, value in document.items()
        if key not in ("abi", "bytecode", "deployedBytecode")
    }
    return ContractArtifact(
        abi=abi,
        contract_name=document.get("contractName") or contract_name,
        bytecode=_bytecode_of(document.get("bytecode")),
        deployed_bytecode=_bytecode_of(document.get("deployedBytecode")),
        metadata=metadata,
    )
