"""Artifact parsing and artifact sources."""

from .address_book import (
    AddressBook,
    ContractDeploymentDetail,
    lookup_address,
    parse_address
)
from .contract_abis import (
    AbiEntry,
    AbiParameter,
    ContractAbi,
    ContractArtifact,
    bytecode_hash,
    load_abi,
    load_artifact
)
from .artifact_source import (
    ArtifactSource,
    FileSystemArtifactSource,
    PackageArtifactSource,
    InMemoryArtifactSource,
    HttpArtifactSource,
    dump_bundle
)

__all__ = [
    "AddressBook",
    "ContractDeploymentDetail",
    "lookup_address",
    "parse_address",
    "AbiEntry",
    "AbiParameter",
    "ContractAbi",
    "ContractArtifact",
    "bytecode_hash",
    "load_abi",
    "load_artifact",
    "ArtifactSource",
    "FileSystemArtifactSource",
    "PackageArtifactSource",
    "InMemoryArtifactSource",
    "HttpArtifactSource",
    "dump_bundle",
]
