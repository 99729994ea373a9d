"""
Contract registry: network-aware lookup of deployed contracts.

Resolving a contract is always the same three steps, driven by the
catalogue table instead of one hand-written function per contract:

1. read the address book of the network and look up the contract address
2. read the contract artifact and validate its ABI
3. bind address and ABI to the caller's web3 client
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from eth_typing import ChecksumAddress

from .catalogue import CONTRACTS, ContractEntry
from .config import RegistrySettings, settings
from .core.blockchain_client import bind_contract
from .core.errors import RegistryError, UnknownContract
from .core.handle import ContractHandle
from .core.networks import Network, resolve_network
from .infrastructure.address_book import AddressBook
from .infrastructure.artifact_source import ArtifactSource, FileSystemArtifactSource
from .infrastructure.contract_abis import ContractAbi, ContractArtifact, load_artifact

logger = logging.getLogger(__name__)


class ContractRegistry:
    """
    Table-driven registry of deployed contracts.

    Parsed address books and artifacts are cached after the first read.
    The bundle is immutable, so concurrent callers at worst parse the
    same bytes twice.
    """

    def __init__(
        self,
        source: Optional[ArtifactSource] = None,
        contracts: Optional[Iterable[ContractEntry]] = None,
        registry_settings: Optional[RegistrySettings] = None
    ):
        """
        Initialize the registry.

        Args:
            source: Where address books and artifacts are read from
                (defaults to the configured artifacts directory)
            contracts: Catalogue entries (defaults to the full catalogue)
            registry_settings: Settings (defaults to the global settings)
        """
        self.settings = registry_settings or settings
        self.source = source or FileSystemArtifactSource(self.settings.artifacts_dir)

        self._entries: List[ContractEntry] = list(contracts) if contracts is not None else list(CONTRACTS)
        self._by_key: Dict[str, ContractEntry] = {}
        for entry in self._entries:
            self._by_key[entry.name] = entry
            self._by_key[entry.accessor] = entry

        self._address_books: Dict[Network, AddressBook] = {}
        self._artifacts: Dict[str, ContractArtifact] = {}

        logger.info(f"ContractRegistry initialized with {len(self._entries)} contracts from {self.source!r}")

    def __repr__(self):
        return f"ContractRegistry(source={self.source!r}, contracts={len(self._entries)})"

    @property
    def default_network(self) -> Network:
        return Network(self.settings.default_network)

    def contracts(self) -> List[ContractEntry]:
        """List catalogued contracts."""
        return list(self._entries)

    def entry(self, contract_name: str) -> ContractEntry:
        """
        Get the catalogue entry of a contract.

        Args:
            contract_name: Canonical name ("StakingManager") or accessor ("staking_manager")

        Raises:
            UnknownContract: If the contract is not catalogued
        """
        entry = self._by_key.get(contract_name)
        if entry is None:
            raise UnknownContract(
                f"Contract is not catalogued. Available: {[e.name for e in self._entries]}",
                contract=contract_name
            )
        return entry

    def resolve(self, network: Union[str, Network, None]) -> Network:
        """
        Resolve a network argument using the configured strictness.

        None selects the default network.

        Raises:
            UnknownNetwork: If strict resolution is configured and the name is unknown
        """
        if network is None:
            return self.default_network
        return resolve_network(
            network,
            strict=self.settings.strict_network,
            default=self.default_network
        )

    def address_book(self, network: Union[str, Network]) -> AddressBook:
        """
        Get the parsed address book of a network.

        Raises:
            MalformedAddressBook: If the book is missing or not a JSON object
        """
        network = self.resolve(network)
        book = self._address_books.get(network)
        if book is not None:
            logger.debug(f"Address book cache hit for {network.value}")
            return book

        blob = self.source.read_address_book(network.value)
        if isinstance(blob, (str, bytes, bytearray)):
            book = AddressBook.from_json(blob, network=network.value)
        else:
            book = AddressBook(blob, network=network.value)

        self._address_books[network] = book
        logger.info(f"Loaded address book for {network.value} ({len(book.contracts())} contracts)")
        return book

    def artifact(self, contract_name: str) -> ContractArtifact:
        """
        Get the parsed artifact of a catalogued contract.

        Raises:
            UnknownContract: If the contract is not catalogued
            MalformedArtifact: If the artifact is missing or not valid JSON
            MalformedAbi: If the artifact's ABI is invalid
        """
        entry = self.entry(contract_name)
        artifact = self._artifacts.get(entry.artifact)
        if artifact is not None:
            logger.debug(f"Artifact cache hit for {entry.artifact}")
            return artifact

        blob = self.source.read_artifact(entry.artifact)
        artifact = load_artifact(blob, entry.name)

        self._artifacts[entry.artifact] = artifact
        logger.info(f"Loaded ABI for {entry.name} ({len(artifact.abi)} entries)")
        return artifact

    def get_abi(self, contract_name: str) -> ContractAbi:
        """Get the validated ABI of a catalogued contract."""
        return self.artifact(contract_name).abi

    def get_address(self, network: Union[str, Network], contract_name: str) -> ChecksumAddress:
        """
        Get the deployed address of a catalogued contract.

        Raises:
            UnknownContract: If the contract is not catalogued or not deployed on the network
            MalformedAddressBook: If the network's address book is broken
            InvalidAddressFormat: If the recorded address is malformed
        """
        entry = self.entry(contract_name)
        return self.address_book(network).get_address(entry.name, entry.layer)

    def parse(self, network: Union[str, Network], contract_name: str) -> Tuple[ContractAbi, ChecksumAddress]:
        """
        Resolve ABI and address without binding a client.

        Returns:
            (abi, address) tuple

        Raises:
            RegistryError: Any lookup or validation failure
        """
        address = self.get_address(network, contract_name)
        abi = self.get_abi(contract_name)
        return abi, address

    def build_handle(
        self,
        network: Union[str, Network],
        contract_name: str,
        client: Any
    ) -> ContractHandle:
        """
        Build a contract handle bound to a web3 client.

        Args:
            network: Network to resolve the address on
            contract_name: Canonical name or accessor alias
            client: Web3 or AsyncWeb3 instance; shared, never closed

        Returns:
            ContractHandle for the deployed contract

        Raises:
            RegistryError: Any lookup, validation or client failure
        """
        network = self.resolve(network)
        entry = self.entry(contract_name)
        abi, address = self.parse(network, entry.name)

        contract = bind_contract(client, address, abi.to_list(), entry.name, network.value)

        logger.info(f"Built handle for {entry.name} at {address} on {network.value}")
        return ContractHandle(
            name=entry.name,
            network=network,
            address=address,
            abi=abi,
            client=client,
            contract=contract,
        )

    def get_contract(
        self,
        network: Union[str, Network, None],
        contract_name: str,
        client: Any
    ) -> ContractHandle:
        """Build a handle on the given network, or the default network when None."""
        return self.build_handle(self.resolve(network), contract_name, client)

    def verify(self, network: Union[str, Network]) -> Dict[str, Optional[RegistryError]]:
        """
        Resolve every catalogued contract on a network.

        Returns:
            Contract name -> error, with None for contracts that resolve cleanly
        """
        network = self.resolve(network)
        results: Dict[str, Optional[RegistryError]] = {}

        for entry in self._entries:
            try:
                self.parse(network, entry.name)
                results[entry.name] = None
            except RegistryError as e:
                results[entry.name] = e

        failed = [name for name, error in results.items() if error is not None]
        if failed:
            logger.warning(f"{len(failed)}/{len(results)} contracts failed to resolve on {network.value}: {failed}")
        else:
            logger.info(f"All {len(results)} contracts resolve on {network.value}")
        return results

    def changed_contracts(self, network: Union[str, Network]) -> List[str]:
        """
        List contracts whose artifact bytecode differs from the deployed record.

        Contracts without a recorded bytecodeHash, or without plain bytecode
        in their artifact, are skipped.

        Raises:
            MalformedAddressBook: If the network's address book is broken
            MalformedArtifact: If an artifact is missing or not valid JSON
            MalformedAbi: If an artifact's ABI is invalid
        """
        network = self.resolve(network)
        book = self.address_book(network)
        changed: List[str] = []

        for entry in self._entries:
            try:
                detail = book.get_detail(entry.name, entry.layer)
            except UnknownContract:
                logger.debug(f"{entry.name} not deployed on {network.value}")
                continue

            local_hash = self.artifact(entry.name).bytecode_hash
            if not detail.bytecode_hash or not local_hash:
                continue

            if local_hash.lower() != detail.bytecode_hash.lower():
                changed.append(entry.name)
            else:
                logger.debug(f"Contract {entry.name} not changed")

        return changed


# Global registry over the configured artifacts directory
default_registry = ContractRegistry()


# Convenience functions
def build_handle(network: Union[str, Network], contract_name: str, client: Any) -> ContractHandle:
    """Build a contract handle with the global registry."""
    return default_registry.build_handle(network, contract_name, client)


def get_contract(network: Union[str, Network, None], contract_name: str, client: Any) -> ContractHandle:
    """Build a contract handle with the global registry, defaulting the network."""
    return default_registry.get_contract(network, contract_name, client)
