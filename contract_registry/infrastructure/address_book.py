"""
Address book parsing and contract address lookup.

An address book is the JSON document published per network by the
deployment pipeline. Two shapes exist:

    flat:    {"Staking": {"address": "0x..."}, ...}
    layered: {"root": {"SQToken": {...}}, "child": {"Staking": {...}}}

The layered shape splits contracts between the root (L1) and child (L2)
chains. Only the ``address`` field of a record is required.
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from eth_typing import ChecksumAddress
from eth_utils import is_hex_address, to_checksum_address
from pydantic import BaseModel, ConfigDict, Field

from ..core.errors import InvalidAddressFormat, MalformedAddressBook, UnknownContract

logger = logging.getLogger(__name__)

LAYERS = ("root", "child")

# Layered books are searched child first when no layer is given
LAYER_SEARCH_ORDER = ("child", "root")


class ContractDeploymentDetail(BaseModel):
    """A single deployment record from an address book."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    address: str
    inner_address: Optional[str] = Field(default=None, alias="innerAddress")
    bytecode_hash: Optional[str] = Field(default=None, alias="bytecodeHash")
    last_update: Optional[str] = Field(default=None, alias="lastUpdate")


def parse_address(
    value: Any,
    contract_name: Optional[str] = None,
    network: Optional[str] = None
) -> ChecksumAddress:
    """
    Parse a hex string into a checksummed 20-byte address.

    The 0x prefix is optional and letter case is not checked.

    Raises:
        InvalidAddressFormat: If the value is not 40 hex characters
    """
    if not isinstance(value, str) or not is_hex_address(value):
        raise InvalidAddressFormat(
            f"Invalid address {value!r}: expected 40 hex characters",
            contract=contract_name,
            network=network
        )
    return to_checksum_address(value)


class AddressBook:
    """
    Parsed, read-only address book for one network.

    Instances are never mutated after construction.
    """

    def __init__(self, data: Mapping[str, Any], network: Optional[str] = None):
        """
        Initialize from a decoded address book.

        Args:
            data: Decoded JSON object
            network: Network name, used in error messages

        Raises:
            MalformedAddressBook: If data is not a JSON object
        """
        if not isinstance(data, Mapping):
            raise MalformedAddressBook(
                f"Address book must be a JSON object, got {type(data).__name__}",
                network=network
            )
        self.network = network
        self._data = dict(data)
        self.layered = _is_layered(self._data)

    @classmethod
    def from_json(
        cls,
        text: Union[str, bytes, bytearray],
        network: Optional[str] = None
    ) -> "AddressBook":
        """
        Parse an address book from JSON text.

        Raises:
            MalformedAddressBook: If the text is not valid JSON
        """
        try:
            data = json.loads(text)
        except (TypeError, ValueError, RecursionError) as e:
            logger.error(f"Address book for {network or 'unknown network'} is not valid JSON: {e}")
            raise MalformedAddressBook(f"Address book is not valid JSON: {e}", network=network) from e
        return cls(data, network=network)

    def __repr__(self):
        return f"AddressBook(network={self.network}, contracts={len(self.contracts())}, layered={self.layered})"

    def contracts(self, layer: Optional[str] = None) -> List[str]:
        """
        List contract names in the book.

        Args:
            layer: Restrict to one layer of a layered book

        Returns:
            Contract names in document order
        """
        if not self.layered:
            return list(self._data.keys())

        names: List[str] = []
        for section in ([layer] if layer else list(LAYERS)):
            for name in self._data.get(section) or {}:
                if name not in names:
                    names.append(name)
        return names

    def get_record(self, contract_name: str, layer: Optional[str] = None) -> Dict[str, Any]:
        """
        Get the raw deployment record for a contract.

        Args:
            contract_name: Address book key, e.g. "Staking"
            layer: "root" or "child"; ignored for flat books

        Raises:
            UnknownContract: If the contract is not in the book
        """
        if self.layered:
            sections = [layer] if layer else list(LAYER_SEARCH_ORDER)
            for section in sections:
                record = (self._data.get(section) or {}).get(contract_name)
                if record is not None:
                    return record
        elif contract_name in self._data:
            return self._data[contract_name]

        raise UnknownContract(
            f"Contract not found in address book. Available: {self.contracts(layer)}",
            contract=contract_name,
            network=self.network
        )

    def get_detail(self, contract_name: str, layer: Optional[str] = None) -> ContractDeploymentDetail:
        """
        Get the full deployment record, including proxy and bytecode metadata.

        Raises:
            UnknownContract: If the contract or its address field is absent
        """
        record = self.get_record(contract_name, layer)
        if not isinstance(record, Mapping) or "address" not in record:
            raise UnknownContract(
                "Address book entry has no address field",
                contract=contract_name,
                network=self.network
            )
        return ContractDeploymentDetail.model_validate(
            {**record, "address": str(record["address"])}
        )

    def get_address(self, contract_name: str, layer: Optional[str] = None) -> ChecksumAddress:
        """
        Get the deployed address of a contract.

        Raises:
            UnknownContract: If the contract or its address field is absent
            InvalidAddressFormat: If the address is not 40 hex characters
        """
        record = self.get_record(contract_name, layer)
        if not isinstance(record, Mapping) or "address" not in record:
            raise UnknownContract(
                "Address book entry has no address field",
                contract=contract_name,
                network=self.network
            )
        return parse_address(record["address"], contract_name, self.network)


def _is_layered(data: Dict[str, Any]) -> bool:
    """A book is layered when its only keys are root/child objects."""
    if not data:
        return False
    return all(key in LAYERS and isinstance(value, Mapping) for key, value in data.items())


def lookup_address(
    book: Union[AddressBook, str, bytes, Mapping[str, Any]],
    contract_name: str,
    layer: Optional[str] = None
) -> ChecksumAddress:
    """
    Look up a contract's deployed address in an address book.

    Args:
        book: Parsed AddressBook, raw JSON text, or a decoded JSON object
        contract_name: Address book key, e.g. "Staking"
        layer: "root" or "child" for layered books

    Returns:
        EIP-55 checksummed address

    Raises:
        MalformedAddressBook: If the book does not parse as a JSON object
        UnknownContract: If the key or its address field is absent
        InvalidAddressFormat: If the address is not 40 hex characters
    """
    if isinstance(book, (str, bytes, bytearray)):
        book = AddressBook.from_json(book)
    elif not isinstance(book, AddressBook):
        book = AddressBook(book)

    return book.get_address(contract_name, layer)
