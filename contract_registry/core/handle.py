"""Contract handles returned by the registry."""

from dataclasses import dataclass, field
from typing import Any

from eth_typing import ChecksumAddress

from ..infrastructure.contract_abis import ContractAbi
from .networks import Network


@dataclass(frozen=True)
class ContractHandle:
    """
    Deployed contract bound to a caller-supplied web3 client.

    The handle shares the client; it never closes or reconfigures it.
    """
    name: str
    network: Network
    address: ChecksumAddress
    abi: ContractAbi
    client: Any = field(repr=False, compare=False)
    contract: Any = field(repr=False, compare=False)

    @property
    def functions(self):
        """web3 ContractFunctions of the bound contract."""
        return self.contract.functions

    @property
    def events(self):
        """web3 ContractEvents of the bound contract."""
        return self.contract.events

    def has_function(self, function_name: str) -> bool:
        return self.abi.has_function(function_name)
