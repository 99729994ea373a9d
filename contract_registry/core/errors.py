"""
Error types raised by the contract registry.

Errors are grouped by who has to fix them:
- ArtifactBundleError: the published address books or ABI files are broken
- RegistryUsageError: the caller asked for a network or contract that does not exist
- InvalidAddressFormat: an address record is present but corrupted
- ClientConstructionFailed: the web3 client or contract object could not be built
"""

from typing import Optional


class RegistryError(Exception):
    """Base class for every registry failure."""

    def __init__(
        self,
        message: str,
        contract: Optional[str] = None,
        network: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.contract = contract
        self.network = network

    def __str__(self):
        context = []
        if self.network:
            context.append(f"network={self.network}")
        if self.contract:
            context.append(f"contract={self.contract}")
        if context:
            return f"{self.message} ({', '.join(context)})"
        return self.message


class ArtifactBundleError(RegistryError):
    """The artifact bundle shipped with the process is broken."""


class MalformedAddressBook(ArtifactBundleError):
    """Address book is missing, does not parse as JSON, or is not a JSON object."""


class MalformedArtifact(ArtifactBundleError):
    """Contract artifact is missing or does not parse as JSON."""


class MalformedAbi(ArtifactBundleError):
    """Artifact parsed, but its ABI is not a valid ABI definition."""


class RegistryUsageError(RegistryError):
    """The caller requested something the registry does not know about."""


class UnknownContract(RegistryUsageError):
    """Contract is not catalogued or has no address in the address book."""


class UnknownNetwork(RegistryUsageError):
    """Network name is not recognized (strict resolution only)."""


class InvalidAddressFormat(RegistryError):
    """Address record is not a 20-byte hex string."""


class ClientConstructionFailed(RegistryError):
    """Web3 client or contract object could not be constructed."""
