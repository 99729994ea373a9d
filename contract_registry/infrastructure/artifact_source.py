"""
Artifact sources for the contract registry.

A source hands the registry the raw bytes of the published bundle:

    <network>.json       address book per network
    ABI/<Contract>.json  artifact per contract

The registry only parses what a source returns, so the same lookup logic
works for a directory on disk, data files inside an installed package, an
in-memory fixture, or a bundle downloaded once at start-up.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Union

import aiohttp

from ..core.errors import MalformedAddressBook, MalformedArtifact

logger = logging.getLogger(__name__)

ABI_DIR = "ABI"

Blob = Union[str, bytes, Mapping[str, Any], list]


def address_book_file(network: str) -> str:
    return f"{network}.json"


def artifact_file(artifact_name: str) -> str:
    return f"{ABI_DIR}/{artifact_name}.json"


class ArtifactSource(ABC):
    """Read-only access to address books and contract artifacts."""

    @abstractmethod
    def read_address_book(self, network: str) -> Blob:
        """
        Get the address book for a network.

        Raises:
            MalformedAddressBook: If the source has no address book for the network
        """

    @abstractmethod
    def read_artifact(self, artifact_name: str) -> Blob:
        """
        Get the artifact of a contract.

        Raises:
            MalformedArtifact: If the source has no artifact with this name
        """


class FileSystemArtifactSource(ArtifactSource):
    """Bundle laid out in a directory, e.g. the build pipeline's publish/ output."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def __repr__(self):
        return f"FileSystemArtifactSource(root={self.root})"

    def read_address_book(self, network: str) -> bytes:
        path = self.root / address_book_file(network)
        if not path.is_file():
            logger.error(f"Address book not found: {path}")
            raise MalformedAddressBook(f"Address book not found: {path}", network=network)
        try:
            return path.read_bytes()
        except OSError as e:
            raise MalformedAddressBook(f"Cannot read address book {path}: {e}", network=network) from e

    def read_artifact(self, artifact_name: str) -> bytes:
        path = self.root / ABI_DIR / f"{artifact_name}.json"
        if not path.is_file():
            logger.error(f"Contract artifact not found: {path}")
            raise MalformedArtifact(f"Contract artifact not found: {path}", contract=artifact_name)
        try:
            return path.read_bytes()
        except OSError as e:
            raise MalformedArtifact(f"Cannot read artifact {path}: {e}", contract=artifact_name) from e


class PackageArtifactSource(ArtifactSource):
    """Bundle shipped as data files inside an installed Python package."""

    def __init__(self, package: str, subdir: str = "publish"):
        self.package = package
        self.subdir = subdir

    def __repr__(self):
        return f"PackageArtifactSource(package={self.package}, subdir={self.subdir})"

    def _resource(self, *parts: str):
        resource = resources.files(self.package).joinpath(self.subdir)
        for part in parts:
            resource = resource.joinpath(part)
        return resource

    def read_address_book(self, network: str) -> bytes:
        resource = self._resource(address_book_file(network))
        if not resource.is_file():
            logger.error(f"Address book not found in package {self.package}: {network}")
            raise MalformedAddressBook(
                f"Address book not found in package {self.package}",
                network=network
            )
        return resource.read_bytes()

    def read_artifact(self, artifact_name: str) -> bytes:
        resource = self._resource(ABI_DIR, f"{artifact_name}.json")
        if not resource.is_file():
            logger.error(f"Contract artifact not found in package {self.package}: {artifact_name}")
            raise MalformedArtifact(
                f"Contract artifact not found in package {self.package}",
                contract=artifact_name
            )
        return resource.read_bytes()


class InMemoryArtifactSource(ArtifactSource):
    """
    Dict-backed bundle.

    Values may be JSON text, bytes, or already decoded JSON.
    """

    def __init__(
        self,
        address_books: Optional[Mapping[str, Blob]] = None,
        artifacts: Optional[Mapping[str, Blob]] = None
    ):
        self.address_books: Dict[str, Blob] = dict(address_books or {})
        self.artifacts: Dict[str, Blob] = dict(artifacts or {})

    def __repr__(self):
        return (
            f"InMemoryArtifactSource(networks={list(self.address_books)}, "
            f"artifacts={len(self.artifacts)})"
        )

    def read_address_book(self, network: str) -> Blob:
        if network not in self.address_books:
            raise MalformedAddressBook("Address book not found in bundle", network=network)
        return self.address_books[network]

    def read_artifact(self, artifact_name: str) -> Blob:
        if artifact_name not in self.artifacts:
            raise MalformedArtifact("Contract artifact not found in bundle", contract=artifact_name)
        return self.artifacts[artifact_name]


class HttpArtifactSource:
    """
    Bundle published over HTTP.

    Registry lookups are synchronous, so the bundle is downloaded once with
    prefetch() and served from memory afterwards.
    """

    def __init__(self, base_url: str, timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def __repr__(self):
        return f"HttpArtifactSource(base_url={self.base_url})"

    async def _fetch(self, session: aiohttp.ClientSession, path: str) -> Optional[bytes]:
        """Fetch one file; None if the server does not have it."""
        url = f"{self.base_url}/{path}"
        async with session.get(url, timeout=aiohttp.ClientTimeout(total=self.timeout)) as response:
            if response.status == 200:
                return await response.read()
            logger.warning(f"Fetch failed for {url}: HTTP {response.status}")
            return None

    async def prefetch(
        self,
        networks: Iterable[str],
        artifact_names: Iterable[str]
    ) -> InMemoryArtifactSource:
        """
        Download address books and artifacts into memory.

        Args:
            networks: Network names whose address books to fetch
            artifact_names: Artifact names to fetch

        Returns:
            InMemoryArtifactSource holding the downloaded bundle

        Raises:
            MalformedAddressBook: If an address book cannot be downloaded
            MalformedArtifact: If an artifact cannot be downloaded
        """
        address_books: Dict[str, bytes] = {}
        artifacts: Dict[str, bytes] = {}

        async with aiohttp.ClientSession() as session:
            for network in networks:
                try:
                    data = await self._fetch(session, address_book_file(network))
                except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                    logger.error(f"Error fetching address book for {network}: {e}")
                    raise MalformedAddressBook(f"Address book download failed: {e}", network=network) from e
                if data is None:
                    raise MalformedAddressBook("Address book not published", network=network)
                address_books[network] = data

            for name in artifact_names:
                try:
                    data = await self._fetch(session, artifact_file(name))
                except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                    logger.error(f"Error fetching artifact for {name}: {e}")
                    raise MalformedArtifact(f"Artifact download failed: {e}", contract=name) from e
                if data is None:
                    raise MalformedArtifact("Artifact not published", contract=name)
                artifacts[name] = data

        logger.info(f"Prefetched {len(address_books)} address book(s) and {len(artifacts)} artifact(s) from {self.base_url}")
        return InMemoryArtifactSource(address_books, artifacts)


def dump_bundle(source: InMemoryArtifactSource, root: Union[str, Path]) -> Path:
    """
    Write an in-memory bundle to disk in the publish/ layout.

    Returns:
        The bundle root directory
    """
    root = Path(root)
    (root / ABI_DIR).mkdir(parents=True, exist_ok=True)

    for network, blob in source.address_books.items():
        _write_blob(root / address_book_file(network), blob)
    for name, blob in source.artifacts.items():
        _write_blob(root / ABI_DIR / f"{name}.json", blob)

    logger.info(f"Wrote bundle to {root}")
    return root


def _write_blob(path: Path, blob: Blob):
    if isinstance(blob, bytes):
        path.write_bytes(blob)
    elif isinstance(blob, str):
        path.write_text(blob, encoding="utf-8")
    else:
        path.write_text(json.dumps(blob, indent=4), encoding="utf-8")
