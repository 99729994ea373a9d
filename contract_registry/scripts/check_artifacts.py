#!/usr/bin/env python3
"""
Check a published artifact bundle against the contract catalogue.

Resolves every catalogued contract on each network and reports contracts
whose address or ABI cannot be loaded, plus contracts whose local bytecode
no longer matches the deployed bytecode hash.

Usage:
    python -m contract_registry.scripts.check_artifacts --dir ./publish
    python -m contract_registry.scripts.check_artifacts --network kepler testnet
    python -m contract_registry.scripts.check_artifacts --url https://host/publish --save ./publish
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from contract_registry.catalogue import CONTRACTS
from contract_registry.config import settings
from contract_registry.core.errors import RegistryError
from contract_registry.core.networks import Network
from contract_registry.infrastructure.artifact_source import (
    ArtifactSource,
    FileSystemArtifactSource,
    HttpArtifactSource,
    dump_bundle
)
from contract_registry.registry import ContractRegistry


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate address books and ABI artifacts of a contract bundle"
    )
    parser.add_argument(
        "--dir",
        default=settings.artifacts_dir,
        help=f"Bundle directory (default: {settings.artifacts_dir})"
    )
    parser.add_argument(
        "--url",
        help="Download the bundle from this base URL instead of reading --dir"
    )
    parser.add_argument(
        "--save",
        help="Write the downloaded bundle to this directory (with --url)"
    )
    parser.add_argument(
        "--network",
        nargs="+",
        choices=[n.value for n in Network],
        default=[n.value for n in Network],
        help="Networks to check (default: all)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


async def load_source(args: argparse.Namespace) -> ArtifactSource:
    """Create the artifact source selected on the command line."""
    if not args.url:
        return FileSystemArtifactSource(args.dir)

    print(f"📥 Downloading bundle from {args.url}...")
    source = await HttpArtifactSource(args.url).prefetch(
        args.network,
        sorted({entry.artifact for entry in CONTRACTS})
    )
    if args.save:
        dump_bundle(source, args.save)
        print(f"💾 Bundle saved to {args.save}")
    return source


def check_network(registry: ContractRegistry, network: Network) -> bool:
    """Print the report for one network. Returns True if everything resolves."""
    print(f"\n🔍 {network.value}")

    try:
        results = registry.verify(network)
    except RegistryError as e:
        print(f"  ❌ {e}")
        return False

    ok = True
    for name, error in results.items():
        if error is None:
            print(f"  ✅ {name}")
        else:
            ok = False
            print(f"  ❌ {name}: {error}")

    try:
        changed = registry.changed_contracts(network)
    except RegistryError as e:
        print(f"  ⚠️  Bytecode comparison skipped: {e}")
        return ok

    for name in changed:
        print(f"  ⚠️  {name}: bytecode differs from deployed version")

    return ok


async def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        source = await load_source(args)
    except RegistryError as e:
        print(f"❌ Could not load bundle: {e}")
        return 1

    registry = ContractRegistry(source)

    print("=" * 70)
    print(f"Checking {len(CONTRACTS)} contracts on {len(args.network)} network(s)")
    print("=" * 70)

    results = [check_network(registry, Network(name)) for name in args.network]

    print()
    print("=" * 70)
    if all(results):
        print("✅ BUNDLE OK")
    else:
        print("❌ BUNDLE HAS ERRORS")
    print("=" * 70)

    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
