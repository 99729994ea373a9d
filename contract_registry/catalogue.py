"""Catalogue of the network contracts exposed by the registry."""

from dataclasses import dataclass
from typing import Dict, List, Optional

ROOT_LAYER = "root"
CHILD_LAYER = "child"


@dataclass(frozen=True)
class ContractEntry:
    """
    One catalogued contract.

    Attributes:
        name: Address book key and canonical contract name
        accessor: snake_case alias, e.g. "staking_manager"
        artifact: Artifact file stem under ABI/
        layer: Address book layer when the book is split into root/child
    """
    name: str
    accessor: str
    artifact: str
    layer: str = CHILD_LAYER


def _entry(name: str, accessor: str, layer: str = CHILD_LAYER) -> ContractEntry:
    return ContractEntry(name=name, accessor=accessor, artifact=name, layer=layer)


CONTRACTS: List[ContractEntry] = [
    _entry("Settings", "settings"),
    _entry("SQToken", "sqtoken", ROOT_LAYER),
    _entry("VSQToken", "vsqtoken"),
    _entry("Staking", "staking"),
    _entry("StakingManager", "staking_manager"),
    _entry("IndexerRegistry", "indexer_registry"),
    _entry("QueryRegistry", "query_registry"),
    _entry("ProjectRegistry", "project_registry"),
    _entry("InflationController", "inflation_controller", ROOT_LAYER),
    _entry("ServiceAgreementRegistry", "service_agreement_registry"),
    _entry("PlanManager", "plan_manager"),
    _entry("PurchaseOfferMarket", "purchase_offer_market"),
    _entry("EraManager", "era_manager"),
    _entry("RewardsDistributer", "rewards_distributer"),
    _entry("RewardsPool", "rewards_pool"),
    _entry("RewardsStaking", "rewards_staking"),
    _entry("RewardsHelper", "rewards_helper"),
    _entry("ProxyAdmin", "proxy_admin"),
    _entry("StateChannel", "state_channel"),
    _entry("Airdropper", "airdropper"),
    _entry("PermissionedExchange", "permissioned_exchange"),
    _entry("Vesting", "vesting", ROOT_LAYER),
    _entry("ConsumerHost", "consumer_host"),
    _entry("DisputeManager", "dispute_manager"),
    _entry("ConsumerRegistry", "consumer_registry"),
    _entry("PriceOracle", "price_oracle"),
]

# Lookup by canonical name and by accessor alias
_BY_KEY: Dict[str, ContractEntry] = {}
for _contract in CONTRACTS:
    _BY_KEY[_contract.name] = _contract
    _BY_KEY[_contract.accessor] = _contract


def find_contract(name: str) -> Optional[ContractEntry]:
    """Find a catalogued contract by canonical name or accessor alias."""
    return _BY_KEY.get(name)


def contract_names() -> List[str]:
    """List canonical names of all catalogued contracts."""
    return [entry.name for entry in CONTRACTS]
