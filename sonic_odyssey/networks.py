from typing import Dict, NamedTuple, Optional
from solana.rpc.api import Client
from solana.rpc.commitment import Confirmed
from .utils import ask, info_log, warning_log


class Network(NamedTuple):
    net_type: int
    name: str
    rpc_url: str
    api_prefix: str


DEVNET = Network(1, "devnet", "https://devnet.sonic.game/", "")
TESTNET_V0 = Network(2, "testnet v0", "https://api.testnet.v0.sonic.game/", "/testnet")
TESTNET_V1 = Network(3, "testnet v1", "https://api.testnet.v1.sonic.game/", "/testnet-v1")

NETWORKS: Dict[int, Network] = {
    network.net_type: network for network in (DEVNET, TESTNET_V0, TESTNET_V1)
}
DEFAULT_NETWORK = TESTNET_V1


def get_network(net_type: Optional[int] = None) -> Network:
    try:
        return NETWORKS.get(int(net_type), DEFAULT_NETWORK)
    except (TypeError, ValueError):
        return DEFAULT_NETWORK


def api_url(base_url: str, network: Network, path: str) -> str:
    return f"{base_url.rstrip('/')}{network.api_prefix}{path}"


def create_connection(network: Network) -> Client:
    info_log(f"Connecting to {network.name} RPC at {network.rpc_url}")
    return Client(network.rpc_url, commitment=Confirmed)


def choose_network_interactively() -> Network:
    answer = ask("Choose network type (1 devnet, 2 testnet v0, 3 testnet v1): ")
    if not answer:
        return DEFAULT_NETWORK
    if answer not in {str(net_type) for net_type in NETWORKS}:
        warning_log(f"Unknown network '{answer}', using {DEFAULT_NETWORK.name}")
        return DEFAULT_NETWORK
    return get_network(answer)


def resolve_network(config) -> Network:
    configured = config.get("network", {}).get("type")
    if configured is None:
        return choose_network_interactively()
    return get_network(configured)
