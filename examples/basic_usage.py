"""Read-only tour of the eth-connector contract over NEAR RPC."""

import logging
import os

from dotenv import load_dotenv

from connector_api import EthConnectorClient, PausedMask
from connector_api.exceptions import ConnectorError

# Configure logging to see detailed execution
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()


def show_token(client: EthConnectorClient) -> None:
    """Print the token metadata and supply."""

    contract = client.contract
    metadata = client.submit(contract.ft_metadata())
    total_supply = client.submit(contract.ft_total_supply())

    print(f"Token: {metadata.name} ({metadata.symbol}), {metadata.decimals} decimals")
    print(f"Total supply: {total_supply}")


def show_account(client: EthConnectorClient, account_id: str) -> None:
    """Print balance and storage registration of one account."""

    contract = client.contract
    balance = client.submit(contract.ft_balance_of(account_id))
    storage = client.submit(contract.storage_balance_of(account_id))

    print(f"Balance of {account_id}: {balance}")
    if storage is None:
        print(f"{account_id} is not registered for storage")
    else:
        print(f"Storage total={storage.total} available={storage.available}")


def show_bridge(client: EthConnectorClient) -> None:
    """Print prover, pause state and storage bounds."""

    contract = client.contract
    prover = client.submit(contract.get_bridge_prover())
    paused = client.submit(contract.get_paused_flags())
    bounds = client.submit(contract.storage_balance_bounds())

    print(f"Bridge prover: {prover}")
    print(f"Deposits paused: {bool(paused & PausedMask.PAUSE_DEPOSIT)}")
    print(f"Withdrawals paused: {bool(paused & PausedMask.PAUSE_WITHDRAW)}")
    print(f"Storage bounds: min={bounds.min} max={bounds.max}")


def main() -> None:
    account_id = os.getenv("ACCOUNT_ID")

    with EthConnectorClient.from_env() as client:
        logger.info("Querying %s", client.config.contract_id)
        try:
            show_token(client)
            show_bridge(client)
            if account_id:
                show_account(client, account_id)
        except ConnectorError as exc:
            print(f"Query failed: {exc}")


if __name__ == "__main__":
    main()
