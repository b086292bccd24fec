"""Build transfer and withdraw requests and inspect what would be sent.

Submitting calls needs a signer: a callable that turns a
``FunctionCallAction`` into a base64 signed transaction. Without one the
script only prints the encoded requests.
"""

import os

from dotenv import load_dotenv

from connector_api import ConnectorClientConfig, Encoding, EthConnectorContract

# Load environment variables from .env file
load_dotenv()


def main() -> None:
    config = ConnectorClientConfig.from_env()
    contract = EthConnectorContract(config.contract_id, default_gas=config.default_gas)

    receiver_id = os.getenv("RECEIVER_ID", "alice.testnet")
    recipient_address = os.getenv("RECIPIENT_ADDRESS", "0x" + "00" * 20)

    requests_to_show = [
        contract.storage_deposit(receiver_id, registration_only=True).with_deposit(
            1_250_000_000_000_000_000_000
        ),
        contract.ft_transfer(receiver_id, 1_000, memo="example transfer"),
        contract.ft_transfer_call(receiver_id, 1_000, None, "deposit"),
        contract.withdraw(recipient_address, 500),
    ]

    for request in requests_to_show:
        print(request.describe())
        if request.encoding is Encoding.STRUCTURED:
            print(f"  args: {request.args.decode()}")
        else:
            print(f"  args: 0x{request.args.hex()}")


if __name__ == "__main__":
    main()
