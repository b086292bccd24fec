"""Protocol constants for the eth-connector client."""

# Smallest unit of the native token; NEP-141 state changes require exactly this deposit.
ONE_YOCTO = 1

TGAS = 10**12
DEFAULT_GAS = 100 * TGAS
MAX_GAS = 300 * TGAS
