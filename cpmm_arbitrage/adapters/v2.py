"""
Uniswap V2 style pair reader.

Fetches token ordering and reserves from a pair contract and returns them
as a PoolReserves oriented for a given input token. Nothing here sends
transactions.
"""

import logging
import time
from typing import Callable

from web3 import Web3

from ..abi import UNISWAP_V2_PAIR_ABI
from ..exceptions import NetworkError, ValidationError
from ..types import PoolReserves

logger = logging.getLogger(__name__)


def _is_rate_limit(error: Exception) -> bool:
    message = str(error)
    return (
        "429" in message
        or "Too Many Requests" in message
        or "-32005" in message
        or "limit exceeded" in message.lower()
    )


def connect(rpc_url: str, timeout: int = 20) -> Web3:
    """
    Open an HTTP connection to an RPC endpoint.

    Raises:
        NetworkError: If the endpoint is unreachable
    """
    w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
    if not w3.is_connected():
        raise NetworkError(f"Web3 not connected; bad RPC URL? {rpc_url}", endpoint=rpc_url)
    logger.info(f"Connected to {rpc_url}")
    return w3


def orient_reserves(
    token0: str, token1: str, reserve0: int, reserve1: int, token_in: str, name: str = ""
) -> PoolReserves:
    """
    Order a pair's raw reserves so ``reserve_in`` belongs to ``token_in``.

    Raises:
        ValidationError: If token_in is neither token of the pair
    """
    token_in = Web3.to_checksum_address(token_in)
    if token_in == Web3.to_checksum_address(token0):
        return PoolReserves(int(reserve0), int(reserve1), name)
    if token_in == Web3.to_checksum_address(token1):
        return PoolReserves(int(reserve1), int(reserve0), name)
    raise ValidationError(
        f"Token {token_in} is not part of pair {name or '?'}",
        {"token0": token0, "token1": token1},
    )


def fetch_reserves(
    web3: Web3,
    pair_addr: str,
    token_in: str,
    name: str = "",
    max_retries: int = 3,
    sleep: Callable[[float], None] = time.sleep,
) -> PoolReserves:
    """
    Read a V2 pair and return its reserves oriented for ``token_in``.

    Rate-limit errors are retried with exponential backoff (1s, 2s, 4s);
    any other RPC error fails immediately.

    Args:
        web3: Web3 instance connected to the chain
        pair_addr: Checksummed address of the pair contract
        token_in: Token the round trip starts and ends in
        name: Label for logs and the returned snapshot
        max_retries: Maximum number of attempts
        sleep: Backoff function (injected by tests)

    Returns:
        PoolReserves snapshot

    Raises:
        ValidationError: If the pair address is invalid or token_in is not in the pair
        NetworkError: If RPC calls fail after all retries
    """
    if not Web3.is_checksum_address(pair_addr):
        raise ValidationError(f"Invalid pair address: {pair_addr}")

    pair = web3.eth.contract(address=pair_addr, abi=UNISWAP_V2_PAIR_ABI)

    last_error = None
    for attempt in range(max_retries):
        try:
            token0 = pair.functions.token0().call()
            token1 = pair.functions.token1().call()
            reserve0, reserve1, _ = pair.functions.getReserves().call()
            break
        except Exception as e:
            last_error = e
            if _is_rate_limit(e) and attempt < max_retries - 1:
                wait_time = 2**attempt
                logger.warning(
                    f"Rate limited reading {name or pair_addr}, retrying in {wait_time}s"
                )
                sleep(wait_time)
                continue
            raise NetworkError(
                f"Failed to fetch pool {pair_addr}: {e}", details={"attempt": attempt + 1}
            ) from e
    else:
        raise NetworkError(
            f"Failed to fetch pool {pair_addr} after {max_retries} retries: {last_error}"
        ) from last_error

    reserves = orient_reserves(token0, token1, reserve0, reserve1, token_in, name)
    logger.debug(
        f"{name or pair_addr}: reserve_in={reserves.reserve_in} reserve_out={reserves.reserve_out}"
    )
    return reserves
