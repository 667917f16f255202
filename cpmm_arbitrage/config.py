"""
Configuration loading and validation for the two-pool arbitrage solver.
"""

import os
from typing import Any, Dict, List, Optional

import yaml

from .constants import (
    DEFAULT_FEE_DENOMINATOR,
    DEFAULT_FEE_NUMERATOR,
    DEFAULT_PROFIT_TOLERANCE,
    PRICE_SCALE,
    SCALE_TARGET,
)
from .exceptions import ConfigurationError, ValidationError
from .types import FeeRatio

# Name kept short for callers that only deal with config files
ConfigError = ConfigurationError


class SolverConfig:
    """
    Parsed and validated solver configuration.

    Attributes:
        fee_numerator: gNum of the shared fee ratio
        fee_denominator: gDen of the shared fee ratio
        fixed_width: Emulate uint256 with scale-then-rescale (reference rounding)
        price_scale: Fixed-point scale for implied price comparison
        scale_target: Magnitude the largest reserve leg is normalized to
        profit_tolerance: Allowed realized-vs-expected drift in base units
        rpc_url: HTTP(S) RPC endpoint, only needed to read pools live
        pools: Exactly two {name, address, token_in} entries, or empty
        token_decimals: Decimals of the input asset, for display only
    """

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None):
        """
        Parse and validate config from dictionary.

        Args:
            config_dict: Loaded YAML config (empty or None for all defaults)

        Raises:
            ConfigError: If fields are invalid
        """
        config_dict = config_dict or {}

        # Fee: explicit ratio wins, legacy fee_bps is converted
        if "fee_bps" in config_dict and not (
            "fee_numerator" in config_dict or "fee_denominator" in config_dict
        ):
            fee_bps = self._get_int(config_dict, "fee_bps", 30)
            try:
                fee = FeeRatio.from_bps(fee_bps)
            except ValidationError as e:
                raise ConfigError(str(e)) from e
            self.fee_numerator: int = fee.numerator
            self.fee_denominator: int = fee.denominator
        else:
            self.fee_numerator = self._get_int(
                config_dict, "fee_numerator", DEFAULT_FEE_NUMERATOR
            )
            self.fee_denominator = self._get_int(
                config_dict, "fee_denominator", DEFAULT_FEE_DENOMINATOR
            )
        # Validate once up front so a bad ratio fails at load time
        try:
            FeeRatio(self.fee_numerator, self.fee_denominator)
        except ValidationError as e:
            raise ConfigError(str(e), {"fee": e.details}) from e

        fixed_width = config_dict.get("fixed_width", True)
        if not isinstance(fixed_width, bool):
            raise ConfigError(
                f"Config field 'fixed_width' must be bool, got {type(fixed_width).__name__}"
            )
        self.fixed_width: bool = fixed_width

        self.price_scale: int = self._get_int(config_dict, "price_scale", PRICE_SCALE)
        self.scale_target: int = self._get_int(config_dict, "scale_target", SCALE_TARGET)
        if self.price_scale <= 0 or self.scale_target <= 0:
            raise ConfigError("price_scale and scale_target must be positive")

        self.profit_tolerance: int = self._get_int(
            config_dict, "profit_tolerance", DEFAULT_PROFIT_TOLERANCE
        )
        if self.profit_tolerance < 0:
            raise ConfigError(
                f"profit_tolerance must be non-negative: {self.profit_tolerance}"
            )

        self.token_decimals: int = self._get_int(config_dict, "token_decimals", 18)

        # Live pool reading (optional)
        self.rpc_url: Optional[str] = config_dict.get("rpc_url") or os.getenv("RPC_URL")
        self.pools: List[Dict[str, str]] = self._parse_pools(config_dict.get("pools", []))

    @staticmethod
    def _get_int(d: Dict, key: str, default: int) -> int:
        """Get optional integer config field with type validation."""
        val = d.get(key, default)
        if isinstance(val, bool) or not isinstance(val, int):
            raise ConfigError(
                f"Config field '{key}' must be int, got {type(val).__name__}"
            )
        return val

    @staticmethod
    def _parse_pools(pools_raw: Any) -> List[Dict[str, str]]:
        """Parse and validate the two live pool entries."""
        if not isinstance(pools_raw, list):
            raise ConfigError("pools must be a list")
        if not pools_raw:
            return []
        if len(pools_raw) != 2:
            raise ConfigError(f"Exactly two pools are required, got {len(pools_raw)}")

        pools = []
        for i, pool in enumerate(pools_raw):
            if not isinstance(pool, dict):
                raise ConfigError(f"Pool config {i} must be a dict")

            name = pool.get("name")
            address = pool.get("address")
            token_in = pool.get("token_in")
            if not all([name, address, token_in]):
                raise ConfigError(
                    f"Pool config {i} missing required fields (name, address, token_in)"
                )
            pools.append({"name": name, "address": address, "token_in": token_in})

        if pools[0]["token_in"].lower() != pools[1]["token_in"].lower():
            raise ConfigError("Both pools must start the round trip in the same token")
        return pools

    @property
    def fee(self) -> FeeRatio:
        """Shared fee ratio as a value object."""
        return FeeRatio(self.fee_numerator, self.fee_denominator)

    @property
    def live(self) -> bool:
        """True when pools are configured for on-chain reading."""
        return bool(self.pools)


def load_config(config_path: str) -> SolverConfig:
    """
    Load and validate config from YAML file.

    Args:
        config_path: Path to config YAML file

    Returns:
        Validated SolverConfig instance

    Raises:
        ConfigError: If config invalid, unparsable or file not found
    """
    if not os.path.exists(config_path):
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML: {e}") from e

    if config_dict is None:
        config_dict = {}
    if not isinstance(config_dict, dict):
        raise ConfigError("Config file must contain a YAML dictionary")

    return SolverConfig(config_dict)
