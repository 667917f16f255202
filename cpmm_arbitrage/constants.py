"""
Numeric constants shared by the solver, the simulator and the config layer.
"""

# Fixed-point scale used when comparing implied pool prices
PRICE_SCALE = 10**18

# Normalized magnitude of the largest reserve leg before squaring
SCALE_TARGET = 10**6

# Width of the unsigned integers the fixed-width mode emulates
UINT256_MAX = 2**256 - 1

# Uniswap V2 fee: g = 997 / 1000 (0.30% taken from the input)
DEFAULT_FEE_NUMERATOR = 997
DEFAULT_FEE_DENOMINATOR = 1000

BPS_DENOMINATOR = 10_000

# Acceptable drift, in base units, between expected and realized profit
DEFAULT_PROFIT_TOLERANCE = 10
