# honeypot_radar/chains.py
# Purpose: BSC venue registry + reference assets + default thresholds (Web3 v7).

from web3 import Web3

CHAIN_ID = 56

BSC_RPC_URLS = [
    "https://bsc-dataseed1.binance.org/",
    "https://bsc-dataseed2.binance.org/",
    "https://bsc-dataseed3.binance.org/",
    "https://bsc-dataseed4.binance.org/",
]

# Ordered: report output and tie-breaking follow this order
VENUES = {
    "pancakeswapV2": {
        "name": "PancakeSwap V2",
        "router": Web3.to_checksum_address("0x10ED43C718714eb63d5aA57B78B54704E256024E"),
        "factory": Web3.to_checksum_address("0xcA143Ce32Fe78f1f7019d7d551a6402fC5350c73"),
    },
    "pancakeswapV3": {
        "name": "PancakeSwap V3",
        "router": Web3.to_checksum_address("0x13f4EA83D0bd40E75C8222255bc855a974568Dd4"),
        "factory": Web3.to_checksum_address("0x0BFbCF9fa4f9C56B0F40a671Ad40E0805A091865"),
    },
    "biswap": {
        "name": "Biswap",
        "router": Web3.to_checksum_address("0x3a6d8cA21D1CF76F653A67577FA0D27453350dD8"),
        "factory": Web3.to_checksum_address("0x858E3312ed3A876947EA49d572A7C42DE08af7EE"),
    },
    "apeswap": {
        "name": "ApeSwap",
        "router": Web3.to_checksum_address("0xcF0feBd3f17CEf5b47b0cD257aCf6025c5BFf3b7"),
        "factory": Web3.to_checksum_address("0x0841BD0B734E4F5853f0dD8d7Ea041c241fb0Da6"),
    },
    "babyswap": {
        "name": "BabySwap",
        "router": Web3.to_checksum_address("0x325E343f1dE602396E256B67eFd1F61C3A6B38Bd"),
        "factory": Web3.to_checksum_address("0x86407bEa2078ea5f5EB5A52B2caA963bC1F889Da"),
    },
    "mdex": {
        "name": "MDEX",
        "router": Web3.to_checksum_address("0x7DAe51BD3E3376B8c7c4900E9107f12Be3AF1bA8"),
        "factory": Web3.to_checksum_address("0x3CD1C46068dAEa5Ebb0d3f55F6915B10648062B8"),
    },
    # TODO: verify the Liquidmesh router/factory against the deployed contracts
    "liquidmesh": {
        "name": "Liquidmesh",
        "router": Web3.to_checksum_address("0x1b02dA8Cb0d097eB8D57A175b88c7D8b47997506"),
        "factory": Web3.to_checksum_address("0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f"),
    },
}

# price_usd is a static reference price; BNB_PRICE_USD overrides the wrapped one
BASES = [
    {"symbol": "WBNB", "address": Web3.to_checksum_address("0xbb4CdB9CBd36B01bD1cBaEBF2De08d9173bc095c"),
     "type": "wrapped", "price_usd": 300.0, "decimals": 18},
    {"symbol": "USDT", "address": Web3.to_checksum_address("0x55d398326f99059fF775485246999027B3197955"),
     "type": "stable", "price_usd": 1.0, "decimals": 18},
    {"symbol": "BUSD", "address": Web3.to_checksum_address("0xe9e7CEA3DedcA5984780Bafc599bD69ADd087D56"),
     "type": "stable", "price_usd": 1.0, "decimals": 18},
]

RISK_THRESHOLDS = {
    "min_liquidity": 500.0,            # USD, low for meme coins
    "max_tax_rate": 0.25,
    "max_single_dex_dominance": 0.95,  # meme coins usually live on one DEX
    "micro_liquidity": 100.0,
    "dangerous_liquidity": 50.0,
    "dust_trade_amount": 0.00003,      # native units, smallest probe size
}

# PoA-style chains need extraData middleware on the provider
POA_CHAIN_IDS = (56, 97)

__all__ = ["CHAIN_ID", "BSC_RPC_URLS", "VENUES", "BASES", "RISK_THRESHOLDS", "POA_CHAIN_IDS"]
