"""
Infrastructure adapters for the market bounded context.

httpx clients for Binance, CoinGecko and CryptoCompare.
"""
