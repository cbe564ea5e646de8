"""
Binance API constants shared by the configuration and the client.
"""

# =============================================================================
# Base URLs
# =============================================================================

SPOT_API = "https://api.binance.com"
SPOT_TESTNET_API = "https://testnet.binance.vision"

PERPETUAL_FUTURES_API = "https://fapi.binance.com"
PERPETUAL_FUTURES_TESTNET_API = "https://testnet.binancefuture.com"

DELIVERY_FUTURES_API = "https://dapi.binance.com"
DELIVERY_FUTURES_TESTNET_API = "https://testnet.binancefuture.com"


# =============================================================================
# Client defaults
# =============================================================================

HTTP_CONNECT_TIMEOUT_MS_DEFAULT = 5000
HTTP_REQUEST_TIMEOUT_MS_DEFAULT = 5000
RECV_WINDOW_MS_DEFAULT = 5000
RECV_WINDOW_MS_MAX = 60000


# =============================================================================
# Wire names
# =============================================================================

API_KEY_HEADER = "X-MBX-APIKEY"

HEADER_USED_WEIGHT = "x-mbx-used-weight"
HEADER_USED_WEIGHT_1M = "x-mbx-used-weight-1m"
HEADER_RETRY_AFTER = "retry-after"

PARAM_RECV_WINDOW = "recvWindow"
PARAM_TIMESTAMP = "timestamp"
PARAM_SIGNATURE = "signature"

SIGNATURE_HEX_LEN = 64

# Worst-case length of "&recvWindow=65535", "&timestamp=<ms>" and "&signature=<hex>"
SIGNED_PARAMS_LEN = 17 + 30 + SIGNATURE_HEX_LEN + 11


# =============================================================================
# Binance Error Codes
# =============================================================================

BINANCE_ERROR_CODES = {
    -1000: "UNKNOWN",
    -1002: "UNAUTHORIZED",
    -1003: "TOO_MANY_REQUESTS",
    -1021: "INVALID_TIMESTAMP",  # Timestamp outside of recvWindow
    -1022: "INVALID_SIGNATURE",
    -1100: "ILLEGAL_CHARS",
    -1102: "MANDATORY_PARAM_EMPTY_OR_MALFORMED",
    -2010: "NEW_ORDER_REJECTED",
    -2011: "CANCEL_REJECTED",
    -2013: "NO_SUCH_ORDER",
    -2014: "BAD_API_KEY_FMT",
    -2015: "REJECTED_MBX_KEY",
}


# =============================================================================
# API Endpoints
# =============================================================================

SPOT_ENDPOINTS = {
    "PING": "/api/v3/ping",
    "SERVER_TIME": "/api/v3/time",
    "DEPTH": "/api/v3/depth",
    "TRADES": "/api/v3/trades",
    "HISTORICAL_TRADES": "/api/v3/historicalTrades",
    "AGG_TRADES": "/api/v3/aggTrades",
    "KLINES": "/api/v3/klines",
    "AVG_PRICE": "/api/v3/avgPrice",
    "TICKER_PRICE": "/api/v3/ticker/price",
    "TICKER_BOOK": "/api/v3/ticker/bookTicker",
    "ORDER_TEST": "/api/v3/order/test",
    "ORDER": "/api/v3/order",
    "OPEN_ORDERS": "/api/v3/openOrders",
    "ORDER_CANCEL_REPLACE": "/api/v3/order/cancelReplace",
    "ACCOUNT": "/api/v3/account",
}

PERPETUAL_FUTURES_ENDPOINTS = {
    "PING": "/fapi/v1/ping",
    "SERVER_TIME": "/fapi/v1/time",
    "DEPTH": "/fapi/v1/depth",
}

DELIVERY_FUTURES_ENDPOINTS = {
    "PING": "/dapi/v1/ping",
    "SERVER_TIME": "/dapi/v1/time",
    "DEPTH": "/dapi/v1/depth",
}
