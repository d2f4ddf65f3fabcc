"""
Package marker for the HTTP-to-RPC gateway under `api_gateway`.
Subpackages hold configuration helpers, the HTTP layer, and the gRPC client layer.
"""
