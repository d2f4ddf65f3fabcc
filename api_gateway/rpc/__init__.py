"""
Package marker for the gRPC client layer under `api_gateway.rpc`.
It groups message definitions, typed stubs, and the channel-owning client facade.
"""
