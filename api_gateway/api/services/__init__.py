# This file marks the services package for backend-facing API logic.
# Service modules keep protobuf translation and RPC error mapping out of the routers.
