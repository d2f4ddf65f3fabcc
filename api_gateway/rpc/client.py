"""
gRPC client facade for the user service.
One `grpc.aio` channel is dialed per process and every entity stub shares it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import grpc

from api_gateway.common.settings import Settings
from api_gateway.rpc.messages import ENTITY_MESSAGES
from api_gateway.rpc.stubs import EntityStub

logger = logging.getLogger(__name__)


class BackendConnectionError(ConnectionError):
    """Raised when the channel to the user service fails while it is being dialed."""


class RpcClient:
    """Holds the shared channel and one typed stub per backend service."""

    def __init__(
        self,
        *,
        channel: Any,
        customer: EntityStub,
        system_user: EntityStub,
        seller: EntityStub,
        branch: EntityStub,
        shop: EntityStub,
    ) -> None:
        self._channel = channel
        self.customer = customer
        self.system_user = system_user
        self.seller = seller
        self.branch = branch
        self.shop = shop

    @classmethod
    def from_channel(cls, channel: Any) -> RpcClient:
        return cls(
            channel=channel,
            customer=EntityStub(channel, ENTITY_MESSAGES["customer"]),
            system_user=EntityStub(channel, ENTITY_MESSAGES["system_user"]),
            seller=EntityStub(channel, ENTITY_MESSAGES["seller"]),
            branch=EntityStub(channel, ENTITY_MESSAGES["branch"]),
            shop=EntityStub(channel, ENTITY_MESSAGES["shop"]),
        )

    @classmethod
    async def connect(cls, settings: Settings) -> RpcClient:
        """Dial the user service and give the channel a bounded wait to become ready.

        A backend that is not up yet is only logged: the channel stays open and
        reconnects on its own, so calls start succeeding once the backend arrives.
        """

        target = settings.user_service_target
        logger.info("Dialing user service at %s", target)
        channel = grpc.aio.insecure_channel(target)
        try:
            await asyncio.wait_for(
                channel.channel_ready(),
                timeout=settings.RPC_CONNECT_TIMEOUT_SECONDS,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "User service at %s not ready after %.1fs; keeping the channel to reconnect",
                target,
                settings.RPC_CONNECT_TIMEOUT_SECONDS,
            )
        except grpc.RpcError as exc:
            await channel.close()
            raise BackendConnectionError(
                f"user service dial host: {settings.USER_SERVICE_HOST} "
                f"port: {settings.USER_SERVICE_PORT} err: {exc!r}"
            ) from exc
        return cls.from_channel(channel)

    def stub(self, name: str) -> EntityStub | None:
        """Look up a stub by service key; unknown keys are logged and yield None."""

        if name not in ENTITY_MESSAGES:
            logger.error("Unknown user service stub requested: %s", name)
            return None
        return getattr(self, name)

    def is_ready(self) -> bool:
        state = self._channel.get_state(try_to_connect=True)
        return state == grpc.ChannelConnectivity.READY

    async def close(self) -> None:
        await self._channel.close()
