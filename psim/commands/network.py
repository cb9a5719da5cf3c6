#!/usr/bin/env python3
import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from ..core.registry import CommandContext, HandlerOutput, OutputShape, command
from ..errors import MissingArgumentError
from .base import first_positional, flag_value, render_properties, render_table

logger = logging.getLogger(__name__)

SOURCE_HOST = "DEVOPS-STUDIO"


@dataclass(frozen=True)
class WebResponse:
    status_code: int
    status_description: str
    content: str
    raw_content: str
    headers: str


@dataclass(frozen=True)
class PingReply:
    source: str
    destination: str
    ipv4: str
    ipv6: str
    bytes: int
    time_ms: int


class NetworkOps(ABC):
    @abstractmethod
    async def fetch(self, uri: str) -> WebResponse:
        ...

    @abstractmethod
    async def ping(self, target: str) -> PingReply:
        ...


class SimulatedNetworkOps(NetworkOps):
    async def fetch(self, uri: str) -> WebResponse:
        await asyncio.sleep(0)
        return WebResponse(
            status_code=200,
            status_description="OK",
            content=f"[Web content for {uri}]",
            raw_content="HTTP/1.1 200 OK",
            headers="{Content-Type, Content-Length}",
        )

    async def ping(self, target: str) -> PingReply:
        await asyncio.sleep(0)
        return PingReply(
            source=SOURCE_HOST,
            destination=target,
            ipv4="192.168.1.100",
            ipv6="fe80::1234:5678:9abc:def0%10",
            bytes=32,
            time_ms=1,
        )


@command(
    "Invoke-WebRequest",
    summary="Sends an HTTP request to a web page",
    usage="Invoke-WebRequest <uri>",
    category="Network",
    flags=["-Uri", "-Method"],
)
async def invoke_web_request(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    uri = flag_value(args, "-Uri") or first_positional(args, ("-Uri", "-Method"))
    if not uri:
        raise MissingArgumentError(
            "Invoke-WebRequest", "Uri", "Invoke-WebRequest requires a URI parameter."
        )

    logger.debug("Simulated web request to %s", uri)
    response = await ctx.network_ops.fetch(uri)
    return HandlerOutput(
        render_properties(
            [
                ("StatusCode", response.status_code),
                ("StatusDescription", response.status_description),
                ("Content", response.content),
                ("RawContent", response.raw_content),
                ("Headers", response.headers),
            ]
        )
    )


@command(
    "Test-Connection",
    summary="Sends echo requests to a computer",
    usage="Test-Connection [target]",
    category="Network",
    flags=["-ComputerName", "-TargetName"],
)
async def check_connection(ctx: CommandContext, args: List[str]) -> HandlerOutput:
    target = (
        flag_value(args, "-ComputerName")
        or flag_value(args, "-TargetName")
        or first_positional(args, ("-ComputerName", "-TargetName", "-Count"))
        or "localhost"
    )

    reply = await ctx.network_ops.ping(target)
    table = render_table(
        [
            ("Source", 13),
            ("Destination", 15),
            ("IPV4Address", 16),
            ("IPV6Address", 40),
            ("Bytes", 8),
            ("Time(ms)", 0),
        ],
        [
            (
                reply.source,
                reply.destination,
                reply.ipv4,
                reply.ipv6,
                reply.bytes,
                reply.time_ms,
            )
        ],
    )
    return HandlerOutput(table, OutputShape.TABLE)
