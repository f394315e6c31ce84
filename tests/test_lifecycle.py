import asyncio
import socket
import time

import httpx
import pytest

from okofeed.errors import ListenerBindError
from okofeed.lifecycle import FeedLifecycle

PAYLOAD = '<rss version="2.0"><channel><title>OKO.press</title></channel></rss>'


async def _wait_until_started(lifecycle: FeedLifecycle) -> None:
    for _ in range(200):
        if lifecycle.server is not None and lifecycle.server.started:
            return
        await asyncio.sleep(0.01)
    raise AssertionError("server did not start")


@pytest.mark.asyncio
async def test_serves_payload_until_countdown_expires(settings) -> None:
    lifecycle = FeedLifecycle(PAYLOAD, 0, lifetime=1.0, settings=settings)
    lifecycle.bind()
    port = lifecycle.bound_port
    started = time.monotonic()
    task = asyncio.create_task(lifecycle.run())

    await _wait_until_started(lifecycle)
    async with httpx.AsyncClient() as client:
        response = await client.get(f"http://127.0.0.1:{port}/whatever")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/xml"
    assert response.text == PAYLOAD

    await asyncio.wait_for(task, timeout=10)
    assert time.monotonic() - started >= 1.0
    assert lifecycle.bound_port is None


@pytest.mark.asyncio
async def test_listener_is_closed_after_countdown(settings) -> None:
    lifecycle = FeedLifecycle(PAYLOAD, 0, lifetime=0.2, settings=settings)
    lifecycle.bind()
    port = lifecycle.bound_port

    await asyncio.wait_for(lifecycle.run(), timeout=10)

    async with httpx.AsyncClient() as client:
        with pytest.raises(httpx.ConnectError):
            await client.get(f"http://127.0.0.1:{port}/")


@pytest.mark.asyncio
async def test_stop_ends_run_before_countdown(settings) -> None:
    lifecycle = FeedLifecycle(PAYLOAD, 0, lifetime=3600, settings=settings)
    task = asyncio.create_task(lifecycle.run())

    await _wait_until_started(lifecycle)
    lifecycle.stop()

    await asyncio.wait_for(task, timeout=10)


@pytest.mark.asyncio
async def test_zero_lifetime_exits_immediately(settings) -> None:
    lifecycle = FeedLifecycle(PAYLOAD, 0, lifetime=0, settings=settings)

    await asyncio.wait_for(lifecycle.run(), timeout=10)


def test_bind_failure_is_reported(settings) -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as occupied:
        occupied.bind(("127.0.0.1", 0))
        occupied.listen()
        port = occupied.getsockname()[1]

        lifecycle = FeedLifecycle(PAYLOAD, port, lifetime=1, settings=settings)
        with pytest.raises(ListenerBindError):
            lifecycle.bind()

    assert lifecycle.bound_port is None


def _ipv6_available() -> bool:
    if not socket.has_ipv6:
        return False
    try:
        with socket.socket(socket.AF_INET6, socket.SOCK_STREAM) as candidate:
            candidate.bind(("::", 0))
    except OSError:
        return False
    return True


@pytest.mark.asyncio
@pytest.mark.skipif(not _ipv6_available(), reason="IPv6 is not available")
async def test_ipv6_wildcard_host_serves_both_families(settings) -> None:
    dual_stack = settings.model_copy(update={"server_host": "::"})
    lifecycle = FeedLifecycle(PAYLOAD, 0, lifetime=3600, settings=dual_stack)
    sock = lifecycle.bind()
    port = lifecycle.bound_port
    task = asyncio.create_task(lifecycle.run())

    assert sock.family == socket.AF_INET6
    await _wait_until_started(lifecycle)
    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(f"http://127.0.0.1:{port}/")
    finally:
        lifecycle.stop()
        await asyncio.wait_for(task, timeout=10)

    assert response.status_code == 200
    assert response.text == PAYLOAD
