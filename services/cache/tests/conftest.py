"""Shared fixtures: an in-memory stand-in for the Redis connection, and a
minimal RESP server for driving real redis.asyncio clients."""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient

from cache_gateway.main import app
from cache_gateway.services import gateway as gateway_service


class FakeRedisServer:
    """Keyspace shared by every fake connection, with a manual clock for TTLs."""

    def __init__(self) -> None:
        self.data: dict[str, tuple[str, float | None]] = {}
        self.now = 0.0
        self.commands: list[tuple] = []
        self.connections: list["FakeConnection"] = []
        self.connect_error: Exception | None = None
        self.command_error: Exception | None = None

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeConnection:
    """Mimics the subset of redis.asyncio.Redis used by the gateway."""

    def __init__(self, server: FakeRedisServer) -> None:
        self.server = server
        self.closed = False

    def _check(self) -> None:
        if self.closed:
            raise AssertionError("command issued on a released connection")
        if self.server.command_error is not None:
            raise self.server.command_error

    async def set(self, key: str, value: str) -> bool:
        self.server.commands.append(("SET", key, value))
        self._check()
        self.server.data[key] = (value, None)
        return True

    async def setex(self, key: str, ttl: int, value: str) -> bool:
        self.server.commands.append(("SETEX", key, ttl, value))
        self._check()
        self.server.data[key] = (value, self.server.now + ttl)
        return True

    async def get(self, key: str) -> str | None:
        self.server.commands.append(("GET", key))
        self._check()
        entry = self.server.data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and expires_at <= self.server.now:
            del self.server.data[key]
            return None
        return value

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def redis_server(monkeypatch: pytest.MonkeyPatch) -> FakeRedisServer:
    """Route the gateway's connection acquisition to an in-memory server."""
    server = FakeRedisServer()

    async def fake_open_connection() -> FakeConnection:
        if server.connect_error is not None:
            raise server.connect_error
        conn = FakeConnection(server)
        server.connections.append(conn)
        return conn

    monkeypatch.setattr(gateway_service, "open_connection", fake_open_connection)
    return server


@pytest.fixture
async def client():
    """Create test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


class RespServer:
    """Tiny RESP2 server: GET answers from `values` (raw bytes), anything else +OK."""

    def __init__(self) -> None:
        self.values: dict[bytes, bytes] = {}
        self.commands: list[list[bytes]] = []
        self.port = 0
        self._server: asyncio.AbstractServer | None = None

    @property
    def url(self) -> str:
        return f"redis://127.0.0.1:{self.port}/0"

    async def start(self) -> None:
        self._server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        self.port = self._server.sockets[0].getsockname()[1]

    async def stop(self) -> None:
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        try:
            while True:
                header = await reader.readline()
                if not header:
                    break
                args = []
                for _ in range(int(header[1:])):
                    size = int((await reader.readline())[1:])
                    args.append((await reader.readexactly(size + 2))[:-2])
                self.commands.append(args)
                if args[0].upper() == b"GET":
                    value = self.values.get(args[1])
                    if value is None:
                        writer.write(b"$-1\r\n")
                    else:
                        writer.write(b"$%d\r\n%s\r\n" % (len(value), value))
                else:
                    writer.write(b"+OK\r\n")
                await writer.drain()
        except (asyncio.IncompleteReadError, ConnectionError):
            pass
        finally:
            writer.close()


@pytest.fixture
async def resp_server():
    server = RespServer()
    await server.start()
    yield server
    await server.stop()
