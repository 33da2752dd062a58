"""A small TCP/UDP test tool: run a server or a client and log what passes through it."""

from __future__ import annotations

import argparse
import enum
import itertools
import os
import socket
import sys
import threading
from collections.abc import Callable, Sequence

_POLL_SECONDS = 0.2
_RECV_SIZE = 65536
_DEFAULT_ADDRESS = "127.0.0.1"
_DEFAULT_PORT = 5000


class SessionError(Exception):
    """Raised when a session cannot start, connect or send."""


class Protocol(enum.Enum):
    """Transport protocol of a session."""

    TCP = "tcp"
    UDP = "udp"


class Role(enum.IntEnum):
    """What a session is currently doing."""

    NONE = 0
    TCP_SERVER = 1
    TCP_CLIENT = 2
    UDP_SERVER = 3
    UDP_CLIENT = 4


class EventKind(enum.IntEnum):
    """Kinds of events a session reports."""

    LOGIN = 0
    SERVER_RECEIVE = 1
    LEAVE = 2
    CONNECTED = 3
    CLIENT_RECEIVE = 4
    CLOSED = 5


_ADDRESS_KINDS = {EventKind.LOGIN, EventKind.SERVER_RECEIVE, EventKind.LEAVE}


def _as_bytes(message: str | bytes | None) -> bytes:
    if message is None:
        return b""
    if isinstance(message, str):
        return message.encode("utf-8")
    return bytes(message)


def format_event(
    kind: EventKind | int,
    client: int = 0,
    address: str | None = None,
    message: str | bytes | None = b"",
) -> str:
    """Render one event as a log line ending in CRLF.

    Server events name the peer by address, client events by client number.
    The size given for received data is its length in bytes.
    """
    kind = EventKind(kind)
    if kind in _ADDRESS_KINDS and address is None:
        raise ValueError(f"{kind.name} events need a client address")
    data = _as_bytes(message)
    text = data.decode("utf-8", errors="replace")
    if kind is EventKind.LOGIN:
        body = f"user:{address} logged in"
    elif kind is EventKind.SERVER_RECEIVE:
        body = f"user:{address} received data, size:{len(data)}:{text}"
    elif kind is EventKind.LEAVE:
        body = f"user:{address} left"
    elif kind is EventKind.CONNECTED:
        body = f"user:{client} connected to server"
    elif kind is EventKind.CLIENT_RECEIVE:
        body = f"user:{client} received data, size:{len(data)}:{text}"
    else:
        body = f"user:{client} left"
    return f"Event={body}\r\n"


class EventLog:
    """A thread-safe, append-only log of session events."""

    def __init__(self, listener: Callable[[str], None] | None = None):
        self._entries: list[tuple[EventKind, str]] = []
        self._lock = threading.Lock()
        self._listener = listener

    def append(
        self,
        kind: EventKind | int,
        client: int = 0,
        address: str | None = None,
        message: str | bytes | None = b"",
    ) -> str:
        """Record an event and return its line."""
        line = format_event(kind, client, address, message)
        with self._lock:
            self._entries.append((EventKind(kind), line))
        if self._listener is not None:
            self._listener(line)
        return line

    @property
    def entries(self) -> list[tuple[EventKind, str]]:
        with self._lock:
            return list(self._entries)

    def text(self) -> str:
        """Return the whole log as one string."""
        with self._lock:
            return "".join(line for _, line in self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def _format_address(peer: tuple) -> str:
    return f"{peer[0]}:{peer[1]}"


class SocketSession:
    """One server or client, run on background threads, reporting to an event log."""

    def __init__(self, log: EventLog | None = None):
        self.log = log if log is not None else EventLog()
        self.role = Role.NONE
        self.port: int | None = None
        self.last_client: str | None = None
        self.client_id = 0
        self._ids = itertools.count(1)
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._threads: list[threading.Thread] = []
        self._server: socket.socket | None = None
        self._client: socket.socket | None = None
        self._peers: dict[str, socket.socket] = {}

    def __enter__(self) -> SocketSession:
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    def _require_idle(self) -> None:
        if self.role is not Role.NONE:
            raise SessionError("a session is already running")

    def _spawn(self, target: Callable, *args) -> None:
        thread = threading.Thread(target=target, args=args, daemon=True)
        with self._lock:
            self._threads.append(thread)
        thread.start()

    def start_server(self, protocol: Protocol | str, port: int | str) -> None:
        """Listen on the given port on all interfaces."""
        self._require_idle()
        protocol = Protocol(protocol)
        tcp = protocol is Protocol.TCP
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM if tcp else socket.SOCK_DGRAM)
        try:
            if tcp and os.name != "nt":
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind(("", int(port)))
            if tcp:
                sock.listen()
        except (OSError, ValueError) as exc:
            sock.close()
            raise SessionError(f"cannot start server: {exc}") from exc
        sock.settimeout(_POLL_SECONDS)
        self._stop.clear()
        self._server = sock
        self.port = sock.getsockname()[1]
        if tcp:
            self.role = Role.TCP_SERVER
            self._spawn(self._accept_loop, sock)
        else:
            self.role = Role.UDP_SERVER
            self._spawn(self._datagram_loop, sock)

    def connect(self, protocol: Protocol | str, address: str, port: int | str) -> None:
        """Connect to a server at address and port."""
        if not address or port is None or str(port).strip() == "":
            raise SessionError("address or port is empty")
        self._require_idle()
        protocol = Protocol(protocol)
        try:
            target = (address, int(port))
        except ValueError as exc:
            raise SessionError(f"invalid port: {port}") from exc
        self._stop.clear()
        if protocol is Protocol.TCP:
            try:
                sock = socket.create_connection(target, timeout=5)
            except OSError as exc:
                raise SessionError(f"cannot connect to server: {exc}") from exc
            sock.settimeout(_POLL_SECONDS)
            self._client = sock
            self.client_id = next(self._ids)
            self.role = Role.TCP_CLIENT
            self.log.append(EventKind.CONNECTED, client=self.client_id)
            self._spawn(self._client_loop, sock, self.client_id)
        else:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            try:
                sock.connect(target)
            except OSError as exc:
                sock.close()
                raise SessionError(f"cannot connect to server: {exc}") from exc
            self._client = sock
            self.client_id = next(self._ids)
            self.role = Role.UDP_CLIENT

    def send(
        self,
        message: str | bytes,
        address: str | None = None,
        port: int | str | None = None,
    ) -> int:
        """Send a message and return how many bytes were sent.

        A TCP server sends to the client named by address, by default the one
        that logged in last; a UDP server sends to address and port.
        """
        data = _as_bytes(message)
        if not data:
            raise SessionError("message is empty")
        role = self.role
        try:
            if role is Role.TCP_SERVER:
                target = address or self.last_client
                with self._lock:
                    conn = self._peers.get(target) if target else None
                if conn is None:
                    raise SessionError(f"no connected client {target}")
                conn.sendall(data)
            elif role is Role.TCP_CLIENT:
                self._client.sendall(data)
            elif role is Role.UDP_SERVER:
                if not address or port is None:
                    raise SessionError("a UDP server needs a target address and port")
                self._server.sendto(data, (address, int(port)))
            elif role is Role.UDP_CLIENT:
                self._client.send(data)
            else:
                raise SessionError("no session is running")
        except (OSError, ValueError) as exc:
            raise SessionError(f"sending data failed: {exc}") from exc
        return len(data)

    def stop(self) -> None:
        """Close every socket and wait for the background threads."""
        self._stop.set()
        with self._lock:
            sockets = [s for s in (self._server, self._client) if s is not None]
            sockets.extend(self._peers.values())
            self._peers.clear()
            threads = list(self._threads)
            self._threads.clear()
        for sock in sockets:
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            sock.close()
        current = threading.current_thread()
        for thread in threads:
            if thread is not current:
                thread.join(timeout=2)
        self._server = None
        self._client = None
        self.port = None
        self.role = Role.NONE

    def _accept_loop(self, sock: socket.socket) -> None:
        while not self._stop.is_set():
            try:
                conn, peer = sock.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            address = _format_address(peer)
            conn.settimeout(_POLL_SECONDS)
            with self._lock:
                self._peers[address] = conn
            self.last_client = address
            self.log.append(EventKind.LOGIN, address=address)
            self._spawn(self._peer_loop, conn, address)

    def _peer_loop(self, conn: socket.socket, address: str) -> None:
        while not self._stop.is_set():
            try:
                data = conn.recv(_RECV_SIZE)
            except socket.timeout:
                continue
            except OSError:
                data = b""
            if not data:
                break
            self.log.append(EventKind.SERVER_RECEIVE, address=address, message=data)
        if self._stop.is_set():
            return
        with self._lock:
            self._peers.pop(address, None)
        conn.close()
        self.log.append(EventKind.LEAVE, address=address)

    def _datagram_loop(self, sock: socket.socket) -> None:
        while not self._stop.is_set():
            try:
                data, peer = sock.recvfrom(_RECV_SIZE)
            except socket.timeout:
                continue
            except OSError:
                break
            self.log.append(EventKind.SERVER_RECEIVE, address=_format_address(peer), message=data)

    def _client_loop(self, sock: socket.socket, client_id: int) -> None:
        while not self._stop.is_set():
            try:
                data = sock.recv(_RECV_SIZE)
            except socket.timeout:
                continue
            except OSError:
                data = b""
            if not data:
                break
            self.log.append(EventKind.CLIENT_RECEIVE, client=client_id, message=data)
        if not self._stop.is_set():
            self.log.append(EventKind.CLOSED, client=client_id)


def main(argv: Sequence[str] | None = None) -> int:
    """Run a server or a client and send each line read from standard input."""
    parser = argparse.ArgumentParser(
        prog="sockettest", description="Start a TCP/UDP server or client and exchange messages."
    )
    parser.add_argument("mode", choices=["server", "connect"])
    parser.add_argument("--protocol", choices=[p.value for p in Protocol], default="tcp")
    parser.add_argument("--address", default=_DEFAULT_ADDRESS, help="server or target address")
    parser.add_argument("--port", default=str(_DEFAULT_PORT), help="port (default: 5000)")
    args = parser.parse_args(argv)

    log = EventLog(listener=lambda line: print(line, end="", flush=True))
    session = SocketSession(log)
    try:
        if args.mode == "server":
            session.start_server(args.protocol, args.port)
            print(f"Server started on port {session.port}", flush=True)
        else:
            session.connect(args.protocol, args.address, args.port)
    except SessionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    try:
        for raw in sys.stdin:
            line = raw.rstrip("\r\n")
            if not line:
                continue
            try:
                if session.role is Role.UDP_SERVER:
                    session.send(line, args.address, args.port)
                else:
                    session.send(line)
            except SessionError as exc:
                print(f"error: {exc}", file=sys.stderr)
    finally:
        session.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())