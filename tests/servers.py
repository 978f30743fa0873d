import socket
from asyncio import start_server
from asyncio import StreamReader
from asyncio import StreamWriter

from aioquic.asyncio import serve
from aioquic.quic.configuration import QuicConfiguration

TEST_ALPN = "peercheck-test"


def free_port(kind: int = socket.SOCK_STREAM) -> int:
    with socket.socket(socket.AF_INET, kind) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


async def handle_client(reader: StreamReader, writer: StreamWriter):
    await reader.read(100)
    writer.close()
    await writer.wait_closed()


async def start_tcp_server():
    server = await start_server(handle_client, "127.0.0.1", 0)
    port = [sock.getsockname() for sock in server.sockets][0][1]
    return server, port


async def start_quic_server(certificate: tuple[str, str]):
    port = free_port(socket.SOCK_DGRAM)
    configuration = QuicConfiguration(is_client=False, alpn_protocols=[TEST_ALPN])
    configuration.load_cert_chain(*certificate)
    server = await serve("127.0.0.1", port, configuration=configuration)
    return server, port
