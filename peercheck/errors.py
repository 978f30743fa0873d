class PeerCheckError(Exception):
    pass


class DirectoryReadError(PeerCheckError):
    def __init__(self, path: str):
        super().__init__(f"can't read peers from {path}")
        self.path = path


class ResolveError(PeerCheckError):
    def __init__(self, host: str, reason: str = "lookup failed"):
        super().__init__(f"can't resolve {host}: {reason}")
        self.host = host


class DialError(PeerCheckError):
    def __init__(self, address: str, port: int, category: str):
        super().__init__(f"can't connect to {address} port {port}: {category}")
        self.address = address
        self.port = port
        self.category = category
