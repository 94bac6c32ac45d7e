"""LAN address lookup, so other devices in the household can reach the shared state."""
import socket


def get_local_ip() -> str:
    """Best-effort non-loopback IPv4 address of this machine, else '127.0.0.1'."""
    probe = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        # connect() on UDP only selects the outgoing interface; nothing is sent
        probe.connect(("192.0.2.1", 9))
        return str(probe.getsockname()[0])
    except OSError:
        return "127.0.0.1"
    finally:
        probe.close()
