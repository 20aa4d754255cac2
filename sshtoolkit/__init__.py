"""Zeroing byte buffers, SSH client config lookup and proxy-capable asyncio streams."""

__version__ = "0.1.0"
__all__ = ["cryptovec", "config", "proxy"]