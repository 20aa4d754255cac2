"""A byte buffer that wipes its memory whenever it shrinks, moves or dies."""

from __future__ import annotations

from typing import BinaryIO, Union

BytesLike = Union[bytes, bytearray, memoryview]


def _next_power_of_two(n: int) -> int:
    """Smallest power of two that is greater than or equal to ``n`` (1 for 0)."""
    return 1 if n <= 1 else 1 << (n - 1).bit_length()


class CryptoVec:
    """A growable byte buffer holding secrets.

    Memory is zeroed on ``clear()``, on truncating ``resize()``, on every
    reallocation and when the buffer is garbage collected, so that no stale
    copies of the contents are left behind.
    """

    __slots__ = ("_buf", "_size")

    def __init__(self, data: BytesLike | str = b"") -> None:
        self._buf = bytearray()
        self._size = 0
        if isinstance(data, str):
            data = data.encode("utf-8")
        if len(data):
            self.extend(data)

    @classmethod
    def new_zeroed(cls, size: int) -> "CryptoVec":
        """Create a buffer holding ``size`` zero bytes."""
        if size < 0:
            raise ValueError("size must not be negative")
        vec = cls()
        vec._buf = bytearray(_next_power_of_two(size))
        vec._size = size
        return vec

    @classmethod
    def with_capacity(cls, capacity: int) -> "CryptoVec":
        """Create an empty buffer with room for at least ``capacity`` bytes."""
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        vec = cls()
        vec._buf = bytearray(_next_power_of_two(capacity))
        return vec

    @classmethod
    def from_slice(cls, s: BytesLike) -> "CryptoVec":
        """Create a buffer holding a copy of ``s``."""
        vec = cls()
        vec.resize(len(s))
        vec._buf[: len(s)] = s
        return vec

    @property
    def capacity(self) -> int:
        """Number of bytes allocated."""
        return len(self._buf)

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __bytes__(self) -> bytes:
        return bytes(self._view())

    def _view(self) -> memoryview:
        return memoryview(self._buf)[: self._size]

    def __getitem__(self, index: int | slice) -> int | bytes:
        if isinstance(index, slice):
            return bytes(self._view()[index])
        return self._view()[index]

    def __setitem__(self, index: int | slice, value) -> None:
        view = self._view()
        if isinstance(index, slice):
            view[index] = bytes(value)
        else:
            view[index] = value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CryptoVec):
            return self._view() == other._view()
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self._view() == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"CryptoVec(size={self._size}, capacity={self.capacity})"

    def __del__(self) -> None:
        buf = getattr(self, "_buf", None)
        if buf:
            buf[:] = bytes(len(buf))

    def copy(self) -> "CryptoVec":
        """Return an independent copy of this buffer."""
        vec = CryptoVec()
        vec.extend(self._view())
        return vec

    def is_empty(self) -> bool:
        """Return True if the buffer holds no bytes."""
        return self._size == 0

    def resize(self, size: int) -> None:
        """Resize the buffer, padding with zeros and wiping any discarded bytes."""
        if size < 0:
            raise ValueError("size must not be negative")
        if self._size < size <= self.capacity:
            self._size = size
        elif size <= self._size:
            self._buf[size : self._size] = bytes(self._size - size)
            self._size = size
        else:
            old = self._buf
            new = bytearray(_next_power_of_two(size))
            new[: self._size] = old[: self._size]
            old[: self._size] = bytes(self._size)
            self._buf = new
            self._size = size

    def clear(self) -> None:
        """Empty the buffer, keeping its memory and wiping the contents."""
        self.resize(0)

    def push(self, s: int) -> None:
        """Append one byte."""
        if not 0 <= s <= 0xFF:
            raise ValueError("byte must be in range(0, 256)")
        size = self._size
        self.resize(size + 1)
        self._buf[size] = s

    def push_u32_be(self, s: int) -> None:
        """Append a big-endian 32-bit unsigned integer."""
        self.extend(s.to_bytes(4, "big"))

    def read_u32_be(self, i: int) -> int:
        """Read a big-endian 32-bit unsigned integer starting at offset ``i``."""
        if i < 0 or i + 4 > self._size:
            raise IndexError("u32 read out of range")
        return int.from_bytes(self._buf[i : i + 4], "big")

    def read(self, n_bytes: int, r: BinaryIO) -> int:
        """Read up to ``n_bytes`` from ``r`` and append them; return the count read."""
        cur = self._size
        self.resize(cur + n_bytes)
        target = memoryview(self._buf)[cur : cur + n_bytes]
        try:
            readinto = getattr(r, "readinto", None)
            if readinto is not None:
                n = readinto(target) or 0
            else:
                chunk = r.read(n_bytes) or b""
                n = len(chunk)
                target[:n] = chunk
        except BaseException:
            self.resize(cur)
            raise
        self.resize(cur + n)
        return n

    def write_all_from(self, offset: int, w: BinaryIO) -> int:
        """Write the bytes from ``offset`` onward to ``w``; return what ``w.write`` did."""
        if not 0 <= offset < self._size:
            raise IndexError("offset out of range")
        return w.write(bytes(self._view()[offset:]))

    def resize_mut(self, n: int) -> memoryview:
        """Grow by ``n`` zero bytes and return a writable view of them."""
        size = self._size
        self.resize(size + n)
        return memoryview(self._buf)[size : size + n]

    def extend(self, s: BytesLike) -> None:
        """Append the bytes of ``s``."""
        data = memoryview(s).cast("B") if not isinstance(s, (bytes, bytearray)) else s
        size = self._size
        self.resize(size + len(data))
        self._buf[size : size + len(data)] = data

    def write(self, buf: BytesLike) -> int:
        """File-like write: append ``buf`` and return its length."""
        self.extend(buf)
        return len(buf)

    def flush(self) -> None:
        """File-like flush: nothing is buffered; wipe the spare capacity."""
        spare = len(self._buf) - self._size
        if spare:
            self._buf[self._size :] = bytes(spare)