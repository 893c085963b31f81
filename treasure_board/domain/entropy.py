import secrets


class EntropySource:
    """Supplies one seed per reveal call."""

    def seed(self) -> int:
        raise NotImplementedError


class SystemEntropySource(EntropySource):
    def __init__(self, bits: int = 256):
        self.bits = bits

    def seed(self) -> int:
        return secrets.randbits(self.bits)


class FixedEntropySource(EntropySource):
    """Always returns the same seed. Reveals become reproducible."""

    def __init__(self, value: int):
        self.value = value

    def seed(self) -> int:
        return self.value
