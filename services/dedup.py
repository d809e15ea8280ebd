class ProcessedTokens:
    """Token addresses already alerted on. Lives as long as the process; never persisted."""

    def __init__(self):
        self._seen = set()

    def has(self, address: str) -> bool:
        return address in self._seen

    def mark_seen(self, address: str):
        self._seen.add(address)

    def __contains__(self, address) -> bool:
        return self.has(address)

    def __len__(self) -> int:
        return len(self._seen)
