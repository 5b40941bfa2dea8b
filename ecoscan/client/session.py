from ecoscan.client.adapter import RequestAdapter
from ecoscan.orchestrator.contracts import ScanResult
from ecoscan.orchestrator.errors import NoImageError


class ScanSession:
    """In-memory scan history for one session, most recent first.

    Nothing is persisted; the history goes away with the object. Concurrent
    scans each prepend their own result when they finish, so order follows
    completion rather than submission.
    """

    def __init__(self, adapter: RequestAdapter):
        self.adapter = adapter
        self.status = adapter.status
        self._history: list[ScanResult] = []
        self.current: ScanResult | None = None

    async def scan(self, image: str | None) -> ScanResult:
        if not image:
            err = NoImageError()
            self.status.log(f"session [{err.code}]: no image selected, nothing sent")
            raise err
        result = await self.adapter.request_analysis(image)
        self._history.insert(0, result)
        self.current = result
        return result

    @property
    def history(self) -> tuple[ScanResult, ...]:
        return tuple(self._history)

    def select(self, result_id: str) -> ScanResult:
        """Make an earlier result the current one (history view → results view)."""
        for r in self._history:
            if r.id == result_id:
                self.current = r
                return r
        raise KeyError(result_id)

    def __len__(self):
        return len(self._history)
