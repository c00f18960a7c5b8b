"""Fetch status widget: StatusIndicator."""

from textual.widgets import Static

from model import FetchStatus


class StatusIndicator(Static):
    """Icon + word for the last fetch outcome."""

    LABELS = {
        FetchStatus.READY: "✓ Ready",
        FetchStatus.BUSY: "⟳ Busy",
        FetchStatus.FAILED: "✗ Failed",
    }

    def __init__(self, **kwargs) -> None:
        super().__init__(self.LABELS[FetchStatus.READY], **kwargs)
        self.status = FetchStatus.READY

    def show(self, status: FetchStatus) -> None:
        self.status = status
        for other in FetchStatus:
            self.remove_class(f"status-{other.value}")
        self.add_class(f"status-{status.value}")
        self.update(self.LABELS[status])
