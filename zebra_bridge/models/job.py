"""
Print Job Model
===============

A raw payload submitted over HTTP, consumed once by the dispatcher.
"""

import uuid
from datetime import datetime
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class PrintJob:
    """Print job payload and state."""

    payload: bytes = b""

    # Identification
    id: str = field(default_factory=lambda: f"JOB-{str(uuid.uuid4())[:8].upper()}")

    # Status
    status: str = "pending"  # pending, printing, completed, failed
    error_message: Optional[str] = None

    # Timestamps
    created_at: datetime = field(default_factory=datetime.now)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    # Source
    source_ip: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.payload)

    @property
    def duration(self) -> Optional[float]:
        """Seconds between start and completion."""
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def start(self):
        """Mark job as started."""
        self.status = "printing"
        self.started_at = datetime.now()

    def complete(self):
        """Mark job as completed."""
        self.status = "completed"
        self.completed_at = datetime.now()

    def fail(self, error: str):
        """Mark job as failed."""
        self.status = "failed"
        self.completed_at = datetime.now()
        self.error_message = error
