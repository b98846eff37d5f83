# services/feedback_sink.py
import asyncio
import csv
import os
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from config import FEEDBACK_CSV_PATH
from core.errors import FeedbackWriteError
from core.events import ConversationId
from core.log_config import get_logger

logger = get_logger("feedback_sink")

FIELDNAMES = ["Chat ID", "Feedback", "Timestamp"]


class FeedbackRecord(BaseModel):
    conversation_id: ConversationId
    feedback: str
    timestamp: datetime


class CsvFeedbackSink:
    """
    Append-only CSV file of feedback records.
    The header row is written when the file is first created.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path or FEEDBACK_CSV_PATH
        self._lock = asyncio.Lock()

    def _append(self, record: FeedbackRecord) -> None:
        is_new = not os.path.exists(self.path) or os.path.getsize(self.path) == 0
        with open(self.path, "a", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
            if is_new:
                writer.writeheader()
            writer.writerow(
                {
                    "Chat ID": record.conversation_id,
                    "Feedback": record.feedback,
                    "Timestamp": record.timestamp.isoformat(),
                }
            )

    async def append(self, record: FeedbackRecord) -> None:
        """Write one record. Raises FeedbackWriteError when the file cannot be written."""
        # Writes from different conversations share one file
        async with self._lock:
            try:
                await asyncio.to_thread(self._append, record)
            except OSError as e:
                logger.exception("[FEEDBACK_WRITE_ERROR] path=%s", self.path)
                raise FeedbackWriteError(str(e)) from e

        logger.info(f"[FEEDBACK_SAVED] conversation_id={record.conversation_id}, length={len(record.feedback)}")
