from core.errors import FeedbackWriteError
from core.log_config import get_logger
from core.state import IDLE
from executors.base import BaseExecutor, Outcome, TextInput
from services import messages
from services.clock import utc_now
from services.feedback_sink import CsvFeedbackSink, FeedbackRecord

logger = get_logger("feedback_executor")


class FeedbackExecutor(BaseExecutor):
    """
    Persists feedback. Only a successful write returns the conversation to
    idle; on failure the conversation keeps awaiting feedback.
    """

    def __init__(self, sink: CsvFeedbackSink):
        self.sink = sink

    async def execute(self, text_input: TextInput) -> Outcome:
        record = FeedbackRecord(
            conversation_id=text_input.conversation_id,
            feedback=text_input.text,
            timestamp=utc_now(),
        )
        try:
            await self.sink.append(record)
        except FeedbackWriteError:
            logger.warning(f"[FEEDBACK_RETRY] conversation_id={text_input.conversation_id}")
            return Outcome(
                state=text_input.state,
                messages=[messages.feedback_failed(text_input.conversation_id)],
            )

        return Outcome(state=IDLE, messages=[messages.feedback_thanks(text_input.conversation_id)])
