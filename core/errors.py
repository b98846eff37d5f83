# core/errors.py


class FinanceBotError(Exception):
    """Base class for errors raised inside the bot."""


class AdviceUnavailableError(FinanceBotError):
    """The advice model failed, timed out or produced nothing usable."""


class FeedbackWriteError(FinanceBotError):
    """A feedback record could not be appended to the sink."""


class EmptyAdviceError(AdviceUnavailableError):
    """The advice model answered with nothing usable after normalization."""
