from .page_invalidator import HttpPageInvalidator, LoggingPageInvalidator

__all__ = ["HttpPageInvalidator", "LoggingPageInvalidator"]
