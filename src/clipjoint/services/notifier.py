import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Transient user feedback ("Copied", "Clip limit reached", ...)."""

    @abstractmethod
    def show(self, message: str) -> None:
        pass


class LoggingNotifier(Notifier):

    def show(self, message: str) -> None:
        logger.info(message)


class RumpsNotifier(Notifier):
    """Posts notices through the macOS notification center."""

    def __init__(self, title: str = "ClipJoint"):
        self.title = title

    def show(self, message: str) -> None:
        import rumps

        logger.debug("Notice: %s", message)
        try:
            rumps.notification(self.title, "", message, sound=False)
        except RuntimeError as e:
            # Raised when the interpreter is not running inside an app bundle.
            logger.warning(f"Notification unavailable ({e}); {message}")
