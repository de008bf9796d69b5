import logging
import time

from cdp_batch_editor.commands import CommandDispatcher
from cdp_batch_editor.session.service import SessionService

logger = logging.getLogger(__name__)


class BatchEditorApp:
    def __init__(self, session_service: SessionService, dispatcher: CommandDispatcher):
        self.session_service = session_service
        self.dispatcher = dispatcher
        self._started_at = None

    def run(self) -> bool:
        """Opens the session and runs the selected action. Returns False when the session cannot be opened."""
        self._started_at = time.perf_counter()
        logger.info("Running %s", self.session_service.arguments.describe())

        if not self.session_service.open():
            logger.warning("Session could not be opened, nothing to do")
            return False

        self.dispatcher.invoke()
        return True

    def stop(self) -> None:
        self.session_service.close_and_save()
        if self._started_at is not None:
            elapsed = time.perf_counter() - self._started_at
            logger.info("Command executed in %.3f s", elapsed)
