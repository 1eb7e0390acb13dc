"""Audible and logged feedback when a card has been scanned."""

import sys
import subprocess

from ..core.types import CreditCardModel
from ..utils.log import get_logger

MACOS_SOUND = "/System/Library/Sounds/Glass.aiff"

# status level -> (logger method, message prefix)
_LEVELS = {
    "success": ("info", "SUCCESS"),
    "error": ("error", "ERROR"),
    "warning": ("warning", "WARNING"),
    "info": ("info", "INFO"),
}


class SimpleNotifier:
    """Beeps and logs status messages for scan events."""

    def __init__(self, sound: bool = True):
        self.logger = get_logger(__name__)
        self.sound = sound

    def beep(self) -> bool:
        """Play a short sound; returns False if nothing could be played."""
        if not self.sound:
            return False
        try:
            if sys.platform == "darwin":
                subprocess.run(["afplay", MACOS_SOUND], capture_output=True, check=False)
            else:
                print("\a", end="", flush=True)
            return True
        except (OSError, subprocess.SubprocessError) as e:
            self.logger.debug("Error playing beep", error=str(e))
            return False

    def status_toast(self, message: str, level: str = "info"):
        method, prefix = _LEVELS.get(level, _LEVELS["info"])
        getattr(self.logger, method)(f"{prefix}: {message}")

    def card_scanned(self, model: CreditCardModel) -> bool:
        """Announce a scanned card. The full number never reaches the log."""
        self.status_toast(f"Card scanned: {model}", "success")
        return self.beep()


notifier = SimpleNotifier()
