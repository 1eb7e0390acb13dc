"""Camera frame source for live scanning sessions."""

import cv2
import numpy as np
from typing import Optional

from ..utils.log import LoggerMixin
from ..utils.config import settings
from ..utils.error_handler import NoDeviceAvailableError


class CameraCapture(LoggerMixin):
    """Reads raw frames from a local camera; no image processing."""

    def __init__(self, camera_index: Optional[int] = None):
        self.cap = None
        self.camera_index = settings.CAMERA_INDEX if camera_index is None else camera_index
        self.is_initialized = False

    def open(self):
        """
        Open the camera and verify it delivers frames.

        Raises:
            NoDeviceAvailableError: If the device cannot be opened or read
        """
        self.cap = cv2.VideoCapture(self.camera_index)
        if not self.cap.isOpened():
            self.logger.error("Failed to open camera", camera_index=self.camera_index)
            self.release()
            raise NoDeviceAvailableError(
                "No camera available", details={"camera_index": self.camera_index}
            )

        ret, frame = self.cap.read()
        if not ret or frame is None:
            self.logger.error("Failed to capture test frame", camera_index=self.camera_index)
            self.release()
            raise NoDeviceAvailableError(
                "Camera returned no frames", details={"camera_index": self.camera_index}
            )

        self.is_initialized = True
        self.logger.info("Camera initialized successfully",
                         camera_index=self.camera_index,
                         frame_size=f"{frame.shape[1]}x{frame.shape[0]}")

    def read(self) -> Optional[np.ndarray]:
        """Grab the latest frame, or None if the camera hiccups."""
        if not self.is_initialized:
            self.logger.error("Camera not initialized")
            return None

        ret, frame = self.cap.read()
        if not ret:
            self.logger.warning("Frame capture failed")
            return None
        return frame

    def release(self):
        if self.cap is not None:
            self.cap.release()
            self.cap = None
        if self.is_initialized:
            self.logger.info("Camera released")
        self.is_initialized = False

    def __enter__(self) -> "CameraCapture":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
