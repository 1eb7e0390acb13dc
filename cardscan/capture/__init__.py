"""Capture package for camera frame sources."""

from .camera import CameraCapture

__all__ = ["CameraCapture"]
