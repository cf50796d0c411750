"""
Live frame source: OpenCV camera + MediaPipe Tasks gesture recognizer.
"""
import logging
import time
from typing import Optional

import cv2
import mediapipe as mp
import numpy as np
from mediapipe.tasks import python as mp_tasks
from mediapipe.tasks.python import vision
from mediapipe.tasks.python.components import processors

from .config import CameraConfig, DetectorConfig
from .errors import FrameSourceError
from .types import FrameObservation, GestureCandidate

logger = logging.getLogger(__name__)


class GestureRecognizerSource:
    """
    Reads webcam frames and runs the MediaPipe gesture recognizer on each.

    Frames are analysed unmirrored; the control-point extractor handles the
    mirroring of the preview.
    """

    def __init__(self, camera: CameraConfig, detector: DetectorConfig):
        """
        Open the camera and load the recognizer model.

        Args:
            camera: Camera settings
            detector: Recognizer settings

        Raises:
            FrameSourceError: if the camera cannot be opened or the model fails to load
        """
        self.cap = cv2.VideoCapture(camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, camera.fps)

        if not self.cap.isOpened():
            raise FrameSourceError(f"Failed to open camera {camera.index}")

        options = vision.GestureRecognizerOptions(
            base_options=mp_tasks.BaseOptions(model_asset_path=detector.model_path),
            running_mode=vision.RunningMode.VIDEO,
            num_hands=detector.num_hands,
            min_hand_detection_confidence=detector.min_detection_confidence,
            min_tracking_confidence=detector.min_tracking_confidence,
            canned_gesture_classifier_options=processors.ClassifierOptions(
                score_threshold=detector.min_gesture_score
            )
        )
        try:
            self.recognizer = vision.GestureRecognizer.create_from_options(options)
        except (RuntimeError, ValueError, FileNotFoundError) as e:
            self.cap.release()
            raise FrameSourceError(f"Failed to load gesture model {detector.model_path}: {e}") from e

        self.last_frame: Optional[np.ndarray] = None
        self._last_timestamp_ms = 0
        logger.info(f"Gesture recognizer ready (camera {camera.index}, model {detector.model_path})")

    def read(self) -> Optional[FrameObservation]:
        """
        Grab one frame and run recognition on it.

        Returns:
            FrameObservation (empty when no hand is visible), or None if no frame was read
        """
        ok, frame_bgr = self.cap.read()
        if not ok:
            return None
        self.last_frame = frame_bgr

        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)

        # VIDEO mode requires strictly increasing timestamps
        timestamp_ms = int(time.monotonic() * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms

        result = self.recognizer.recognize_for_video(image, timestamp_ms)

        if not result.hand_landmarks:
            return FrameObservation()

        landmarks = [(lm.x, lm.y) for lm in result.hand_landmarks[0]]
        gestures = []
        if result.gestures:
            gestures = [
                GestureCandidate(label=category.category_name, score=float(category.score))
                for category in result.gestures[0]
            ]
        return FrameObservation(landmarks=landmarks, gestures=gestures)

    def close(self) -> None:
        """Release the camera and the recognizer."""
        if self.cap is not None:
            self.cap.release()
            self.cap = None
        if self.recognizer is not None:
            self.recognizer.close()
            self.recognizer = None
        logger.info("Gesture recognizer closed")
