"""
Main application: camera-driven HUD pointer in an OpenCV window.
"""
import logging
from typing import Optional

import cv2
import numpy as np

from .config import Cfg, load_config
from .errors import HudPointerError
from .hud import (
    GESTURE_LIBRARY,
    cursor_position,
    gesture_banner,
    reactor_dynamics,
    reactor_state,
    status_caption,
    tilt,
)
from .landmarks import HAND_CONNECTIONS, to_pixels
from .loop import TickLoop
from .pipeline import TickPipeline
from .sources import PointerFallback
from .types import AppMode, FrameObservation, NO_GESTURE, TickOutput

logger = logging.getLogger(__name__)

# Keyboard stand-ins for the chat backend's mode changes
MODE_KEYS = {
    ord('i'): AppMode.IDLE,
    ord('l'): AppMode.LISTENING,
    ord('p'): AppMode.PROCESSING,
    ord('s'): AppMode.SPEAKING,
    ord('a'): AppMode.ANALYZING,
}

# BGR
REACTOR_COLORS = {
    "idle": (212, 182, 6),
    "active": (249, 232, 103),
    "processing": (249, 121, 232),
    "speaking": (255, 255, 255),
}
CYAN = (212, 182, 6)
FUCHSIA = (249, 121, 232)
WHITE = (255, 255, 255)


class HudWindow:
    """OpenCV overlay that renders one TickOutput per tick."""

    def __init__(self, app: "HudApp"):
        self.app = app
        self.cfg = app.config
        self.window_name = self.cfg.display.window_name
        self.viewport_wh = (self.cfg.camera.width, self.cfg.camera.height)
        self.frame: Optional[np.ndarray] = None
        self.observation: Optional[FrameObservation] = None
        self._spin_deg = 0.0

        cv2.namedWindow(self.window_name)
        cv2.setMouseCallback(self.window_name, self._on_mouse)

    async def present(self, output: TickOutput) -> None:
        canvas = self._background()
        self.viewport_wh = (canvas.shape[1], canvas.shape[0])

        if self.cfg.display.show_landmarks and self.observation is not None:
            self._draw_hand(canvas, self.observation)
        self._draw_reactor(canvas, output)
        if self.cfg.display.show_cursor:
            self._draw_cursor(canvas, output)
        self._draw_gesture_list(canvas, output.confirmed_gesture)
        self._draw_status(canvas, output)

        cv2.imshow(self.window_name, canvas)
        self._handle_key(cv2.waitKey(1) & 0xFF)

    def close(self) -> None:
        cv2.destroyAllWindows()

    def _background(self) -> np.ndarray:
        if self.frame is None:
            width, height = self.cfg.camera.width, self.cfg.camera.height
            return np.zeros((height, width, 3), dtype=np.uint8)
        # Mirror the preview to match the mirrored control point
        frame = cv2.flip(self.frame, 1)
        # Dim the feed so the overlay stays readable
        return cv2.addWeighted(frame, 0.5, np.zeros_like(frame), 0.5, 0)

    def _mirror(self, point):
        return (1.0 - point[0], point[1])

    def _draw_hand(self, canvas: np.ndarray, observation: FrameObservation) -> None:
        if not observation.has_subject:
            return
        pts = [to_pixels(self._mirror(p), self.viewport_wh) for p in observation.landmarks]
        for start, end in HAND_CONNECTIONS:
            if start < len(pts) and end < len(pts):
                cv2.line(canvas, pts[start], pts[end], CYAN, 1)
        for px, py in pts:
            cv2.circle(canvas, (px, py), 3, WHITE, -1)

    def _draw_reactor(self, canvas: np.ndarray, output: TickOutput) -> None:
        width, height = self.viewport_wh
        state = reactor_state(output.effective_mode)
        dynamics = reactor_dynamics(output.engagement_distance, self.cfg.display.interaction_radius)
        pose = tilt(output.smoothed)
        color = REACTOR_COLORS[state]

        # Tilt shifts the reactor slightly toward the pointer
        center = (int(width / 2 + pose.rotate_y_deg * 2), int(height / 2 - pose.rotate_x_deg * 2))
        radius = int(min(width, height) * 0.15 * dynamics.scale * pose.scale)

        self._spin_deg = (self._spin_deg + 6.0 / dynamics.spin_multiplier) % 360
        cv2.circle(canvas, center, radius, color, 1)
        cv2.ellipse(canvas, center, (int(radius * 0.8), int(radius * 0.8)), self._spin_deg, 0, 270, color, 2)
        cv2.circle(canvas, center, int(radius * 0.3), color, -1 if state == "speaking" else 2)

    def _draw_cursor(self, canvas: np.ndarray, output: TickOutput) -> None:
        cx, cy = cursor_position(output.smoothed, self.viewport_wh)
        color = FUCHSIA if output.tracking else CYAN
        cv2.circle(canvas, (cx, cy), 12, color, 2)
        cv2.line(canvas, (cx - 18, cy), (cx + 18, cy), color, 1)
        cv2.line(canvas, (cx, cy - 18), (cx, cy + 18), color, 1)

        banner = gesture_banner(output.confirmed_gesture)
        if banner and output.tracking:
            cv2.putText(canvas, banner, (cx + 24, cy + 5), cv2.FONT_HERSHEY_SIMPLEX, 0.5, FUCHSIA, 1)

    def _draw_gesture_list(self, canvas: np.ndarray, confirmed: str) -> None:
        x = self.viewport_wh[0] - 220
        cv2.putText(canvas, "GESTURE LIBRARY", (x, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.45, CYAN, 1)
        for row, (label, action) in enumerate(GESTURE_LIBRARY.items(), start=1):
            color = FUCHSIA if label == confirmed else CYAN
            cv2.putText(canvas, f"{action:<10} {label}", (x, 30 + row * 22),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.45, color, 1)

    def _draw_status(self, canvas: np.ndarray, output: TickOutput) -> None:
        height = self.viewport_wh[1]
        cv2.putText(canvas, f"MODE: {output.effective_mode.value}", (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, WHITE, 2)
        tracking_text = "GESTURE: ACTIVE" if output.tracking else "GESTURE: STANDBY (mouse)"
        cv2.putText(canvas, tracking_text, (10, 55), cv2.FONT_HERSHEY_SIMPLEX, 0.5, WHITE, 1)
        if output.confirmed_gesture != NO_GESTURE:
            cv2.putText(canvas, f"CONFIRMED: {output.confirmed_gesture}", (10, 80),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.5, FUCHSIA, 1)

        caption = status_caption(output.effective_mode)
        if caption:
            cv2.putText(canvas, caption, (10, height - 50), cv2.FONT_HERSHEY_SIMPLEX, 0.6, FUCHSIA, 2)
        cv2.putText(canvas, "i/l/p/s/a = mode  c = camera  q = quit", (10, height - 20),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, WHITE, 1)

    def _on_mouse(self, event, x, y, flags, param) -> None:
        if event == cv2.EVENT_MOUSEMOVE:
            self.app.fallback.move_to_pixels(x, y, self.viewport_wh)

    def _handle_key(self, key: int) -> None:
        if key == ord('q'):
            self.app.quit()
        elif key == ord('c'):
            self.app.toggle_camera()
        elif key in MODE_KEYS:
            self.app.app_mode = MODE_KEYS[key]
            logger.info(f"Application mode: {self.app.app_mode.value}")


class _RecordingSource:
    """Frame source wrapper that shares each observation with the window."""

    def __init__(self, source, window: HudWindow):
        self.source = source
        self.window = window

    def read(self) -> Optional[FrameObservation]:
        observation = self.source.read()
        self.window.observation = observation
        self.window.frame = self.source.last_frame
        return observation

    def close(self) -> None:
        self.source.close()
        self.window.observation = None
        self.window.frame = None


class HudApp:
    """Main application class for the HUD pointer."""

    def __init__(self, config_path: Optional[str] = None, use_camera: bool = True,
                 config: Optional[Cfg] = None):
        """Initialize the application with configuration."""
        self.config = config or load_config(config_path)
        self.camera_enabled = use_camera
        self.app_mode = AppMode.IDLE
        self.fallback = PointerFallback()
        self.window = HudWindow(self)
        self.loop: Optional[TickLoop] = None
        self._quit = False

    async def run(self):
        """Run ticks until the user quits; camera toggles restart the loop."""
        print(f"Starting {self.config.display.window_name}")
        print("Open palm = analyze, closed fist = idle, mouse drives the pointer without a hand")
        print("Press 'q' to quit")

        pipeline: Optional[TickPipeline] = None
        try:
            while not self._quit:
                pipeline = self._new_pipeline(pipeline)
                self.loop = TickLoop(
                    pipeline,
                    self.window,
                    frame_source=self._open_camera(),
                    tick_hz=self.config.loop.tick_hz,
                    app_mode=lambda: self.app_mode
                )
                await self.loop.run()
        finally:
            if self.loop is not None:
                self.loop.stop()
            self.window.close()

    def quit(self) -> None:
        self._quit = True
        if self.loop is not None:
            self.loop.stop()

    def toggle_camera(self) -> None:
        """Enable or disable tracking; the running loop stops and releases the camera."""
        self.camera_enabled = not self.camera_enabled
        logger.info(f"Camera {'enabled' if self.camera_enabled else 'disabled'}")
        if self.loop is not None:
            self.loop.stop()

    def _new_pipeline(self, previous: Optional[TickPipeline]) -> TickPipeline:
        pipeline = TickPipeline.from_config(self.config, fallback=self.fallback)
        if previous is not None:
            # Carry the pointer over so a camera toggle does not snap it to centre
            pipeline.smoother.reset(previous.state.smoothed)
        return pipeline

    def _open_camera(self) -> Optional[_RecordingSource]:
        if not self.camera_enabled:
            return None
        # Imported here so the app still runs without the camera extra
        from .detector import GestureRecognizerSource
        try:
            source = GestureRecognizerSource(self.config.camera, self.config.detector)
        except HudPointerError as e:
            logger.warning(f"Camera unavailable, falling back to mouse: {e}")
            self.camera_enabled = False
            return None
        return _RecordingSource(source, self.window)


if __name__ == "__main__":
    from .cli import cli
    cli()
