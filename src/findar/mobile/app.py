"""
FindAR Kivy Application - Live object finder.

Main entry point for the Kivy-based mobile/desktop application.
"""

import logging
import os
import platform as sys_platform

# Prevent Kivy from consuming command-line arguments
os.environ["KIVY_NO_ARGS"] = "1"

from kivy.app import App
from kivy.clock import Clock
from kivy.core.window import Window
from kivy.logger import Logger
from kivy.utils import platform as kivy_platform

from ..core.alert import AlertPlayer, configure_audio_session
from ..core.camera import Camera
from ..core.capture import CaptureSession
from ..core.config import Config
from ..core.pipeline import FramePipeline, open_capture_session, run_or_exit
from ..core.recognition import ALERT_LABEL, UPDATE_INTERVAL, RecognitionHandler
from .screens.main_screen import MainScreen

logger = logging.getLogger(__name__)


def run_on_main_thread(callback) -> None:
    """Queue `callback` on the Kivy main thread (FIFO)."""
    Clock.schedule_once(lambda dt: callback(), 0)


class FindARApp(App):
    """
    Main FindAR Kivy application.

    Coordinates:
    - Camera capture (via CaptureSession, frames on the videoQueue thread)
    - Inference and result handoff (via FramePipeline)
    - Overlay and banner updates (via RecognitionHandler on the main thread)
    - Alert sound (via AlertPlayer)
    """

    def __init__(self, app_config: Config | None = None, **kwargs):
        """
        Initialize the FindAR app.

        Args:
            app_config: Optional Config object. If not provided, loads from default location.
        """
        super().__init__(**kwargs)

        if app_config is None:
            app_config = Config()
        self.app_config = app_config

        self.platform_type = self._detect_platform()

        # Components (initialized in build())
        self.pipeline = FramePipeline(dispatch=run_on_main_thread)
        self.session: CaptureSession | None = None
        self.alert_player: AlertPlayer | None = None
        self.main_screen: MainScreen | None = None

        Logger.info(f"FindAR: Initialized on {sys_platform.system()} ({self.platform_type})")

    def _detect_platform(self) -> str:
        """Detect current platform type."""
        if kivy_platform in ("android", "ios"):
            return kivy_platform
        return "desktop"

    def build(self):
        """Build the screen and run the one-shot setup steps."""
        if self.platform_type == "desktop":
            Window.size = (720, 1280)
            self.title = "FindAR"

        ui_config = self.app_config["ui"]
        self.main_screen = MainScreen(
            box_color=tuple(ui_config.get("box_color", [1.0, 0.0, 0.0, 1.0])),
            box_line_width=ui_config.get("box_width", 2),
        )

        self.setup_camera_live_view()
        self.setup_vision()
        self.setup_detection_label()
        self.setup_audio_player()

        recognition_config = self.app_config["recognition"]
        handler = RecognitionHandler(
            overlay=self.main_screen,
            alert=self.alert_player,
            alert_label=recognition_config.get("alert_label", ALERT_LABEL),
            update_interval=recognition_config.get("update_interval", UPDATE_INTERVAL),
        )
        self.pipeline.on_results = handler.handle

        return self.main_screen

    def setup_camera_live_view(self) -> None:
        """
        Open the camera and wire it to the preview and frame callback.

        Raises:
            CameraUnavailableError: If no camera can be opened.
        """
        self.pipeline.preview = self.main_screen.update_preview
        self.session = open_capture_session(
            Camera(self.app_config["camera"]), self.pipeline.capture_output
        )
        Logger.info("FindAR: Camera session configured")

    def setup_vision(self) -> None:
        """
        Load the detection model into the pipeline's single request.

        Raises:
            ModelLoadError: If the model is missing or unloadable.
        """
        self.pipeline.load_model(
            self.app_config["model"], base_dir=self.app_config.config_dir.parent
        )
        Logger.info("FindAR: Detection model ready")

    def setup_detection_label(self) -> None:
        """Dock the detection banner to the top of the screen."""
        ui_config = self.app_config["ui"]
        self.main_screen.add_detection_label(
            height=ui_config.get("label_height", 50),
            top_inset=ui_config.get("top_inset", 0),
        )

    def setup_audio_player(self) -> None:
        """Prepare the alert sound. Failures only disable the alert."""
        audio_config = self.app_config["audio"]
        if not configure_audio_session(audio_config.get("backend")):
            return

        sound_path = self.app_config.path("audio.sound_file", "assets/sound.mp3")
        player = AlertPlayer(sound_path, volume=audio_config.get("volume", 1.0))
        if player.setup():
            self.alert_player = player
        else:
            Logger.warning("FindAR: Alert sound disabled")

    def on_start(self):
        """Called when the application starts."""
        Logger.info("FindAR: Application starting")
        if self.session is not None:
            self.session.start_running()

    def on_stop(self):
        """Called when the application stops."""
        Logger.info("FindAR: Application stopping")

        self.release_session()

        if self.alert_player is not None:
            self.alert_player.release()

        Logger.info("FindAR: Application stopped")

    def release_session(self) -> None:
        """Stop frame delivery and release the camera, if it was opened."""
        if self.session is not None:
            self.session.stop_running()
            self.session = None


def run_mobile_app(config: Config | None = None) -> None:
    """
    Run the FindAR mobile/desktop Kivy application.

    Exits the process if the camera or the detection model is unavailable.

    Args:
        config: Optional Config object.
    """
    app = FindARApp(app_config=config)
    run_or_exit(app.run, cleanup=app.release_session)
