"""
FindAR CLI entry point.

Usage:
    python -m findar                          # Launch the camera app
    python -m findar --detect photo.jpg       # Run the detector on one image
    python -m findar --help                   # Show help
"""

import argparse
import logging
import os
import sys
from pathlib import Path

import cv2

from .core.config import Config
from .core.detector import ObjectDetector
from .core.errors import DetectionError, FatalSetupError
from .core.recognition import format_detection_text, select_most_confident
from .utils.visualization import draw_banner, draw_detections


def setup_logging(config: Config) -> None:
    """Configure logging based on config."""
    log_config = config["logging"]
    level = getattr(logging, str(log_config.get("level", "INFO")).upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    log_path = config.path("logging.file") if log_config.get("file") else None
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=level,
        format=log_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        handlers=handlers,
        force=True,
    )


def run_image_detection(config: Config, image_path: str, output_path: str | None = None) -> int:
    """
    Run the detector once on a still image.

    Returns:
        Process exit status
    """
    logger = logging.getLogger(__name__)

    try:
        detector = ObjectDetector(config["model"], base_dir=config.config_dir.parent)
    except FatalSetupError as e:
        logger.error(f"Can't load detection model: {e}")
        return 1

    frame = cv2.imread(image_path)
    if frame is None:
        logger.error(f"Failed to read image: {image_path}")
        return 1

    try:
        detections = detector.detect(frame)
    except DetectionError as e:
        logger.error(f"Failed to perform image request: {e}")
        return 1

    for detection in detections:
        logger.info(f"Detection: {detection.to_dict()}")

    most_confident = select_most_confident(detections)
    text = ""
    if most_confident is None:
        logger.info("No objects detected")
    else:
        label = most_confident.top_label
        text = format_detection_text(label.identifier, label.confidence)
        logger.info(f"Most confident: {text}")
        if label.identifier == config.get("recognition.alert_label", "Sharp object"):
            logger.warning(f"Alert object detected: {label.identifier}")

    if output_path:
        annotated = draw_detections(frame, detections)
        annotated = draw_banner(annotated, text, height=config.get("ui.label_height", 50))
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        if not cv2.imwrite(output_path, annotated):
            logger.error(f"Failed to write {output_path}")
            return 1
        logger.info(f"Annotated image saved: {output_path}")

    return 0


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="FindAR - Live Object Finder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m findar                                  Launch the camera app
    python -m findar --camera 1                       Use camera index 1
    python -m findar --detect in.jpg --output out.jpg Annotate a still image
        """,
    )

    parser.add_argument(
        "--detect", metavar="IMAGE", type=str, help="Run detection on an image and exit"
    )
    parser.add_argument(
        "--output", metavar="PATH", type=str, help="Where to save the annotated image (--detect)"
    )
    parser.add_argument(
        "--camera", type=int, help="Camera index to use (overrides config)"
    )
    parser.add_argument(
        "--config", type=str, help="Path to configuration directory"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug mode"
    )

    args = parser.parse_args()

    config_dir = Path(args.config) if args.config else None
    config = Config(config_dir)

    if args.camera is not None:
        os.environ["FINDAR_CAMERA_SOURCE"] = str(args.camera)
        config.reload()

    if args.debug:
        os.environ["FINDAR_ENV"] = "development"
        os.environ["FINDAR_LOGGING_LEVEL"] = "DEBUG"
        config.reload()

    setup_logging(config)

    logger = logging.getLogger(__name__)
    logger.info("FindAR starting...")
    logger.info(f"Environment: {config.env}")

    if args.detect:
        sys.exit(run_image_detection(config, args.detect, args.output))

    from .mobile.app import run_mobile_app

    run_mobile_app(config)


if __name__ == "__main__":
    main()
