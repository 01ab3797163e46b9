"""
Detection Bridge CLI Entrypoint.

Responsibility:
    Parse command-line arguments, configure the application, wire together
    the input handler, converter and output handler, and run the
    conversion loop over a recorded detections file.

Usage:
    python main.py --input run.json
    python main.py --input run.json --output-mode save_json,save_csv
    python main.py --input run.json --frame-id base_link --output-mode save_image
    python main.py --config my_config.yaml

This module is the executable entry point. It should not be imported
by other modules.
"""

import argparse
import logging
import sys
import time
from dataclasses import replace
from typing import List, Optional

# Configure logging before importing local modules
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("main")

import cv2

from detection_bridge.config import load_config, validate
from detection_bridge.converter import to_detection_2d_array
from detection_bridge.input_handler import InputHandler
from detection_bridge.messages import Header
from detection_bridge.output_handler import OutputHandler


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Detection Bridge — convert detector boxes to Detection2D messages",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--input",
        type=str,
        help="Path to a JSON file of recorded detector output. Overrides config.",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to YAML configuration file.",
    )
    parser.add_argument(
        "--frame-id",
        type=str,
        help="Reference frame for message headers. Overrides config.",
    )
    parser.add_argument(
        "--confidence",
        type=float,
        help="Confidence threshold for raw detector rows (0.0 - 1.0). Overrides config.",
    )
    parser.add_argument(
        "--output-mode",
        type=str,
        help="Output mode(s). Use comma-separated values for multiple outputs: "
             "save_json, save_csv, save_image. Overrides config.",
    )
    parser.add_argument(
        "--output-path",
        type=str,
        help="Path/directory for output artifacts. Overrides config.",
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution loop."""
    args = parse_args(argv)

    # 1. Load Configuration (CLI args > ENV > YAML > Defaults)
    try:
        config = load_config(args.config)

        if args.input is not None:
            config = replace(config, input=replace(config.input, source=args.input))
        if args.frame_id is not None:
            config = replace(
                config, converter=replace(config.converter, frame_id=args.frame_id)
            )
        if args.confidence is not None:
            config = replace(
                config,
                detection=replace(config.detection, confidence_threshold=args.confidence),
            )
        if args.output_mode is not None:
            config = replace(config, output=replace(config.output, mode=args.output_mode))
        if args.output_path is not None:
            config = replace(
                config, output=replace(config.output, save_path=args.output_path)
            )

        # CLI overrides bypass load_config, so check the final state again
        validate(config)
        logger.info("Configuration active for this run.")

    except Exception as e:
        logger.error("Configuration error: %s", e)
        return 1

    # 2. Initialize Components
    try:
        input_handler = InputHandler(
            source=config.input.source,
            converter=config.converter,
            detection=config.detection,
        )
        output_handler = OutputHandler(config)

    except (FileNotFoundError, ValueError, OSError) as e:
        logger.error("Initialization failed: %s", e)
        return 1

    # Recording values sit below explicit CLI flags
    converter = input_handler.converter
    if args.frame_id is not None:
        converter = replace(converter, frame_id=args.frame_id)
    logger.info(
        "Converting %d frames (frame_id=%s, image=%dx%d)",
        len(input_handler), converter.frame_id,
        converter.image_width, converter.image_height,
    )

    # 3. Conversion Loop
    frame_count = 0
    detection_count = 0
    start_time = time.perf_counter()

    try:
        for record in input_handler:
            frame_count += 1

            if record.stamp is not None:
                header = Header(stamp=record.stamp, frame_id=converter.frame_id)
            else:
                header = Header.now(converter.frame_id)

            message = to_detection_2d_array(
                record.detections,
                header,
                converter.image_width,
                converter.image_height,
            )
            detection_count += len(message.detections)

            frame = None
            if record.image_path is not None:
                frame = cv2.imread(record.image_path)
                if frame is None:
                    logger.warning(
                        "Unreadable image for frame %d: %s",
                        record.index, record.image_path,
                    )

            output_handler.process(record.index, message, frame)

            if frame_count % 100 == 0:
                logger.info("Converted %d frames...", frame_count)

        output_handler.finalize()

    except Exception as e:
        logger.exception("Runtime error during conversion: %s", e)
        return 1
    finally:
        elapsed = time.perf_counter() - start_time
        logger.info(
            "Conversion finished. Frames: %d. Detections: %d. Elapsed: %.3fs.",
            frame_count, detection_count, elapsed,
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
