#!/usr/bin/env python3
"""
Main application for real-time wafer eating verification.

Step 1: show the wafer to the camera.
Step 2: bring it to the mouth and hold it there.
Step 3: chew.
"""

import cv2
import argparse
import sys
import time
from typing import Optional
import config
from keypoint_tracker import KeypointTracker
from wafer_classifier import WaferClassifier
from session import EatingSession
from visualizer import Visualizer
from utils import resize_frame, calculate_fps, list_available_cameras


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Real-time wafer eating verification using MediaPipe",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                           # Use default camera (0)
  python main.py --camera 1                # Use camera 1
  python main.py --method yolo --model models/wafer-cls.pt
  python main.py --chew-target 3           # Need 3 chews inside the window
  python main.py --debug                   # Enable debug mode
  python main.py --save_video              # Save processed video
        """
    )

    parser.add_argument(
        '--camera', '-c',
        type=int,
        default=config.CAMERA_INDEX,
        help=f'Camera device index (default: {config.CAMERA_INDEX})'
    )

    parser.add_argument(
        '--list-cameras', '-l',
        action='store_true',
        help='List all available cameras and their properties'
    )

    parser.add_argument(
        '--method', '-m',
        type=str,
        default=config.WAFER_DETECTION_METHOD,
        choices=['yolo', 'huggingface', 'basic'],
        help=f'Wafer classification method (default: {config.WAFER_DETECTION_METHOD})'
    )

    parser.add_argument(
        '--model',
        type=str,
        default=None,
        help='Model path (yolo) or model id (huggingface) for the wafer classifier'
    )

    parser.add_argument(
        '--chew-target',
        type=int,
        default=config.CHEW_TARGET,
        help=f'Chews needed inside the window (default: {config.CHEW_TARGET})'
    )

    parser.add_argument(
        '--window',
        type=float,
        default=config.EAT_WINDOW_MS / 1000,
        help=f'Chew window in seconds (default: {config.EAT_WINDOW_MS / 1000:g})'
    )

    parser.add_argument(
        '--debug', '-d',
        action='store_true',
        help='Enable debug mode with additional visualizations'
    )

    parser.add_argument(
        '--save_video', '-s',
        action='store_true',
        help='Save processed video to file'
    )

    parser.add_argument(
        '--output_path', '-o',
        type=str,
        default=config.OUTPUT_PATH,
        help=f'Output video path (default: {config.OUTPUT_PATH})'
    )

    parser.add_argument(
        '--width', '-W',
        type=int,
        default=config.FRAME_WIDTH,
        help=f'Frame width (default: {config.FRAME_WIDTH})'
    )

    parser.add_argument(
        '--height', '-H',
        type=int,
        default=config.FRAME_HEIGHT,
        help=f'Frame height (default: {config.FRAME_HEIGHT})'
    )

    return parser.parse_args(argv)


def update_config_from_args(args):
    """Update configuration based on command line arguments."""
    config.CAMERA_INDEX = args.camera
    config.WAFER_DETECTION_METHOD = args.method
    if args.model:
        if args.method == 'huggingface':
            config.WAFER_HF_MODEL = args.model
        else:
            config.WAFER_MODEL_PATH = args.model
    config.CHEW_TARGET = args.chew_target
    config.EAT_WINDOW_MS = args.window * 1000
    config.DEBUG_MODE = args.debug
    config.SAVE_VIDEO = args.save_video
    config.OUTPUT_PATH = args.output_path
    config.FRAME_WIDTH = args.width
    config.FRAME_HEIGHT = args.height


def initialize_camera(camera_index: int) -> Optional[cv2.VideoCapture]:
    """
    Open the camera and check that it delivers frames.

    Args:
        camera_index: Camera device index

    Returns:
        VideoCapture object or None if failed
    """
    print(f"Initializing camera {camera_index}...")

    cap = cv2.VideoCapture(camera_index)
    if cap.isOpened():
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, config.FRAME_WIDTH)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, config.FRAME_HEIGHT)
        cap.set(cv2.CAP_PROP_FPS, config.FPS)

        ok, _ = cap.read()
        if ok:
            print(f"Camera {camera_index} initialized successfully")
            print(f"Resolution: {config.FRAME_WIDTH}x{config.FRAME_HEIGHT}")
            return cap

    cap.release()
    print(f"Error: Camera {camera_index} is not available.")

    cameras = list_available_cameras(5)
    if cameras:
        print("Available cameras:")
        for camera in cameras:
            print(f"  Camera {camera['index']}: {camera['width']}x{camera['height']}")
    else:
        print("No cameras found!")
    return None


def initialize_video_writer(output_path: str, frame_width: int, frame_height: int) -> Optional[cv2.VideoWriter]:
    """
    Initialize video writer for saving processed video.

    Args:
        output_path: Output video file path
        frame_width: Frame width
        frame_height: Frame height

    Returns:
        VideoWriter object or None if disabled or failed
    """
    if not config.SAVE_VIDEO:
        return None

    fourcc = cv2.VideoWriter_fourcc(*'mp4v')
    writer = cv2.VideoWriter(output_path, fourcc, config.OUTPUT_FPS, (frame_width, frame_height))

    if not writer.isOpened():
        print(f"Error: Could not create video writer for {output_path}")
        return None

    print(f"Video writer initialized: {output_path}")
    return writer


def process_step(frame, now: float, session: EatingSession, classifier, tracker):
    """
    Run the detectors the current stage needs and advance the session.

    The wafer classifier only runs until the wafer latches; face and hand
    landmarks only run after it.

    Returns:
        (detection_data, state) for the visualizer
    """
    classification = None
    detection_data = {'face': None, 'hand': None}
    if session.wafer_detected:
        detection_data = tracker.process_frame(frame)
    else:
        classification = classifier.classify(frame)

    state = session.process_frame(classification, detection_data['face'],
                                  detection_data['hand'], now)
    return detection_data, state


def print_controls():
    """Print keyboard controls."""
    print("\nControls:")
    print("  'q' or 'ESC': Quit")
    print("  'r': Start a new session")
    print("  'd': Toggle debug mode")
    print("  'k': Toggle keypoint display")
    print("  's': Toggle distance display")
    print("  'f': Toggle FPS display")
    print("  'h': Show this help")
    print()


def handle_keyboard_input(key: int):
    """
    Handle keyboard input for interactive controls.

    Args:
        key: Key code from cv2.waitKey()

    Returns:
        False to quit, 'new_session' to restart, True otherwise
    """
    if key in [ord('q'), 27]:  # 'q' or ESC
        return False

    elif key == ord('r'):
        return 'new_session'

    elif key == ord('d'):
        config.DEBUG_MODE = not config.DEBUG_MODE
        print(f"Debug mode: {'ON' if config.DEBUG_MODE else 'OFF'}")

    elif key == ord('k'):
        config.SHOW_KEYPOINTS = not config.SHOW_KEYPOINTS
        print(f"Keypoint display: {'ON' if config.SHOW_KEYPOINTS else 'OFF'}")

    elif key == ord('s'):
        config.SHOW_DISTANCE = not config.SHOW_DISTANCE
        print(f"Distance display: {'ON' if config.SHOW_DISTANCE else 'OFF'}")

    elif key == ord('f'):
        config.SHOW_FPS = not config.SHOW_FPS
        print(f"FPS display: {'ON' if config.SHOW_FPS else 'OFF'}")

    elif key == ord('h'):
        print_controls()

    return True


def main():
    """Main application function."""
    print("=== Wafer Eating Verification ===")
    print()

    args = parse_arguments()

    if args.list_cameras:
        print("\n=== Available Cameras ===")
        cameras = list_available_cameras()
        if not cameras:
            print("No cameras found!")
        else:
            print(f"\nFound {len(cameras)} camera(s):")
            for camera in cameras:
                print(f"  Camera {camera['index']}: {camera['width']}x{camera['height']} @ {camera['fps']}fps")
        return

    update_config_from_args(args)

    cap = initialize_camera(args.camera)
    if cap is None:
        sys.exit(1)

    print("Initializing components...")
    tracker = KeypointTracker()
    classifier = WaferClassifier(detection_method=config.WAFER_DETECTION_METHOD)
    visualizer = Visualizer()
    session = EatingSession()

    video_writer = initialize_video_writer(args.output_path, args.width, args.height)

    print("System initialized successfully!")
    print_controls()

    frame_count = 0
    start_time = time.monotonic()
    eating_reported = False

    try:
        while True:
            ret, frame = cap.read()
            if not ret:
                print("Error: Could not read frame from camera")
                break

            frame = resize_frame(frame, args.width, args.height)
            now = time.monotonic() * 1000

            detection_data, state = process_step(frame, now, session, classifier, tracker)

            if state['eating_detected'] and not eating_reported:
                eating_reported = True
                print(f"Ritual complete after {state['frame_count']} frames")

            fps = calculate_fps(start_time, frame_count) if frame_count else None
            annotated_frame = visualizer.draw_frame(frame, detection_data, state, fps)

            if config.DEBUG_MODE:
                debug_data = {
                    'Frame': frame_count,
                    'Step': state['step'],
                    'Mouth': state['mouth_state'],
                    'Hold': f"{state['hold_ms']:.0f} ms",
                    'Method': classifier.detection_method
                }
                annotated_frame = visualizer.draw_debug_info(annotated_frame, debug_data)

            if video_writer:
                video_writer.write(annotated_frame)

            cv2.imshow('Wafer Eating Verification', annotated_frame)

            key = cv2.waitKey(1) & 0xFF
            result = handle_keyboard_input(key)

            if result == 'new_session':
                session = EatingSession()
                eating_reported = False
                print("Started a new session")
            elif result is False:
                break

            frame_count += 1

            if frame_count % 100 == 0:
                print(f"Processed {frame_count} frames, FPS: {calculate_fps(start_time, frame_count):.1f}, "
                      f"Step: {state['step']}, Chews in window: {state['chew_count']}")

    except KeyboardInterrupt:
        print("\nInterrupted by user")

    finally:
        print("Cleaning up...")
        cap.release()
        if video_writer:
            video_writer.release()
        cv2.destroyAllWindows()
        tracker.release()
        classifier.release()

        final_stats = session.get_statistics()
        print("\nFinal Statistics:")
        print(f"  Total frames processed: {frame_count}")
        print(f"  Average FPS: {calculate_fps(start_time, frame_count):.1f}")
        print(f"  Wafer detected: {final_stats['wafer_detected']}")
        print(f"  Wafer taken to mouth: {final_stats['wafer_at_mouth']}")
        print(f"  Eating confirmed: {final_stats['eating_detected']}")
        print(f"  Mouth closures: {final_stats['mouth_closures']}")

        if config.SAVE_VIDEO:
            print(f"  Video saved to: {args.output_path}")

        print("Application terminated successfully.")


if __name__ == "__main__":
    main()
