"""
Wafer classification module: turns a video frame into wafer / no-wafer probabilities.
"""

import cv2
import numpy as np
from typing import Dict, Optional, Sequence, Tuple
import time
import config
from utils import centre_region


def _normalise_label(label: str) -> str:
    return label.strip().lower().replace('_', ' ').replace('-', ' ')


def pick_class_probabilities(scores: Dict[str, float],
                             labels: Sequence[str]) -> Tuple[float, float]:
    """
    Select the (wafer, no wafer) probabilities out of a label -> score map.

    Args:
        scores: Scores keyed by class name
        labels: Target class name followed by the absent class name

    Returns:
        (wafer_prob, no_wafer_prob); a class the model does not report scores 0
    """
    normalised = {_normalise_label(name): float(score) for name, score in scores.items()}
    target, absent = (_normalise_label(label) for label in labels[:2])
    return normalised.get(target, 0.0), normalised.get(absent, 0.0)


class WaferClassifier:
    """
    Classifies frames as wafer / no wafer using one of several backends.
    """

    def __init__(self, detection_method: str = 'basic'):
        """
        Initialize wafer classifier.

        Args:
            detection_method: Backend to use ('yolo', 'huggingface', 'basic')
        """
        self.detection_method = detection_method
        self.model = None
        self.labels = config.WAFER_LABELS

        # Performance tracking
        self.frame_count = 0
        self.error_count = 0
        self.start_time = time.time()

        self._initialize_classifier()

    def _initialize_classifier(self):
        """Initialize the selected backend, falling back to the colour heuristic."""
        try:
            if self.detection_method == 'yolo':
                self._initialize_yolo()
            elif self.detection_method == 'huggingface':
                self._initialize_huggingface()
            elif self.detection_method == 'basic':
                self._initialize_basic()
            else:
                raise ValueError(f"Unsupported detection method: {self.detection_method}")

            print(f"Wafer classifier initialized with method: {self.detection_method}")

        except (ImportError, OSError, ValueError) as e:
            print(f"Error initializing {self.detection_method} classifier: {e}")
            print("Falling back to basic color-based classification...")
            self._initialize_basic()

    def _initialize_yolo(self):
        """Load an Ultralytics classification model trained on wafer / no wafer."""
        try:
            from ultralytics import YOLO
        except ImportError:
            raise ImportError("ultralytics not installed. Run: pip install ultralytics")

        self.model = YOLO(config.WAFER_MODEL_PATH)
        print(f"Loaded YOLO classification model: {config.WAFER_MODEL_PATH}")

    def _initialize_huggingface(self):
        """Load a Hugging Face image-classification pipeline."""
        try:
            from transformers import pipeline
        except ImportError:
            raise ImportError("transformers not installed. Run: pip install transformers torch")

        self.model = pipeline("image-classification", model=config.WAFER_HF_MODEL)
        print(f"Loaded Hugging Face wafer model: {config.WAFER_HF_MODEL}")

    def _initialize_basic(self):
        """Colour coverage of a centred region, for use without trained weights."""
        print("Using basic color-based wafer classification")
        self.detection_method = 'basic'
        self.model = None
        lower, upper = config.WAFER_COLOR_RANGE
        self.color_lower = np.array(lower, dtype=np.uint8)
        self.color_upper = np.array(upper, dtype=np.uint8)

    def classify(self, frame: np.ndarray) -> Optional[Tuple[float, float]]:
        """
        Classify a single frame.

        Args:
            frame: Input frame (BGR format)

        Returns:
            (wafer_prob, no_wafer_prob) or None if inference failed
        """
        self.frame_count += 1

        try:
            if self.detection_method == 'yolo':
                return self._classify_yolo(frame)
            elif self.detection_method == 'huggingface':
                return self._classify_huggingface(frame)
            else:
                return self._classify_basic(frame)

        except Exception as e:
            self.error_count += 1
            print(f"Error in wafer prediction ({self.detection_method}): {e}")
            return None

    def _classify_yolo(self, frame: np.ndarray) -> Tuple[float, float]:
        results = self.model(frame, verbose=False)
        probs = results[0].probs.data.cpu().numpy()
        names = self.model.names
        scores = {names[i]: float(p) for i, p in enumerate(probs)}
        return pick_class_probabilities(scores, self.labels)

    def _classify_huggingface(self, frame: np.ndarray) -> Tuple[float, float]:
        from PIL import Image

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        results = self.model(Image.fromarray(rgb_frame))
        scores = {result['label']: result['score'] for result in results}
        return pick_class_probabilities(scores, self.labels)

    def _classify_basic(self, frame: np.ndarray) -> Tuple[float, float]:
        region = centre_region(frame, config.WAFER_REGION_RATIO)
        hsv = cv2.cvtColor(region, cv2.COLOR_BGR2HSV)
        mask = cv2.inRange(hsv, self.color_lower, self.color_upper)

        coverage = cv2.countNonZero(mask) / float(mask.size)
        wafer_prob = min(1.0, coverage / config.WAFER_BASIC_FULL_COVERAGE)
        return wafer_prob, 1.0 - wafer_prob

    def get_statistics(self) -> Dict:
        """Get classifier statistics."""
        elapsed_time = time.time() - self.start_time

        return {
            'total_frames': self.frame_count,
            'fps': self.frame_count / elapsed_time if elapsed_time > 0 else 0,
            'errors': self.error_count,
            'detection_method': self.detection_method
        }

    def release(self):
        """Release any resources used by the classifier."""
        if hasattr(self.model, 'close'):
            self.model.close()
        print(f"Wafer classifier ({self.detection_method}) released")
