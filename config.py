"""
Configuration settings for the wafer eating verification system.
"""

# Camera settings
CAMERA_INDEX = 0
FRAME_WIDTH = 640
FRAME_HEIGHT = 480
FPS = 30

# MediaPipe settings
HANDS_MAX_NUM = 1  # Single hand is enough for the wafer hold
FACE_DETECTION_CONFIDENCE = 0.5
HAND_DETECTION_CONFIDENCE = 0.5
HAND_MODEL_COMPLEXITY = 1
FACE_REFINE_LANDMARKS = True

# Wafer classifier settings
WAFER_DETECTION_METHOD = 'basic'  # Options: 'yolo', 'huggingface', 'basic'
WAFER_MODEL_PATH = "models/wafer-cls.pt"  # Ultralytics classification weights
WAFER_HF_MODEL = "wafer-classifier"  # Hugging Face image-classification model id
WAFER_LABELS = ('wafer', 'no wafer')  # Target class first
WAFER_COLOR_RANGE = ([10, 40, 90], [30, 200, 255])  # Tan/golden wafer in HSV
WAFER_REGION_RATIO = 0.5  # Centre region inspected by the basic method
WAFER_BASIC_FULL_COVERAGE = 0.35  # Colour coverage treated as certain wafer

# Wafer presence gate
WAFER_ACCEPT_THRESHOLD = 0.8  # wafer probability must exceed this
WAFER_REQUIRED_FRAMES = 2  # consecutive accepting frames needed
PROBABILITY_LOG_INTERVAL = 30  # frames between debug probability prints

# Wafer-to-mouth hold (both tips inside the band around the lips)
CONTACT_REQUIRED_MS = 100  # hold time (ms)
TOUCH_MIN_PX = 1  # inner radius of acceptable band
TOUCH_MAX_PX = 60  # outer radius of acceptable band

# Chew detection
OPEN_THRESHOLD = 0.08  # mouth open threshold (ratio)
CLOSE_THRESHOLD = 0.04  # mouth close threshold (ratio; lower than OPEN_THRESHOLD)

# Eating confirmation
EAT_WINDOW_MS = 8000  # sliding window for chew events
CHEW_TARGET = 1  # chews needed inside the window

# Keypoint indices for MediaPipe
HAND_KEYPOINTS = {
    'thumb_tip': 4,
    'index_tip': 8,
}

FACE_KEYPOINTS = {
    'upper_lip': 13,
    'lower_lip': 14,
    'mouth_left': 61,
    'mouth_right': 291,
}

# Inner lip ring (468-point Face Mesh) used for the lip centre
LIP_INDICES = [
    # inner upper
    78, 191, 80, 81, 82, 13, 312, 311, 310,
    # inner lower
    178, 88, 95, 402, 318, 324, 308,
]

# Visual settings
COLORS = {
    'hand': (0, 255, 0),  # Green
    'face': (255, 0, 0),  # Blue
    'lip_center': (0, 0, 255),  # Red
    'prompt': (77, 210, 255),  # Amber
    'pass': (142, 255, 124),  # Light green
    'complete': (166, 255, 0),  # Teal
    'fail': (80, 80, 255),  # Soft red
    'text': (255, 255, 255),  # White
    'background': (0, 0, 0)  # Black
}

# Drawing settings
LINE_THICKNESS = 2
CIRCLE_RADIUS = 5
TEXT_SCALE = 0.6
TEXT_THICKNESS = 2

# Debug settings
DEBUG_MODE = False
SHOW_FPS = True
SHOW_DISTANCE = True
SHOW_KEYPOINTS = True

# Output settings
SAVE_VIDEO = False
OUTPUT_PATH = "output.mp4"
OUTPUT_FPS = 30
