from typing import Tuple, Union

import numpy as np


def resize_to_input(image: np.ndarray, input_size: Union[int, Tuple[int, int]] = 640) -> np.ndarray:
    """
    Stretch-resize an (H, W, 3) image to the model input size (no letterbox padding).

    Aspect ratio is not preserved, matching how the detectors were exported.
    """

    try:
        import cv2  # type: ignore
    except Exception as e:  # pragma: no cover
        raise ImportError("OpenCV is required for resize_to_input(). Install with `pip install opencv-python`.") from e

    if image is None or not hasattr(image, "shape"):
        raise TypeError("image must be a NumPy array.")
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected image shape (H, W, 3), got {getattr(image, 'shape', None)}")

    if isinstance(input_size, int):
        input_size = (input_size, input_size)
    new_w, new_h = input_size
    if new_w <= 0 or new_h <= 0:
        raise ValueError("input_size must be > 0")

    h, w = image.shape[:2]
    if (w, h) == (new_w, new_h):
        return image
    return cv2.resize(image, (new_w, new_h), interpolation=cv2.INTER_LINEAR)


def to_float_tensor(image_rgb: np.ndarray) -> np.ndarray:
    """
    RGB uint8 (H, W, 3) -> float32 NHWC blob (1, H, W, 3) scaled to [0, 1].
    """

    if image_rgb.ndim != 3 or image_rgb.shape[2] != 3:
        raise ValueError(f"Expected image shape (H, W, 3), got {image_rgb.shape}")
    blob = image_rgb.astype(np.float32) / 255.0
    return blob[None, ...]


def to_quantized_tensor(
    image_rgb: np.ndarray,
    scale: float,
    zero_point: int,
    dtype: type = np.uint8,
) -> np.ndarray:
    """
    Pack RGB pixels for a quantized model input: q = (p / 255) / scale + zero_point.

    Values are truncated toward zero and wrapped to a single byte, so callers
    get the exact bytes a quantized interpreter expects. `dtype` picks the
    uint8 or int8 view of those bytes.
    """

    if scale <= 0:
        raise ValueError("scale must be > 0")
    if dtype not in (np.uint8, np.int8):
        raise ValueError("dtype must be np.uint8 or np.int8")

    q = to_float_tensor(image_rgb).astype(np.float64) / float(scale) + float(zero_point)
    wrapped = (np.trunc(q).astype(np.int64) & 0xFF).astype(np.uint8)
    if dtype is np.int8:
        return wrapped.view(np.int8)
    return wrapped
