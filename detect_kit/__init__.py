"""
Lightweight, reusable detection post-processing helpers.

Designed to be runtime-agnostic: works on the flat float buffers (plus shape)
emitted by TFLite/ONNX style interpreters, converted to NumPy. No external
dependencies beyond NumPy, and OpenCV for input resizing.
"""

from .types import Box, Detection
from .errors import UnsupportedTensorShapeError
from .geometry import iou, iou_one_to_many, boxes_to_array
from .decode import DecoderConfig, TensorDecoder, TensorLayout, decode, resolve_layout
from .nms import ResolverConfig, resolve
from .postprocess import CURRENCY_PRESET, OBJECT_PRESET, DetectionPostprocessor, PostprocessConfig
from .preprocess import resize_to_input, to_float_tensor, to_quantized_tensor

__all__ = [
    "Box",
    "Detection",
    "UnsupportedTensorShapeError",
    "iou",
    "iou_one_to_many",
    "boxes_to_array",
    "DecoderConfig",
    "TensorDecoder",
    "TensorLayout",
    "decode",
    "resolve_layout",
    "ResolverConfig",
    "resolve",
    "CURRENCY_PRESET",
    "OBJECT_PRESET",
    "DetectionPostprocessor",
    "PostprocessConfig",
    "resize_to_input",
    "to_float_tensor",
    "to_quantized_tensor",
]
