from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Sequence

from detect_kit.types import Detection


# Currency model label order is alphabetical: 10, 100, 20, 200, 50, 500.
RUPEE_CLASS_VALUES = (10, 100, 20, 200, 50, 500)

LEFT_EDGE = 0.33
RIGHT_EDGE = 0.66


def describe_scene(
    detections: Iterable[Detection],
    class_names: Mapping[int, str],
    *,
    frame_width: float = 640.0,
) -> str:
    """
    Spoken summary grouped by horizontal position, e.g.
    "Left: chair. Center: person, dog. Right: door."
    """

    if frame_width <= 0:
        raise ValueError("frame_width must be > 0")

    ordered = sorted(detections, key=lambda d: d.box.center[0])
    if not ordered:
        return "Nothing detected."

    groups: Dict[str, List[str]] = {"Left": [], "Center": [], "Right": []}
    for det in ordered:
        cx = det.box.center[0]
        label = class_names.get(det.class_id, "Unknown")
        if cx < frame_width * LEFT_EDGE:
            groups["Left"].append(label)
        elif cx > frame_width * RIGHT_EDGE:
            groups["Right"].append(label)
        else:
            groups["Center"].append(label)

    parts = [f"{name}: {', '.join(labels)}." for name, labels in groups.items() if labels]
    return " ".join(parts)


def currency_total(detections: Iterable[Detection], class_values: Sequence[int] = RUPEE_CLASS_VALUES) -> int:
    total = 0
    for det in detections:
        if not (0 <= det.class_id < len(class_values)):
            raise ValueError(f"No denomination for class id {det.class_id}")
        total += int(class_values[det.class_id])
    return total


def currency_phrase(total: int) -> str:
    return f"Total amount is {total} rupees"
