"""
Lapisan asisten aksesibilitas yang dibangun di atas 'detect_kit'
Accessibility assistant layer built on top of `detect_kit`.

Package ini sengaja dipisah agar post-processing deteksi tetap berada di
dalam 'detect_kit'/ dan lebih berfokus kepada
- zona kedalaman (depth) + keputusan navigasi (STOP / WARN / CLEAR)
- envelope hasil per frame (OK / SKIPPED / FAILED) + generasi reset
- pembatas pengumuman suara (cooldown)
- narasi objek dan total uang
- profil konfigurasi JSON
"""

from __future__ import annotations

from .config import AssistProfile, load_assist_profile
from .depth import NO_READING, DepthReadError, DepthZoneConfig, ZoneAverage, ZoneReading, analyze_zones
from .frame import DepthFrame, FrameResult, FrameStatus, analyze_depth_frame, process_detection_frame
from .narration import RUPEE_CLASS_VALUES, currency_phrase, currency_total, describe_scene
from .navigation import NavigationConfig, NavigationDirective, decide_directive
from .session import AnnouncementConfig, AnnouncementGate, ResetEpoch

__all__ = [
    "AssistProfile",
    "load_assist_profile",
    "NO_READING",
    "DepthReadError",
    "DepthZoneConfig",
    "ZoneAverage",
    "ZoneReading",
    "analyze_zones",
    "DepthFrame",
    "FrameResult",
    "FrameStatus",
    "analyze_depth_frame",
    "process_detection_frame",
    "RUPEE_CLASS_VALUES",
    "currency_phrase",
    "currency_total",
    "describe_scene",
    "NavigationConfig",
    "NavigationDirective",
    "decide_directive",
    "AnnouncementConfig",
    "AnnouncementGate",
    "ResetEpoch",
]
