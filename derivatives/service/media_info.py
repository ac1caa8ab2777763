"""
Media metadata and type helpers.

Centralizes ffprobe parsing and extension-based media detection.
"""

import json
import subprocess
from pathlib import Path

from derivatives.service.config import get_ffprobe_binary
from derivatives.service.constants import (
    IMAGE_EXTENSIONS,
    MEDIA_KIND_IMAGE,
    MEDIA_KIND_VIDEO,
    VIDEO_EXTENSIONS,
)


def normalize_extension(extension):
    """Normalize a file extension for comparison."""
    if not extension:
        return ''
    ext = extension.lower()
    if not ext.startswith('.'):
        ext = f'.{ext}'
    return ext


def get_media_kind_from_extension(extension):
    """
    Determine which derivative branch handles a file extension.

    Args:
        extension: File extension (e.g., '.mp4', 'PNG')

    Returns:
        str | None: 'video', 'image', or None when unsupported
    """
    ext = normalize_extension(extension)
    if ext in VIDEO_EXTENSIONS:
        return MEDIA_KIND_VIDEO
    if ext in IMAGE_EXTENSIONS:
        return MEDIA_KIND_IMAGE
    return None


def get_media_kind_from_filename(filename):
    """Classify an original filename by its extension."""
    if not filename:
        return None
    return get_media_kind_from_extension(Path(filename).suffix)


def extract_duration(file_path):
    """
    Extract duration from media file using ffprobe.

    Returns:
        float: Duration in seconds, or None if extraction fails
    """
    try:
        result = subprocess.run(
            [
                get_ffprobe_binary(),
                '-v',
                'quiet',
                '-print_format',
                'json',
                '-show_format',
                str(file_path),
            ],
            capture_output=True,
            text=True,
            check=True,
            timeout=10,
        )
        metadata = json.loads(result.stdout)
        return float(metadata['format']['duration'])
    except (OSError, subprocess.CalledProcessError, subprocess.TimeoutExpired,
            ValueError, KeyError):
        return None
