"""
Configuration adapter for derivative generation settings.

Centralizes access to Django settings and environment variables,
ensuring consistent configuration across the CLI and the web app.
"""
from pathlib import Path

from django.conf import settings


def get_upload_dir():
    """Get the directory where original uploads are stored"""
    return Path(settings.INGEST_UPLOAD_DIR)


def get_processed_dir():
    """Get the directory where derivatives are written"""
    return Path(settings.INGEST_PROCESSED_DIR)


def get_thumbnail_timestamp():
    """
    Get the position of the video still frame.

    Returns:
        float: Offset into the video in seconds
    """
    return settings.INGEST_THUMBNAIL_TIMESTAMP


def get_clip_duration():
    """
    Get the length of the trimmed video clip.

    Returns:
        float: Clip length in seconds, starting at 0
    """
    return settings.INGEST_CLIP_DURATION


def get_thumbnail_width():
    """Get the target width of image thumbnails in pixels"""
    return settings.INGEST_THUMBNAIL_WIDTH


def get_ffmpeg_binary():
    """Get the ffmpeg executable name or path"""
    return settings.INGEST_FFMPEG_BINARY


def get_ffprobe_binary():
    """Get the ffprobe executable name or path"""
    return settings.INGEST_FFPROBE_BINARY


def get_port():
    """Get the port the development server listens on"""
    return settings.PORT


def ensure_directories():
    """
    Create the upload and processed directories if they are missing.

    Returns:
        tuple[Path, Path]: (upload_dir, processed_dir)
    """
    upload_dir = get_upload_dir()
    processed_dir = get_processed_dir()
    upload_dir.mkdir(parents=True, exist_ok=True)
    processed_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir, processed_dir
