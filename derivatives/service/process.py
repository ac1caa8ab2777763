"""
Derivative generation collaborators.

Wraps the ffmpeg binary for video stills and clips, and Pillow for image
thumbnails. Every function either returns the written output path or raises
ProcessingError.
"""
from pathlib import Path
import subprocess

from PIL import Image, UnidentifiedImageError

from derivatives.service.config import get_ffmpeg_binary

# Image modes the PNG encoder can write directly
PNG_MODES = ('1', 'L', 'LA', 'I', 'P', 'RGB', 'RGBA')


class ProcessingError(Exception):
    """Raised when a collaborator fails to produce a derivative"""

    pass


class UnsupportedFileType(Exception):
    """Raised when an upload's extension matches neither the video nor image set"""

    pass


def _run_ffmpeg(args, log):
    """
    Run ffmpeg with the given arguments.

    Raises:
        ProcessingError: If ffmpeg is missing or exits non-zero
    """
    cmd = [get_ffmpeg_binary(), '-hide_banner', '-loglevel', 'error'] + args

    log(f"Running: {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True
        )
    except FileNotFoundError as e:
        raise ProcessingError(f"ffmpeg not available: {e}") from e

    if result.returncode != 0:
        log(f"ffmpeg stderr: {result.stderr}")
        raise ProcessingError(f"ffmpeg failed with code {result.returncode}")

    return result


def extract_frame(input_path, output_path, timestamp=5, logger=None):
    """
    Write a single still frame of a video as a PNG.

    Args:
        input_path: Path to the source video
        output_path: Path for the PNG frame
        timestamp: Offset of the frame in seconds
        logger: Optional callable(str) for logging

    Returns:
        Path to the written frame

    Raises:
        ProcessingError: If ffmpeg fails or the video ends before the timestamp
    """
    def log(message):
        if logger:
            logger(message)

    input_path = Path(input_path)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    log(f"Taking screenshot of {input_path} at {timestamp}s")

    _run_ffmpeg([
        '-ss', str(timestamp),
        '-i', str(input_path),
        '-frames:v', '1',
        '-an',
        '-y',  # Overwrite output file
        str(output_path)
    ], log)

    # ffmpeg exits cleanly without writing anything when seeking past the end
    if not output_path.exists() or output_path.stat().st_size == 0:
        raise ProcessingError(f"No frame available at {timestamp}s in {input_path}")

    log('Screenshot taken.')
    return output_path


def trim_clip(input_path, output_path, start=0, duration=5, logger=None):
    """
    Cut the [start, start + duration) section of a video into a new MP4.

    Args:
        input_path: Path to the source video
        output_path: Path for the clip
        start: Clip start in seconds
        duration: Clip length in seconds
        logger: Optional callable(str) for logging

    Returns:
        Path to the written clip

    Raises:
        ProcessingError: If ffmpeg fails
    """
    def log(message):
        if logger:
            logger(message)

    input_path = Path(input_path)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    log(f"Creating {duration}-second clip of {input_path} from {start}s")

    _run_ffmpeg([
        '-ss', str(start),
        '-i', str(input_path),
        '-t', str(duration),
        '-y',
        str(output_path)
    ], log)

    if not output_path.exists() or output_path.stat().st_size == 0:
        raise ProcessingError(f"ffmpeg wrote no clip for {input_path}")

    log(f'{duration}-second clip created.')
    return output_path


def scaled_height(width, height, target_width):
    """
    Compute the height that keeps the aspect ratio at a new width.

    Returns:
        int: Rounded height, never below 1
    """
    return max(1, round(height * target_width / width))


def resize_to_width(input_path, output_path, width=200, logger=None):
    """
    Resize an image to a fixed width, preserving aspect ratio, and save as PNG.

    Args:
        input_path: Path to the source image
        output_path: Path for the PNG thumbnail
        width: Target width in pixels
        logger: Optional callable(str) for logging

    Returns:
        Path to the written thumbnail

    Raises:
        ProcessingError: If the image cannot be decoded or written
    """
    def log(message):
        if logger:
            logger(message)

    input_path = Path(input_path)
    output_path = Path(output_path)

    log(f"Resizing {input_path} to width {width}")

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with Image.open(input_path) as img:
            img.load()
            height = scaled_height(img.width, img.height, width)
            if img.mode not in PNG_MODES:
                img = img.convert('RGB')
            thumbnail = img.resize((width, height), Image.Resampling.LANCZOS)
            thumbnail.save(output_path, 'PNG')
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        log(f"Thumbnail creation failed: {e}")
        raise ProcessingError(f"Could not create thumbnail for {input_path}: {e}") from e

    log(f"Thumbnail created: {output_path} ({width}x{height})")
    return output_path
