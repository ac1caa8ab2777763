"""
Main ingestion service entrypoint.

Stores an uploaded file, classifies it by extension and generates its
derivatives. Used by both the upload view and the CLI.
"""
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from derivatives.service.config import (
    get_clip_duration,
    get_thumbnail_timestamp,
    get_thumbnail_width,
)
from derivatives.service.constants import (
    CLIP_SUFFIX,
    MEDIA_KIND_IMAGE,
    MEDIA_KIND_VIDEO,
    THUMBNAIL_SUFFIX,
)
from derivatives.service.media_info import get_media_kind_from_filename
from derivatives.service.process import (
    UnsupportedFileType,
    extract_frame,
    resize_to_width,
    trim_clip,
)
from derivatives.utils import generate_base_name


@dataclass
class StoredUpload:
    """An uploaded original as written to the upload directory"""
    path: Path
    base_name: str
    original_name: str


@dataclass
class DerivativeRecord:
    """Paths produced for one upload; unset fields serialize as null"""
    video_thumbnail: Optional[str] = None
    image_thumbnail: Optional[str] = None
    video_clip: Optional[str] = None
    full_video_file: Optional[str] = None
    full_image_file: Optional[str] = None

    def to_dict(self):
        return asdict(self)


def classify_extension(filename):
    """
    Classify an upload by the extension of its original filename.

    Returns:
        str | None: 'video', 'image', or None when unsupported
    """
    return get_media_kind_from_filename(filename)


def store_upload(uploaded_file, upload_dir):
    """
    Write an uploaded file into the upload directory under a fresh base name.

    Args:
        uploaded_file: Django UploadedFile
        upload_dir: Directory for originals

    Returns:
        StoredUpload
    """
    upload_dir = Path(upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)

    base_name = generate_base_name()
    path = upload_dir / base_name

    with open(path, 'wb') as f:
        for chunk in uploaded_file.chunks():
            f.write(chunk)

    return StoredUpload(path=path, base_name=base_name, original_name=uploaded_file.name or '')


def derive_video(source_path, base_name, processed_dir, record, logger=None):
    """
    Generate the video thumbnail, then the clip, in that order.

    A failure in either step raises ProcessingError; a thumbnail written
    before a failed clip step is left in place.
    """
    processed_dir = Path(processed_dir)
    thumbnail_path = processed_dir / f'{base_name}{THUMBNAIL_SUFFIX}'
    clip_path = processed_dir / f'{base_name}{CLIP_SUFFIX}'

    extract_frame(source_path, thumbnail_path, timestamp=get_thumbnail_timestamp(), logger=logger)
    trim_clip(source_path, clip_path, start=0, duration=get_clip_duration(), logger=logger)

    record.video_thumbnail = str(thumbnail_path)
    record.video_clip = str(clip_path)
    record.full_video_file = str(source_path)
    return record


def derive_image(source_path, base_name, processed_dir, record, logger=None):
    """Generate the fixed-width image thumbnail."""
    thumbnail_path = Path(processed_dir) / f'{base_name}{THUMBNAIL_SUFFIX}'

    resize_to_width(source_path, thumbnail_path, width=get_thumbnail_width(), logger=logger)

    record.image_thumbnail = str(thumbnail_path)
    record.full_image_file = str(source_path)
    return record


def derive_from_file(source_path, original_name, processed_dir, base_name=None, logger=None):
    """
    Generate derivatives for a stored original.

    This is the main entrypoint for the ingestion service. It handles:
    - Classification by the original filename's extension
    - Video: still frame at the thumbnail timestamp, then a clip from 0s
    - Image: resize to the thumbnail width
    - Logging the resulting record

    Args:
        source_path: Path to the stored original
        original_name: Client-supplied filename, used only for its extension
        processed_dir: Directory for derivatives
        base_name: Prefix for derivative names (default: generated)
        logger: Optional callable(str) for logging

    Returns:
        DerivativeRecord

    Raises:
        UnsupportedFileType: If the extension is in neither accepted set
        ProcessingError: If a collaborator fails
    """
    def log(message):
        if logger:
            logger(message)

    kind = classify_extension(original_name)
    if kind is None:
        raise UnsupportedFileType(f"Unsupported file type: {original_name!r}")

    base_name = base_name or generate_base_name()
    log(f"Processing {original_name} as {kind} (base name {base_name})")

    record = DerivativeRecord()
    if kind == MEDIA_KIND_VIDEO:
        derive_video(source_path, base_name, processed_dir, record, logger=logger)
    elif kind == MEDIA_KIND_IMAGE:
        derive_image(source_path, base_name, processed_dir, record, logger=logger)

    # Stand-in for saving the record to a database
    log(f"Saved record: {record.to_dict()}")

    return record


def ingest_upload(uploaded_file, upload_dir, processed_dir, logger=None):
    """
    Store an uploaded file and generate its derivatives.

    The stored original is kept on disk whether or not processing succeeds.

    Returns:
        DerivativeRecord
    """
    stored = store_upload(uploaded_file, upload_dir)
    if logger:
        logger(f"Stored upload {stored.original_name!r} at {stored.path}")

    return derive_from_file(
        stored.path,
        stored.original_name,
        processed_dir,
        base_name=stored.base_name,
        logger=logger,
    )
