"""
Tests for service/ingest_service.py

Collaborators are mocked; see tests/test_e2e.py for runs against real ffmpeg.
"""
import io
from pathlib import Path
from unittest.mock import patch
import tempfile

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase
from PIL import Image

from derivatives.service.ingest_service import (
    DerivativeRecord,
    classify_extension,
    derive_from_file,
    ingest_upload,
    store_upload,
)
from derivatives.service.process import ProcessingError, UnsupportedFileType


def write_output(input_path, output_path, **kwargs):
    Path(output_path).write_bytes(b'derivative')
    return Path(output_path)


class DerivativeRecordTest(SimpleTestCase):

    def test_empty_record_serializes_nulls(self):
        self.assertEqual(DerivativeRecord().to_dict(), {
            'video_thumbnail': None,
            'image_thumbnail': None,
            'video_clip': None,
            'full_video_file': None,
            'full_image_file': None,
        })

    def test_classify_extension(self):
        self.assertEqual(classify_extension('clip.MOV'), 'video')
        self.assertEqual(classify_extension('photo.jpeg'), 'image')
        self.assertIsNone(classify_extension('notes.txt'))


class StoreUploadTest(SimpleTestCase):

    def test_store_upload_writes_bytes_under_base_name(self):
        upload = SimpleUploadedFile('clip.mp4', b'0123456789')

        with tempfile.TemporaryDirectory() as temp_dir:
            stored = store_upload(upload, Path(temp_dir) / 'uploads')

            self.assertEqual(stored.original_name, 'clip.mp4')
            self.assertEqual(stored.path.name, stored.base_name)
            self.assertEqual(stored.path.read_bytes(), b'0123456789')

    def test_store_upload_base_names_are_unique(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            first = store_upload(SimpleUploadedFile('a.png', b'a'), temp_dir)
            second = store_upload(SimpleUploadedFile('a.png', b'b'), temp_dir)

        self.assertNotEqual(first.base_name, second.base_name)


class DeriveFromFileTest(SimpleTestCase):
    """Tests for the classification and derivative workflow"""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.temp_dir = Path(self._tmp.name)
        self.processed_dir = self.temp_dir / 'processed'
        self.processed_dir.mkdir()
        self.source = self.temp_dir / 'abc123'
        self.source.write_bytes(b'original')

    def tearDown(self):
        self._tmp.cleanup()

    @patch('derivatives.service.ingest_service.trim_clip', side_effect=write_output)
    @patch('derivatives.service.ingest_service.extract_frame', side_effect=write_output)
    def test_video_record(self, mock_frame, mock_clip):
        """Test that a video populates only the video fields"""
        record = derive_from_file(self.source, 'clip.mp4', self.processed_dir, base_name='abc123')

        self.assertEqual(record.video_thumbnail, str(self.processed_dir / 'abc123_thumbnail.png'))
        self.assertEqual(record.video_clip, str(self.processed_dir / 'abc123_clip.mp4'))
        self.assertEqual(record.full_video_file, str(self.source))
        self.assertIsNone(record.image_thumbnail)
        self.assertIsNone(record.full_image_file)

        self.assertEqual(mock_frame.call_args.kwargs['timestamp'], 5)
        self.assertEqual(mock_clip.call_args.kwargs['start'], 0)
        self.assertEqual(mock_clip.call_args.kwargs['duration'], 5)

    def test_video_steps_run_in_order(self):
        """Test that the thumbnail is taken before the clip is cut"""
        calls = []

        def frame(*args, **kwargs):
            calls.append('frame')

        def clip(*args, **kwargs):
            calls.append('clip')

        with patch('derivatives.service.ingest_service.extract_frame', side_effect=frame), \
                patch('derivatives.service.ingest_service.trim_clip', side_effect=clip):
            derive_from_file(self.source, 'clip.avi', self.processed_dir)

        self.assertEqual(calls, ['frame', 'clip'])

    @patch('derivatives.service.ingest_service.trim_clip')
    @patch('derivatives.service.ingest_service.extract_frame')
    def test_thumbnail_failure_skips_clip(self, mock_frame, mock_clip):
        mock_frame.side_effect = ProcessingError('too short')

        with self.assertRaises(ProcessingError):
            derive_from_file(self.source, 'clip.mp4', self.processed_dir)

        mock_clip.assert_not_called()

    @patch('derivatives.service.ingest_service.trim_clip')
    @patch('derivatives.service.ingest_service.extract_frame', side_effect=write_output)
    def test_clip_failure_leaves_thumbnail(self, mock_frame, mock_clip):
        """Test that a thumbnail written before a failed clip step stays on disk"""
        mock_clip.side_effect = ProcessingError('encoder failed')

        with self.assertRaises(ProcessingError):
            derive_from_file(self.source, 'clip.mp4', self.processed_dir, base_name='abc123')

        self.assertTrue((self.processed_dir / 'abc123_thumbnail.png').exists())
        self.assertTrue(self.source.exists())

    @patch('derivatives.service.ingest_service.resize_to_width', side_effect=write_output)
    def test_image_record(self, mock_resize):
        """Test that an image populates only the image fields"""
        record = derive_from_file(self.source, 'PHOTO.JPG', self.processed_dir, base_name='abc123')

        self.assertEqual(record.image_thumbnail, str(self.processed_dir / 'abc123_thumbnail.png'))
        self.assertEqual(record.full_image_file, str(self.source))
        self.assertIsNone(record.video_thumbnail)
        self.assertIsNone(record.video_clip)
        self.assertIsNone(record.full_video_file)
        self.assertEqual(mock_resize.call_args.kwargs['width'], 200)

    @patch('derivatives.service.ingest_service.resize_to_width')
    @patch('derivatives.service.ingest_service.trim_clip')
    @patch('derivatives.service.ingest_service.extract_frame')
    def test_unsupported_extension(self, mock_frame, mock_clip, mock_resize):
        """Test that unknown extensions raise without touching collaborators"""
        for name in ['notes.txt', 'movie.mkv', 'noextension']:
            with self.assertRaises(UnsupportedFileType):
                derive_from_file(self.source, name, self.processed_dir)

        mock_frame.assert_not_called()
        mock_clip.assert_not_called()
        mock_resize.assert_not_called()
        self.assertEqual(list(self.processed_dir.iterdir()), [])

    @patch('derivatives.service.ingest_service.resize_to_width', side_effect=write_output)
    def test_record_is_logged(self, mock_resize):
        messages = []

        derive_from_file(self.source, 'photo.png', self.processed_dir, logger=messages.append)

        self.assertTrue(any(m.startswith('Saved record: ') for m in messages))


class IngestUploadTest(SimpleTestCase):
    """Tests for storing and processing an upload in one step"""

    def test_ingest_image_upload(self):
        """Test a real image upload end to end through Pillow"""
        buffer = io.BytesIO()
        Image.new('RGB', (1000, 800), 'green').save(buffer, 'PNG')
        buffer.seek(0)
        upload = SimpleUploadedFile('photo.png', buffer.read(), content_type='image/png')

        with tempfile.TemporaryDirectory() as temp_dir:
            upload_dir = Path(temp_dir) / 'uploads'
            processed_dir = Path(temp_dir) / 'processed'

            record = ingest_upload(upload, upload_dir, processed_dir)

            self.assertTrue(Path(record.full_image_file).is_file())
            self.assertEqual(Path(record.full_image_file).parent, upload_dir)
            with Image.open(record.image_thumbnail) as thumb:
                self.assertEqual(thumb.size, (200, 160))

    def test_unsupported_upload_keeps_original(self):
        upload = SimpleUploadedFile('notes.txt', b'hello')

        with tempfile.TemporaryDirectory() as temp_dir:
            upload_dir = Path(temp_dir) / 'uploads'
            processed_dir = Path(temp_dir) / 'processed'
            processed_dir.mkdir()

            with self.assertRaises(UnsupportedFileType):
                ingest_upload(upload, upload_dir, processed_dir)

            stored = list(upload_dir.iterdir())
            self.assertEqual(len(stored), 1)
            self.assertEqual(stored[0].read_bytes(), b'hello')
            self.assertEqual(list(processed_dir.iterdir()), [])
