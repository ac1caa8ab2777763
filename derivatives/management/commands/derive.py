"""
Django management command for generating derivatives from a local file.

This is a thin CLI wrapper around the ingestion service.
"""
import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from derivatives.service.config import get_processed_dir
from derivatives.service.ingest_service import derive_from_file
from derivatives.service.media_info import extract_duration
from derivatives.service.process import ProcessingError, UnsupportedFileType
from derivatives.utils import format_record


class Command(BaseCommand):
    help = 'Generate thumbnails and clips for a local video or image file'

    def add_arguments(self, parser):
        parser.add_argument(
            'input',
            type=str,
            help='Path to a video (.mp4, .mov, .avi) or image (.jpg, .jpeg, .png)'
        )
        parser.add_argument(
            '--outdir',
            type=str,
            default=None,
            help='Output directory (default: INGEST_PROCESSED_DIR)'
        )
        parser.add_argument(
            '--verbose',
            action='store_true',
            help='Enable verbose output'
        )
        parser.add_argument(
            '--json',
            action='store_true',
            help='Output result as JSON'
        )

    def handle(self, *args, **options):
        input_path = Path(options['input'])
        outdir = Path(options['outdir']) if options['outdir'] else get_processed_dir()
        verbose = options['verbose']
        output_json = options['json']

        if not input_path.is_file():
            raise CommandError(f"File not found: {input_path}")

        def logger(message):
            if verbose and not output_json:
                self.stdout.write(message)

        try:
            record = derive_from_file(
                input_path,
                input_path.name,
                outdir,
                logger=logger,
            )
        except UnsupportedFileType:
            raise CommandError(f"Unsupported file type: {input_path.suffix or '(none)'}")
        except ProcessingError as e:
            raise CommandError(f"Processing failed: {e}")

        if output_json:
            result = {'input': str(input_path), 'record': record.to_dict()}
            if record.video_clip:
                result['clip_duration_seconds'] = extract_duration(record.video_clip)
            self.stdout.write(json.dumps(result, indent=2))
        else:
            self.stdout.write(format_record(record))
            self.stdout.write(self.style.SUCCESS('Derivatives created'))
