import logging
import os

from django.http import FileResponse, HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from derivatives.service.ingest_service import ingest_upload
from derivatives.service.process import UnsupportedFileType

log = logging.getLogger(__name__)


def _text_response(message, status):
    return HttpResponse(message, status=status, content_type='text/plain; charset=utf-8')


@method_decorator(csrf_exempt, name='dispatch')
class UploadView(View):
    """
    Accept a single file under the 'file' form field and generate derivatives.

    Videos (.mp4, .mov, .avi) get a still-frame thumbnail and a short clip;
    images (.jpg, .jpeg, .png) get a fixed-width thumbnail. The original is
    kept in upload_dir either way.

    Returns:
        200 JSON {message, record}, 400 text for a missing or unsupported
        file, 500 text when a collaborator fails
    """

    http_method_names = ['post']
    upload_dir = None
    processed_dir = None

    def post(self, request):
        uploaded_file = request.FILES.get('file')
        if not uploaded_file:
            return _text_response('No file uploaded', status=400)

        try:
            record = ingest_upload(
                uploaded_file,
                self.upload_dir,
                self.processed_dir,
                logger=log.info,
            )
        except UnsupportedFileType:
            return _text_response('Unsupported file type', status=400)
        except Exception:
            log.exception('Error processing upload %r', uploaded_file.name)
            return _text_response('An error occurred while processing your file.', status=500)

        return JsonResponse({
            'message': 'Upload processed successfully',
            'record': record.to_dict(),
        })


class DownloadView(View):
    """
    Stream back the file at the literal path given in the 'path' parameter.

    Example: /download?path=processed/abcd1234_thumbnail.png

    WARNING: no access control or containment check is applied; any file
    readable by the server process can be fetched. Production deployments
    should retrieve derivatives by id or signed token instead.
    """

    http_method_names = ['get', 'head']

    def get(self, request):
        file_path = request.GET.get('path')
        if not file_path or not os.path.isfile(file_path):
            return _text_response('File not found', status=404)

        return FileResponse(open(os.path.abspath(file_path), 'rb'))
