"""
URL configuration for uploadservice project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.0/topics/http/urls/
"""

from django.urls import path

from derivatives.service.config import get_processed_dir, get_upload_dir
from derivatives.views import DownloadView, UploadView

urlpatterns = [
    path(
        'upload',
        UploadView.as_view(upload_dir=get_upload_dir(), processed_dir=get_processed_dir()),
        name='upload',
    ),
    path('download', DownloadView.as_view(), name='download'),
]
