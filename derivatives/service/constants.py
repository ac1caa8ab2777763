"""
Media format constants.

Centralized definitions of accepted upload extensions and derivative names.
"""

# Uploads handled by the video branch
VIDEO_EXTENSIONS = ['.mp4', '.mov', '.avi']

# Uploads handled by the image branch
IMAGE_EXTENSIONS = ['.jpg', '.jpeg', '.png']

MEDIA_KIND_VIDEO = 'video'
MEDIA_KIND_IMAGE = 'image'

# Derivative filename suffixes, appended to the upload's base name
THUMBNAIL_SUFFIX = '_thumbnail.png'
CLIP_SUFFIX = '_clip.mp4'

# Alphabet for generated base names
BASE_NAME_ALPHABET = '0123456789abcdef'
BASE_NAME_SIZE = 32
