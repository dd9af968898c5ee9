from .upload_handler import UploadHandler
from .download_handler import DownloadHandler

__all__ = [
    'UploadHandler',
    'DownloadHandler',
]
