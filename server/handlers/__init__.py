from .download_handler import DownloadHandler
from .upload_handler import UploadHandler

__all__ = [
    'DownloadHandler',
    'UploadHandler',
]
