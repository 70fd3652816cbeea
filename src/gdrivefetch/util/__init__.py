from .checksum import md5_file, md5_stream
from .log import setup_logging
from .mime import (
    FOLDER_MIME,
    GOOGLE_APP_PREFIX,
    is_download_disallowed,
    is_folder,
    is_google_app,
)

__all__ = [
    "FOLDER_MIME",
    "GOOGLE_APP_PREFIX",
    "is_folder",
    "is_google_app",
    "is_download_disallowed",
    "md5_file",
    "md5_stream",
    "setup_logging",
]
