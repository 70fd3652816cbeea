from __future__ import annotations

FOLDER_MIME: str = "application/vnd.google-apps.folder"

GOOGLE_APP_PREFIX: str = "application/vnd.google-apps."


def is_folder(mime_type: str) -> bool:
    return mime_type == FOLDER_MIME


def is_google_app(mime_type: str) -> bool:
    """
    Returns True if the MIME type is a Google 'apps' type (Docs, Sheets, ...).

    These items have no binary content on Drive and therefore no md5Checksum.
    """
    return mime_type.startswith(GOOGLE_APP_PREFIX)


def is_download_disallowed(mime_type: str) -> bool:
    """
    Folders and Google-apps types cannot be fetched via media download;
    export handling is out of scope.
    """
    return is_folder(mime_type) or is_google_app(mime_type)
