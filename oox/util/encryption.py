import io

import olefile

# streams of an ECMA-376 encrypted package inside its OLE wrapper
_ENCRYPTION_STREAMS = ("EncryptionInfo", "EncryptedPackage", "DataSpaces")


def _has_ole_encryption_stream(ole: olefile.OleFileIO) -> bool:
    for stream in _ENCRYPTION_STREAMS:
        if ole.exists(stream):
            return True
    return False


def is_ooxml_encrypted(file_like: io.BytesIO) -> bool:
    """A password-protected .docx/.pptx is an OLE compound file, not a ZIP."""
    file_like.seek(0)
    if olefile.isOleFile(file_like):
        file_like.seek(0)
        with olefile.OleFileIO(file_like) as ole:
            encrypted = _has_ole_encryption_stream(ole)
        file_like.seek(0)
        return encrypted
    file_like.seek(0)
    return False
