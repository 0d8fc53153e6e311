"""Exceptions raised by the file-handling side of the forge."""


class ForgeError(Exception):
    pass


class UnsupportedFileError(ForgeError):
    """Input file has a suffix the loader does not dispatch."""


class ExtractionError(ForgeError):
    """Raw text could not be extracted from a .docx manuscript."""


class SessionStateError(ForgeError):
    """Session operation called from the wrong status."""
