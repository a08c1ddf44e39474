"""
Exceptions raised by the compressors.
"""


class CompressionError(Exception):
    """Raised when a file could not be compressed.

    The message is the reason reported back to the client.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
