class NamedBloomError(Exception):
    """Base class for namedbloom errors."""


# Container/payload decoding
class ContainerDecodeError(NamedBloomError):
    pass


class CompressionError(NamedBloomError):
    pass


class JsonLineError(NamedBloomError):
    def __init__(self, message: str, line_no: int):
        super().__init__(f"line {line_no}: {message}")
        self.line_no = line_no


class AlignmentError(NamedBloomError):
    pass


# Configuration and name conversion
class ConfigError(NamedBloomError):
    pass


# Input archives
class ArchiveReadError(NamedBloomError):
    pass
