"""Custom exceptions for docprops."""


class DocPropsError(Exception):
    """Base exception for document property extraction errors."""

    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class UsageError(DocPropsError):
    """Exception raised when a public operation receives invalid arguments."""

    def __init__(self, message: str = "Incorrect parameters.", details: str = None):
        super().__init__(message, details)


class ArchiveError(DocPropsError):
    """Exception raised when the container cannot be opened or read."""

    def __init__(
        self,
        message: str = "Could not read archive",
        source: str = None,
        details: str = None,
    ):
        self.source = source
        super().__init__(message, details)


class XmlParseError(DocPropsError):
    """Exception raised when a document part is not well-formed XML."""

    def __init__(self, part_name: str, details: str = None):
        self.part_name = part_name
        super().__init__(f"Could not parse {part_name}", details)


class CustomPropertyQueryError(DocPropsError):
    """Exception raised when a custom property lookup cannot be evaluated."""

    def __init__(self, ms_name: str, details: str = None):
        self.ms_name = ms_name
        super().__init__(f"Custom property query failed for '{ms_name}'", details)


class ConfigurationError(DocPropsError):
    """Exception raised for invalid mapping tables or configuration files."""

    def __init__(self, message: str = "Configuration error", details: str = None):
        super().__init__(message, details)
