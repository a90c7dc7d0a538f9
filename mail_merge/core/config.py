"""
Configuration constants for the mail merge compiler.
"""


class Config:
    """Central configuration for field syntax, OOXML names and logging."""

    __version__ = "1.0.0"

    # Merge field syntax
    # Field code instruction text looks like " MERGEFIELD FirstName "
    FIELD_DELIMITER = " MERGEFIELD "
    PLACEHOLDER_OPEN = "\u00ab"   # «
    PLACEHOLDER_CLOSE = "\u00bb"  # »

    # WordprocessingML
    W_NAMESPACE = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
    XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
    PAGE_BREAK_TYPE = "page"

    # Package content types and relationships
    DOCUMENT_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"
    TEMPLATE_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.template.main+xml"
    MACRO_DOCUMENT_CONTENT_TYPE = "application/vnd.ms-word.document.macroEnabled.main+xml"
    MACRO_TEMPLATE_CONTENT_TYPE = "application/vnd.ms-word.template.macroEnabledTemplate.main+xml"
    # Template main part type -> document main part type
    TEMPLATE_TO_DOCUMENT_TYPES = {
        TEMPLATE_CONTENT_TYPE: DOCUMENT_CONTENT_TYPE,
        MACRO_TEMPLATE_CONTENT_TYPE: MACRO_DOCUMENT_CONTENT_TYPE,
    }
    CONTENT_TYPES_PART = "[Content_Types].xml"
    CONTENT_TYPES_NAMESPACE = "http://schemas.openxmlformats.org/package/2006/content-types"
    ATTACHED_TEMPLATE_RELTYPE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/attachedTemplate"

    # File handling
    SUPPORTED_DOCX_EXTENSIONS = ['.docx']
    SUPPORTED_TEMPLATE_EXTENSIONS = ['.dotx', '.docx']
    SUPPORTED_CONVERSION_EXTENSIONS = ['.dotx', '.dotm', '.docx', '.docm']
    SUPPORTED_RECORD_EXTENSIONS = ['.csv', '.json']
    TEMP_FILE_PREFIX = "~temp_"
    RECORDS_ENCODING = "utf-8-sig"

    # Logging
    LOGGER_NAME = "mail_merge"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    CONSOLE_LOG_FORMAT = "%(message)s"
    LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def format_placeholder(cls, field_name: str) -> str:
        """Return the display text a merge field renders as before substitution."""
        return f"{cls.PLACEHOLDER_OPEN}{field_name}{cls.PLACEHOLDER_CLOSE}"

    @classmethod
    def w(cls, local_name: str) -> str:
        """Clark-notation tag for a WordprocessingML element or attribute."""
        return f"{{{cls.W_NAMESPACE}}}{local_name}"
