"""schemaseq error types.

All custom exceptions inherit from SchemaSeqError to allow
catching any schemaseq-specific error.
"""


class SchemaSeqError(Exception):
    """Base exception for all schemaseq errors."""

    pass


class ConfigurationError(SchemaSeqError):
    """Invalid configuration."""

    pass


class StorageError(SchemaSeqError):
    """Version store creation, query, or write failed."""

    def __init__(self, message: str, version: int | None = None) -> None:
        super().__init__(message)
        self.version = version


class MigrationError(SchemaSeqError):
    """A migration body failed.

    ``version`` is set when the sequencer was applying a numbered step;
    ``statement_index`` is set when a batch statement inside a step failed.
    """

    def __init__(
        self,
        message: str,
        version: int | None = None,
        statement_index: int | None = None,
    ) -> None:
        super().__init__(message)
        self.version = version
        self.statement_index = statement_index
