"""User-facing message text for import/export feedback."""

SELECT_FILE_FAILED = "Failed to select file"
NO_FILE_SELECTED = "Please select a valid configuration backup file"
CONFIG_CORRUPTED = "Configuration file is corrupted or incorrectly formatted"

IMPORT_SUCCESS = "Configuration imported successfully"
IMPORT_PARTIAL_SUCCESS = (
    "Configuration imported, but syncing the current provider failed. "
    "Please re-select the provider manually."
)
IMPORT_FAILED = "Failed to import configuration: {message}"
IMPORT_CANCELLED = "Import was cancelled"

NO_SAVE_PATH = "Please select where to save the configuration backup"
CONFIG_EXPORTED = "Configuration exported"
EXPORT_FAILED = "Failed to export configuration"
EXPORT_FAILED_ERROR = "Failed to export configuration: {message}"
