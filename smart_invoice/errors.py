# smart_invoice/errors.py
"""
Parse-level failures. Each one is fatal to the file being read and carries
enough context to tell the user which file, which sheet or which header
keywords were expected.
"""

RETRY_HINT = "Please fix the file and upload it again."


class BillingDataError(Exception):
    """Base class for errors raised while reading an uploaded spreadsheet."""

    def __init__(self, message, file_label=""):
        super().__init__(message)
        self.file_label = file_label

    def user_message(self):
        prefix = f"{self.file_label}: " if self.file_label else ""
        return f"{prefix}{self} {RETRY_HINT}"


class SpreadsheetDecodeError(BillingDataError):
    """The uploaded bytes are not a readable spreadsheet."""

    def __init__(self, file_label="", cause=None):
        detail = f" ({cause})" if cause else ""
        super().__init__(f"Could not read the file as an Excel workbook{detail}.", file_label)
        self.cause = cause


class SheetNotFoundError(BillingDataError):
    """A required, literally named sheet is missing from the workbook."""

    def __init__(self, sheet_name, file_label="", available=()):
        self.sheet_name = sheet_name
        self.available = list(available)
        found = ", ".join(f'"{s}"' for s in self.available) or "none"
        super().__init__(
            f'The required sheet "{sheet_name}" was not found (sheets present: {found}).',
            file_label,
        )


class HeaderNotFoundError(BillingDataError):
    """No row of the sheet contains any of the expected header keywords."""

    def __init__(self, keywords, file_label="", sheet_name=None):
        self.keywords = list(keywords)
        self.sheet_name = sheet_name
        where = f' in sheet "{sheet_name}"' if sheet_name else ""
        expected = ", ".join(f'"{k}"' for k in self.keywords)
        super().__init__(
            f"Could not detect the header row{where}. "
            f"Expected a header cell containing one of: {expected}.",
            file_label,
        )
