"""Error taxonomy surfaced by the document store and the auth gate.

Every error carries the short message the UI shows in its banner.
"""


class DocumentVaultError(Exception):
    """Base class for all recoverable Document Vault errors."""

    user_message = "Something went wrong"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.user_message)
        self.detail = detail


# Store errors
class StoreError(DocumentVaultError):
    """A document store operation failed; the collection is unchanged."""

    pass


class FetchFailed(StoreError):
    """Loading the full document list failed."""

    user_message = "Failed to fetch documents"


class SearchFailed(StoreError):
    """Loading search results failed."""

    user_message = "Search failed"


class UploadFailed(StoreError):
    """The upload request failed; the draft is preserved."""

    user_message = "Failed to upload document"


class ValidationFailed(UploadFailed):
    """The draft is missing its name or file; nothing was sent."""

    user_message = "Please provide both file and name"


class DeleteFailed(StoreError):
    """The delete request failed."""

    user_message = "Failed to delete document"


class DownloadFailed(StoreError):
    """Fetching the raw file content failed."""

    user_message = "Failed to download document"


# Auth errors
class AuthError(DocumentVaultError):
    """An auth gate transition failed."""

    pass


class InvalidCredentials(AuthError):
    """Submitted username/password did not match."""

    user_message = "Invalid username or password"


class CorruptSession(AuthError):
    """The persisted session entry could not be parsed and was removed."""

    user_message = "Your saved session could not be read, please sign in again"


class InvalidTransition(AuthError):
    """The requested transition is not allowed from the current state."""

    user_message = "That action is not available right now"
