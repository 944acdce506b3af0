"""Infrastructure exceptions for the Firebase REST clients."""

from bizdesk.domain.exceptions import BizdeskException


class FirebaseError(BizdeskException):
    """Base exception for Firebase Auth / Firestore client failures."""


class DocumentExistsError(FirebaseError):
    """Raised when createDocument returns 409 (document ID already exists)."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Document already exists: {path}",
            "DOCUMENT_EXISTS",
            {"path": path},
        )


class EmulatorAlreadyConnectedError(FirebaseError):
    """Raised when a client is pointed at an emulator a second time."""

    def __init__(self, service: str, host: str) -> None:
        super().__init__(
            f"{service} emulator already connected ({host})",
            "EMULATOR_ALREADY_CONNECTED",
            {"service": service, "host": host},
        )


class FirebaseAuthError(FirebaseError):
    """Identity Toolkit rejected a request (e.g. EMAIL_EXISTS, INVALID_PASSWORD).

    ``code`` is the first token of the API's error message; anything after
    " : " is kept in details["reason"].
    """

    def __init__(self, code: str, reason: str | None = None) -> None:
        self.code = code
        details = {"code": code}
        if reason:
            details["reason"] = reason
        super().__init__(f"Firebase Auth error: {code}", "FIREBASE_AUTH_ERROR", details)


class InvalidDocumentIdError(FirebaseError):
    """Raised when a document ID is not a single path segment."""

    def __init__(self, document_id: str) -> None:
        super().__init__(
            f"Invalid document id: {document_id!r}",
            "INVALID_DOCUMENT_ID",
            {"document_id": document_id},
        )
