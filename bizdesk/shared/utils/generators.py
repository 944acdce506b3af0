"""Document ID generation (CUID2)."""

from cuid2 import Cuid

# Same length as Firestore auto-generated document IDs.
DOCUMENT_ID_LENGTH = 20

_generator = Cuid(length=DOCUMENT_ID_LENGTH)


def generate_document_id() -> str:
    """Generate a collision-resistant document ID.

    Returns:
        A new 20-character CUID2 string (lowercase alphanumeric).
    """
    return _generator.generate()
