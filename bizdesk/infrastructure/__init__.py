"""Infrastructure: Firebase Auth and Firestore adapters."""
