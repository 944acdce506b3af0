"""bizdesk: multi-tenant clients and jobs on Firebase Auth and Cloud Firestore."""
