"""Infrastructure layer: Firestore, asset stores, and token verification."""
