"""Infrastructure layer: Firestore REST integration."""
