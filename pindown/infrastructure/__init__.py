"""Infrastructure layer: Firebase Realtime Database and Auth adapters."""
