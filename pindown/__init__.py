"""pindown: pins, pinboards and workflow data over the Firebase Realtime Database."""

__version__ = "1.0.0"
