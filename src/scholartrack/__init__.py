"""ScholarTrack - student records management backed by a hosted record store."""

__version__ = "0.1.0"
