"""Local tracker for study-abroad applications: universities, dorms, documents."""

__version__ = "0.1.0"
