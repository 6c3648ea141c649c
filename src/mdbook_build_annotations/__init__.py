"""mdBook preprocessor that stamps every chapter with build provenance."""

__version__ = "0.3.0"

PREPROCESSOR_NAME = "build-annotations"
