"""projectforge -- compose Next.js projects from catalog manifests."""

__version__ = "0.1.0"
