"""
scenelens - Heuristic scene metadata for long-form fiction.

Reads the prose of a single scene and infers its point-of-view character,
dominant emotion, narrative intensity, conflict line and plotline tags
without calling a language model, then folds scene records into
chapter-level summaries.
"""

__version__ = "0.1.0"
