"""Recipe import pipeline.

Submodules are imported directly; the schema layer depends on
``constants`` and must be importable without the pipeline.
"""
