"""
Load pipeline for the dataset.

Sequences preflight, store creation, per-entity loads and indexing.
"""

from f1flat.etl.pipeline import LoadPipeline, LoadResult, PipelineState, run_load

__all__ = ["LoadPipeline", "LoadResult", "PipelineState", "run_load"]
