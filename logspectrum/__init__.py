"""Live audio to smoothed log-frequency spectrum."""

from logspectrum.config import PipelineConfig
from logspectrum.pipeline import SpectrumPipeline

__all__ = ["PipelineConfig", "SpectrumPipeline"]
