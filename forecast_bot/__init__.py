"""LXMF bot answering weather phrases with National Weather Service forecasts."""

from forecast_bot.cache import PipelineState, ResolutionCache
from forecast_bot.pipeline import PipelineOrchestrator, PipelineResult

__all__ = ["PipelineOrchestrator", "PipelineResult", "PipelineState", "ResolutionCache"]
