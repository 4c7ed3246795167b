from __future__ import annotations
from contextlib import contextmanager
from typing import Type

from langlearn.errors import SkillError
from langlearn.utils.logger import ServiceLogger
from langlearn.utils.metrics import MetricsCollector


@contextmanager
def stage(name: str, error: Type[SkillError], logger: ServiceLogger,
          metrics: MetricsCollector, **extra):
    """Time one remote-call stage and translate its failure into ``error``.

    SkillErrors raised inside the block pass through unchanged; anything else
    is logged with its traceback and re-raised as ``error`` chained to the cause.
    """
    logger.debug(f"Stage '{name}' started", stage=name, **extra)
    try:
        with metrics.timer(f"stage_{name}_duration"):
            yield
    except SkillError:
        metrics.increment(f"pipeline_failures_{name}")
        raise
    except Exception as exc:
        metrics.increment(f"pipeline_failures_{name}")
        logger.exception(f"Stage '{name}' failed", exc, stage=name, **extra)
        raise error() from exc
    logger.debug(f"Stage '{name}' finished", stage=name, **extra)
