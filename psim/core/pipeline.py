#!/usr/bin/env python3
import logging
from typing import Awaitable, Callable, List

from .registry import HandlerOutput, OutputShape
from .tokenizer import split_pipeline

logger = logging.getLogger(__name__)

StageRunner = Callable[[str], Awaitable[HandlerOutput]]


class PipelineExecutor:
    def __init__(self, run_stage: StageRunner) -> None:
        self._run_stage = run_stage

    @staticmethod
    def stages(line: str) -> List[str]:
        return split_pipeline(line)

    async def run(self, line: str) -> HandlerOutput:
        stages = self.stages(line)
        output = ""
        for index, stage in enumerate(stages):
            logger.debug("Pipeline stage %d/%d: %s", index + 1, len(stages), stage)
            # Only the last stage's text is reported.
            result = await self._run_stage(stage)
            output = result.output
        return HandlerOutput(output, OutputShape.TEXT)
