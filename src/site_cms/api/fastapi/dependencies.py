from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from site_cms.media import MediaPipeline


def get_pipeline(request: Request) -> MediaPipeline:
    return request.app.state.media_pipeline


PipelineDep = Annotated[MediaPipeline, Depends(get_pipeline)]
