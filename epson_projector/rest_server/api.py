#!/usr/bin/env python3

# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
REST API routes for the Epson projector server.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from .logger import logger
from ..internal_types import *
from .. import (
    __version__ as pkg_version,
    EpsonProjectorClient,
    EpsonProjectorClientConfig,
    InvalidControlRequestError,
  )

router = APIRouter()

class ControlRequestModel(BaseModel):
    property: str
    value: Union[int, float, str]

class ControlResultModel(BaseModel):
    property: str
    success: bool

def get_projector_client(request: Request) -> EpsonProjectorClient:
    return request.app.state.epson_client

def get_projector_config(request: Request) -> EpsonProjectorClientConfig:
    return request.app.state.epson_config

@router.get("/")
async def root() -> Dict[str, Any]:
    return dict(name="epson_projector", version=pkg_version)

@router.get("/statistics")
async def get_statistics(
        client: EpsonProjectorClient = Depends(get_projector_client),
      ) -> Dict[str, Any]:
    snapshot = await client.poll()
    return snapshot.to_jsonable()

@router.post("/control")
async def post_control(
        control: ControlRequestModel,
        client: EpsonProjectorClient = Depends(get_projector_client),
      ) -> ControlResultModel:
    logger.debug(f"Control request: {control.property}={control.value!r}")
    success = await client.control(control.property, control.value)
    return ControlResultModel(property=control.property, success=success)

@router.post("/control/batch")
async def post_control_batch(
        controls: List[ControlRequestModel],
        client: EpsonProjectorClient = Depends(get_projector_client),
      ) -> List[ControlResultModel]:
    try:
        results = await client.control_batch([(c.property, c.value) for c in controls])
    except InvalidControlRequestError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return [ControlResultModel(property=c.property, success=r) for c, r in zip(controls, results)]
