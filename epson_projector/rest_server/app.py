#!/usr/bin/env python3

# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
A REST FastAPI server that monitors and controls an Epson projector.
"""

from __future__ import annotations

from fastapi import FastAPI

import time
import os
import json

from contextlib import asynccontextmanager

from .logger import logger
from ..internal_types import *
from .. import (
    EpsonProjectorClient,
    EpsonProjectorClientConfig,
    epson_projector_connect,
  )

from .api import router as api_router

@asynccontextmanager
async def fastapi_lifetime(app: FastAPI) -> AsyncIterator[None]:
    """
    A context manager that initializes and cleans up for FastAPI.
    """

    epson_client: Optional[EpsonProjectorClient] = None
    try:
        logger.info("Projector REST server starting up--initializing...")
        config_file = os.environ.get("EPSON_PROJECTOR_CONFIG", None)
        if config_file is None:
            if os.path.exists("epson_projector_config.json"):
                config_file = "epson_projector_config.json"
        if config_file is None:
            raw_config: JsonableDict = {}
        else:
            with open(config_file, "r") as f:
                raw_config = json.load(f)
        app.state.raw_config = raw_config
        epson_config = EpsonProjectorClientConfig.from_jsonable(raw_config)
        app.state.epson_config = epson_config
        app.state.launch_time = time.monotonic()
        epson_client = await epson_projector_connect(config=epson_config)
        app.state.epson_client = epson_client
        logger.info(f"Serving API for projector at {epson_client}...")

        logger.info("Projector REST server initialization done; starting server...")
        yield
    finally:
        logger.info("Projector REST server shutting down--cleaning up...")
        if epson_client is not None:
            await epson_client.aclose()

proj_api = FastAPI(lifespan=fastapi_lifetime)
proj_api.include_router(api_router)
