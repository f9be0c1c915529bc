# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
A REST FastAPI server that monitors and controls an Epson projector.
"""
from .app import proj_api
from .api import router, get_projector_client, get_projector_config
