#!/usr/bin/env python3

# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Logger for the Epson projector REST server.
"""

from __future__ import annotations

import logging

logger = logging.getLogger('epson_projector.rest_server')
