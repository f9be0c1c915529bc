# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Epson Projector emulator.

Provides a simple emulation of an Epson projector, in-process or on TCP/IP.
"""

from .emulator_impl import (
    EpsonProjectorEmulator,
    EmulatorConnection,
    EmulatedClientTransport,
    EpsonProjectorEmulatorServer,
  )
