#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Exceptions defined by this package"""

class EpsonProjectorError(Exception):
  """Base class for all error exceptions defined by this package."""
  pass

class EpsonProjectorTransportError(EpsonProjectorError):
  """The connection to the projector failed, timed out or was closed by the projector.

     Always propagated to the caller; retry and backoff are up to the host."""
  pass

class InvalidControlRequestError(EpsonProjectorError, ValueError):
  """A control request was malformed (e.g., an empty control batch)."""
  pass
