"""Exceptions shared across layers."""
from __future__ import annotations


class DatabaseOperationError(RuntimeError):
  """A database call failed; the message is the driver's own text."""


class BrowserStateError(RuntimeError):
  """An action was requested that the current browser view does not allow."""
