# Copyright 2021 Google Inc. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Some common utilities for tools to use."""

import logging
import os

from fontTools.misc.loggingTools import configLogger

_log = logging.getLogger(__name__)


def ensure_dir_exists(path):
  path = os.path.realpath(path)
  if not os.path.isdir(path):
    if os.path.exists(path):
      raise ValueError('%s exists and is not a directory' % path)
    _log.info("making '%s'", path)
    os.makedirs(path)
  return path


def parse_loglevel(loglevel):
  """Return the numeric value of loglevel, which is a logging level name or
  a level value (int or string).  Raises ValueError if it is neither."""
  try:
    return int(loglevel)
  except ValueError:
    pass
  level = getattr(logging, str(loglevel).upper(), None)
  if not isinstance(level, int):
    raise ValueError(
        'Could not set log level "%s", should be one of debug, info, '
        'warning, error, critical, or a numeric value' % loglevel)
  return level


def setup_logging(loglevel, logger_name='unitables'):
  """Set up logging to stream to stderr.

  The loglevel is a logging level name or a level value (int or string).
  Only the package logger is configured, so libraries we call keep their
  own settings."""

  configLogger(logger=logger_name, level=parse_loglevel(loglevel))
