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

"""Download remote data files, keeping a copy in a local cache directory.

The cache is keyed by the last path segment of the url, so
https://unicode.org/Public/emoji/14.0/emoji-test.txt is cached as
<cache_dir>/emoji-test.txt.  A cached file is always used if it exists;
delete it to force a new download.
"""

import logging
import os
from os import path
import tempfile
from urllib.parse import urlsplit

import requests

from unitables import tool_utils
from unitables import uniconfig

_log = logging.getLogger(__name__)


class FetchError(Exception):
  """A remote file could not be downloaded or cached."""


def cache_filename(url):
  """Return the name of the cache file for url."""
  name = path.basename(urlsplit(url).path)
  if not name:
    raise FetchError('cannot derive a cache file name from "%s"' % url)
  return name


def fetch(url, cache_dir=None, timeout=None):
  """Return the contents of url as bytes, from the cache if possible.

  Network errors, timeouts, and responses other than 200 raise FetchError.
  Successful downloads are written to the cache before returning."""
  if cache_dir is None:
    cache_dir = uniconfig.cache_dir()
  if timeout is None:
    timeout = uniconfig.fetch_timeout()

  cache_file = path.join(cache_dir, cache_filename(url))
  if path.isfile(cache_file):
    _log.debug('using cached %s for %s', cache_file, url)
    with open(cache_file, 'rb') as f:
      return f.read()

  try:
    tool_utils.ensure_dir_exists(cache_dir)
  except (OSError, ValueError) as e:
    raise FetchError('cannot create cache directory: %s' % e)

  _log.info('downloading %s', url)
  try:
    resp = requests.get(url, timeout=timeout)
  except requests.RequestException as e:
    raise FetchError('cannot download "%s": %s' % (url, e))

  if resp.status_code != 200:
    raise FetchError('unexpected status code %d %s for "%s"' % (
        resp.status_code, resp.reason, url))

  data = resp.content
  # A partly written cache file would be served as a hit on the next run.
  try:
    fd, tmpfile = tempfile.mkstemp(dir=cache_dir, prefix='.download-')
  except OSError as e:
    raise FetchError('could not write cache: %s' % e)
  try:
    with os.fdopen(fd, 'wb') as f:
      f.write(data)
    os.replace(tmpfile, cache_file)
  except OSError as e:
    os.unlink(tmpfile)
    raise FetchError('could not write cache: %s' % e)
  _log.debug('cached %d bytes in %s', len(data), cache_file)
  return data


def fetch_source(source, cache_dir=None, timeout=None):
  """Fetch one of the named sources in uniconfig.SOURCE_URLS."""
  return fetch(uniconfig.source_url(source), cache_dir, timeout)
