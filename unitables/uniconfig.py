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

"""Read config file for the table generators.  The defaults are fine for
regenerating the tables from a checkout, so the file is optional.

This looks for a file named '.unitablesconfig' in the users home directory.
It should contain lines consisting of a name, '=' and a value.  The
recognized names are 'cache_dir', 'fetch_timeout', and one '<source>_url'
per remote data file (see SOURCE_URLS for the source names).

Values from the command line take precedence over the config file.
"""

import logging
from os import path

_log = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = path.expanduser('~/.unitablesconfig')

DEFAULT_CACHE_DIR = './.cache'
DEFAULT_FETCH_TIMEOUT = 60

# The emoji url is tied to the emoji version the role-gender prefixes in
# emoji_table were checked against, update them together.
SOURCE_URLS = {
    'emoji_test':
        'https://unicode.org/Public/emoji/14.0/emoji-test.txt',
    'cldr_annotations':
        'https://raw.githubusercontent.com/unicode-org/cldr/master/common/'
        'annotations/en.xml',
    'unicode_data':
        'https://www.unicode.org/Public/UCD/latest/ucd/UnicodeData.txt',
    'east_asian_width':
        'https://www.unicode.org/Public/UCD/latest/ucd/EastAsianWidth.txt',
    'html_entities':
        'https://html.spec.whatwg.org/entities.json',
    'rfc1345':
        'https://tools.ietf.org/rfc/rfc1345.txt',
    'keysyms':
        'https://gitlab.freedesktop.org/xorg/proto/xorgproto/-/raw/master/'
        'include/X11/keysymdef.h',
}

values = {}

def load(configfile=DEFAULT_CONFIG_FILE):
  """The config consists of lines of the form <name> = <value>.
  values will hold a mapping from the <name> to value.
  Blank lines and lines starting with '#' are ignored, lines without
  '=' are logged and skipped.  Any previously loaded values are discarded."""

  values.clear()
  if not path.exists(configfile):
    _log.debug('no config file at %s, using defaults', configfile)
    return

  with open(configfile, 'r') as f:
    for line in f:
      line = line.strip()
      if not line or line.startswith('#'):
        continue
      if '=' not in line:
        _log.warning('ignoring bad line in %s: "%s"', configfile, line)
        continue
      k, v = line.split('=', 1)
      values[k.strip()] = v.strip()

load()


def cache_dir(default=''):
  """Local directory holding downloaded data files."""
  if not default:
    default = DEFAULT_CACHE_DIR
  return values.get('cache_dir', default)

def fetch_timeout(default=None):
  """Overall timeout for one download, in seconds."""
  if default is None:
    default = DEFAULT_FETCH_TIMEOUT
  timeout = values.get('fetch_timeout')
  if timeout is None:
    return default
  try:
    return float(timeout)
  except ValueError:
    raise ValueError('fetch_timeout "%s" is not a number' % timeout)

def source_url(source):
  """Url for the named source, the config file can override the default.
  Throws exception if the source is not known."""
  if source not in SOURCE_URLS:
    raise ValueError('unknown source "%s"' % source)
  return values.get(source + '_url', SOURCE_URLS[source])
