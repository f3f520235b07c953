#!/usr/bin/env python
#
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

"""Generate the codepoint and emoji tables.  Currently in json format.

Source files are downloaded on first use and kept in the cache directory;
delete them from there to pick up new versions.  All requested tables are
built before any file is written, so a failed run leaves no output."""

import argparse
import json
import logging
import os
from os import path
import sys
import tempfile

from unitables import cldr_data
from unitables import codepoint_table
from unitables import emoji_table
from unitables import fetch
from unitables import tool_utils
from unitables import uniconfig
from unitables import unicode_data

_log = logging.getLogger(__name__)

TABLES = ['codepoints', 'emojis']

EMOJI_OUTFILE = 'emojis.json'
CODEPOINT_OUTFILE = 'codepoints.json'


def write_json(data, outfile, pretty_print=False):
  """Write data to outfile through a temporary file in the same directory,
  so outfile is either complete or untouched."""
  indent = 2 if pretty_print else None
  separators = None if pretty_print else (',', ':')
  fd, tmpfile = tempfile.mkstemp(
      dir=path.dirname(outfile), prefix='.' + path.basename(outfile))
  try:
    with os.fdopen(fd, 'w', encoding='utf-8') as f:
      json.dump(data, f, indent=indent, separators=separators,
                ensure_ascii=False)
    os.replace(tmpfile, outfile)
  except BaseException:
    os.unlink(tmpfile)
    raise
  _log.info('wrote %s', outfile)


def build_emojis(cache_dir=None, timeout=None):
  annotations = cldr_data.read_annotations(
      fetch.fetch_source('cldr_annotations', cache_dir, timeout))
  text = fetch.fetch_source('emoji_test', cache_dir, timeout)
  return emoji_table.build_emoji_table(text, annotations).to_json()


def build_codepoints(cache_dir=None, timeout=None):
  def get_text(source):
    return unicode_data.decode(fetch.fetch_source(source, cache_dir, timeout))

  records = codepoint_table.build_codepoint_table(
      get_text('unicode_data'),
      widths=codepoint_table.load_widths(get_text('east_asian_width')),
      entities=codepoint_table.load_entities(get_text('html_entities')),
      digraphs=codepoint_table.load_digraphs(get_text('rfc1345')),
      keysyms=codepoint_table.load_keysyms(get_text('keysyms')))
  return codepoint_table.codepoint_table_to_json(records)


_BUILDERS = {
    'codepoints': (build_codepoints, CODEPOINT_OUTFILE),
    'emojis': (build_emojis, EMOJI_OUTFILE),
}

def generate_tables(
    tables, outdir, cache_dir=None, timeout=None, pretty_print=False):
  """Build each of the named tables, then write them all to outdir.
  Returns the list of files written."""
  results = []
  for table in tables:
    builder, outfile = _BUILDERS[table]
    results.append((builder(cache_dir, timeout), outfile))

  outdir = tool_utils.ensure_dir_exists(outdir)
  written = []
  for data, outfile in results:
    outfile = path.join(outdir, outfile)
    write_json(data, outfile, pretty_print)
    written.append(outfile)
  return written


def main(argv=None):
  DEFAULT_OUTDIR = '.'
  parser = argparse.ArgumentParser(description=__doc__)
  parser.add_argument(
      'tables', help='tables to generate (default all)', metavar='table',
      nargs='*')
  parser.add_argument(
      '-o', '--outdir', help='directory for the output files (default %s)' %
      DEFAULT_OUTDIR, metavar='dir', default=DEFAULT_OUTDIR)
  parser.add_argument(
      '-c', '--cache_dir', help='directory for downloaded source files '
      '(default from %s, else %s)' % (
          uniconfig.DEFAULT_CONFIG_FILE, uniconfig.DEFAULT_CACHE_DIR),
      metavar='dir')
  parser.add_argument(
      '-t', '--timeout', help='timeout for each download in seconds '
      '(default from %s, else %s)' % (
          uniconfig.DEFAULT_CONFIG_FILE, uniconfig.DEFAULT_FETCH_TIMEOUT),
      metavar='secs', type=float)
  parser.add_argument(
      '-p', '--pretty_print', help='pretty-print json files',
      action='store_true')
  parser.add_argument(
      '-l', '--loglevel', help='log level name or value (default info)',
      metavar='level', default='info')
  args = parser.parse_args(argv)

  for table in args.tables:
    if table not in TABLES:
      parser.error('unknown table "%s", expected one of %s' % (
          table, ', '.join(TABLES)))
  try:
    tool_utils.setup_logging(args.loglevel)
  except ValueError as e:
    parser.error(str(e))

  tables = args.tables or TABLES
  try:
    generate_tables(
        tables, args.outdir, args.cache_dir, args.timeout, args.pretty_print)
  except (fetch.FetchError, ValueError, OSError) as e:
    _log.error('%s', e)
    return 1
  return 0


if __name__ == '__main__':
  sys.exit(main())
