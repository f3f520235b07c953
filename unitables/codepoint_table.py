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

"""Build the per-codepoint table.

Joins UnicodeData.txt with the East Asian width, the HTML entity name, the
RFC 1345 digraph (as used by Vim), and the X11 keysym name of each codepoint.
Each of these sources is independent, a codepoint missing from one of them
just gets an empty value.
"""

import collections
import enum
import json
import logging
import re

from fontTools.misc.loggingTools import Timer

from unitables import unicode_data

_log = logging.getLogger(__name__)


class EastAsianWidth(enum.IntEnum):
  UNKNOWN = 0
  AMBIGUOUS = 1
  FULL_WIDTH = 2
  HALF_WIDTH = 3
  NEUTRAL = 4
  NARROW = 5
  WIDE = 6


_WIDTH_CODES = {
    'A': EastAsianWidth.AMBIGUOUS,
    'F': EastAsianWidth.FULL_WIDTH,
    'H': EastAsianWidth.HALF_WIDTH,
    'N': EastAsianWidth.NEUTRAL,
    'Na': EastAsianWidth.NARROW,
    'W': EastAsianWidth.WIDE,
}


CodepointRecord = collections.namedtuple(
    'CodepointRecord', 'codepoint width category name digraph html keysym')


def _record_to_json(record):
  result = record._asdict()
  result['width'] = int(record.width)
  return result


def load_widths(text):
  """Return a mapping from codepoint to EastAsianWidth for the text of
  EastAsianWidth.txt."""
  widths = {}
  for first, last, code in unicode_data.parse_code_ranges(text):
    try:
      width = _WIDTH_CODES[code]
    except KeyError:
      raise ValueError('unknown east asian width "%s" for %04x..%04x' % (
          code, first, last))
    for cp in range(first, last + 1):
      widths[cp] = width
  return widths


def load_entities(data):
  """Return a mapping from codepoint to HTML entity name for the WHATWG
  entities.json data.

  Several names can map to the same codepoint; we prefer the shortest, and
  among those the last in alphabetical order (so 'quot' over 'QUOT').
  Names without the closing ';' are legacy duplicates and are ignored, as
  are entities for more than one codepoint."""
  entities = json.loads(data)

  names = sorted((k for k in entities if k.endswith(';')), reverse=True)
  names.sort(key=len)

  result = {}
  for name in names:
    cps = entities[name]['codepoints']
    # TODO: handle entities like &NotEqualTilde; that are a codepoint plus a
    # combining mark, these would need a sequence table like the emoji one.
    if len(cps) != 1:
      continue
    cp = cps[0]
    if cp not in result:
      result[cp] = name.strip('&;')
  return result


_DIGRAPH_RE = re.compile(r'^ .*?   +[0-9a-f]{4}')

# Not in the RFC but in Vim.
_EXTRA_DIGRAPHS = {
    0x20ac: '=e',  # euro sign
    0x20bd: '=R',  # ruble sign, also '=P' in Vim
}

def load_digraphs(text):
  """Return a mapping from codepoint to two-character mnemonic from the
  text of RFC 1345, e.g.
    EG     0097    END OF GUARDED AREA (EPA)
  """
  digraphs = {}
  for line in text.splitlines():
    if 'ISO-IR-' in line:
      continue
    if not _DIGRAPH_RE.match(line):
      continue
    fields = line.split()
    try:
      cp = unicode_data.parse_codepoint(fields[1])
    except ValueError:
      continue
    digraphs[cp] = fields[0]

  digraphs.update(_EXTRA_DIGRAPHS)
  return digraphs


def load_keysyms(text):
  """Return a mapping from codepoint to the list of X11 keysym names for it,
  from the text of keysymdef.h.  Lines look like:
    #define XK_Aogonek  0x01a1  /* U+0104 LATIN CAPITAL LETTER A WITH OGONEK */
  Keysyms without a unicode mapping in their comment are skipped."""
  keysyms = collections.defaultdict(list)
  for line in text.splitlines():
    if not line.startswith('#define XK'):
      continue
    fields = line.split()
    if len(fields) < 5 or not fields[4].startswith('U+'):
      continue
    try:
      cp = unicode_data.parse_codepoint(fields[4][2:])
    except ValueError:
      continue
    keysyms[cp].append(fields[1][len('XK_'):])
  return keysyms


def _character_name(fields):
  # Control characters are all named <control>, the Unicode 1.0 name in
  # field 10 is more useful.
  name = fields[1]
  if name.startswith('<') and len(fields) > 10 and len(fields[10]) > 1:
    name = fields[10]
  return name


def build_codepoint_table(
    unicode_data_text, widths=None, entities=None, digraphs=None,
    keysyms=None):
  """Return a list of CodepointRecords, one per line of UnicodeData.txt, in
  file order.  The other arguments are mappings from codepoint as returned by
  the load_ functions, any of which may be omitted."""
  widths = widths or {}
  entities = entities or {}
  digraphs = digraphs or {}
  keysyms = keysyms or {}

  result = []
  with Timer(_log, 'build codepoint table'):
    for fields in unicode_data.parse_semicolon_separated_data(
        unicode_data.decode(unicode_data_text)):
      if len(fields) < 3:
        raise ValueError('Did not match "%s" in UnicodeData.txt' %
                         ';'.join(fields))
      try:
        cp = unicode_data.parse_codepoint(fields[0])
      except ValueError:
        raise ValueError('bad codepoint "%s" in UnicodeData.txt' % fields[0])

      names = keysyms.get(cp)
      result.append(CodepointRecord(
          cp, widths.get(cp, EastAsianWidth.UNKNOWN), fields[2],
          _character_name(fields), digraphs.get(cp, ''),
          entities.get(cp, ''), names[0] if names else ''))
  _log.info('%d codepoints', len(result))
  return result


def codepoint_table_to_json(records):
  return [_record_to_json(r) for r in records]
