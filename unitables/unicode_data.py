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

"""Helpers for reading Unicode Character Database style data files and for
working with codepoint sequences.

Sequences are tuples of ints throughout, so they can be used directly as
dictionary keys.
"""

import re

ZWJ = 0x200d
EMOJI_VS = 0xfe0f
TEXT_VS = 0xfe0e
FEMALE_SIGN = 0x2640
MALE_SIGN = 0x2642
PERSON = 0x1f9d1

_SKINTONE_START = 0x1f3fb
_SKINTONE_END = 0x1f3ff


def decode(data):
  """Return data files fetched as bytes as text."""
  if isinstance(data, bytes):
    return data.decode('utf-8')
  return data


def parse_code_ranges(input_data):
  """Reads Unicode code ranges with properties from an input string.

  Reads a Unicode data file already imported into a string. The format is
  the typical Unicode data file format with either one character or a
  range of characters separated by a semicolon with a property value (and
  potentially comments after a number sign, that will be ignored).

  Example source data file:
    http://www.unicode.org/Public/UCD/latest/ucd/EastAsianWidth.txt

  Example data:
    0000..001F     ; N  # Cc    [32] <control-0000>..<control-001F>
    0020           ; Na # Zs         SPACE

  Args:
    input_data: An input string, containing the data.

  Returns:
    A list of tuples corresponding to the input data, with each tuple
    containing the beginning of the range, the end of the range, and the
    property value for the range. For example:
    [(0, 31, 'N'), (32, 32, 'Na')]
  """
  ranges = []
  line_regex = re.compile(
      r"^"
      r"([0-9A-F]{4,6})"  # first character code
      r"(?:\.\.([0-9A-F]{4,6}))?"  # optional second character code
      r"\s*;\s*"
      r"([^#]+)")  # the data, up until the potential comment
  for line in input_data.split("\n"):
    match = line_regex.match(line)
    if not match:
      continue

    first, last, data = match.groups()
    if last is None:
      last = first

    first = int(first, 16)
    last = int(last, 16)
    data = data.rstrip()

    ranges.append((first, last, data))

  return ranges


def parse_semicolon_separated_data(input_data):
  """Reads semicolon-separated Unicode data from an input string.

  Reads a Unicode data file already imported into a string. The format is
  the Unicode data file format with a list of values separated by
  semicolons. The number of the values on different lines may be different
  from another.

  Example source data file:
    http://www.unicode.org/Public/UCD/latest/ucd/UnicodeData.txt

  Example data:
    0041;LATIN CAPITAL LETTER A;Lu;0;L;;;;;N;;;;0061;
    0007;<control>;Cc;0;BN;;;;;N;BELL;;;;

  Returns:
    A list of lists corresponding to the input data, with each individual
    list containing the values as strings.
  """
  all_data = []
  for line in input_data.split('\n'):
    line = line.split('#', 1)[0].strip()  # remove the comment
    if not line:
      continue

    fields = line.split(';')
    fields = [field.strip() for field in fields]
    all_data.append(fields)

  return all_data


_CODEPOINT_RE = re.compile(r'[0-9A-Fa-f]{1,6}$')

def parse_codepoint(hex_string):
  """Return the codepoint for a string of one to six hex digits.  Unlike
  int(s, 16) this rejects anything but plain hex digits."""
  if not _CODEPOINT_RE.match(hex_string):
    raise ValueError('bad codepoint "%s"' % hex_string)
  return int(hex_string, 16)


def parse_codepoints(hex_string):
  """Return the sequence for a string of space-separated hex values.
  Raises ValueError if any value is not hex."""
  try:
    seq = tuple(parse_codepoint(s) for s in hex_string.split())
  except ValueError:
    raise ValueError('bad codepoint in "%s"' % hex_string)
  if not seq:
    raise ValueError('no codepoints in "%s"' % hex_string)
  return seq


def is_skintone_modifier(cp):
  return _SKINTONE_START <= cp <= _SKINTONE_END


def seq_to_string(seq):
  """Return a string representation of the codepoint sequence."""
  return '_'.join('%04x' % cp for cp in seq)


def seq_to_text(seq):
  """Return the sequence as a string of the characters themselves."""
  return ''.join(chr(cp) for cp in seq)
