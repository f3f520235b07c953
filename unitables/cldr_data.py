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

"""Short names for emoji from the CLDR annotation data, e.g.
common/annotations/en.xml in the CLDR repository."""

import logging
import xml.etree.ElementTree as ElementTree

from unitables import unicode_data

_log = logging.getLogger(__name__)

_NAME_SEPARATOR = ' | '

# The 'tts' annotation is the spoken name, which duplicates the name in
# emoji-test.txt.
_SKIPPED_TYPES = frozenset(['tts'])


def read_annotations(data):
  """Parse annotation xml (bytes or text) and return a mapping from the
  annotated string to the list of its short names.

  The keys are the 'cp' attributes, which CLDR writes without variation
  selectors."""
  root = ElementTree.fromstring(data)
  result = {}
  for tag in root.iter('annotation'):
    if tag.get('type') in _SKIPPED_TYPES:
      continue
    cp = tag.get('cp')
    if not cp:
      raise ValueError('annotation without cp attribute')
    names = (tag.text or '').strip()
    result[cp] = names.split(_NAME_SEPARATOR) if names else []
  _log.debug('read %d annotations', len(result))
  return result


def annotation_key(seq):
  """Return the string CLDR uses to annotate the codepoint sequence, with
  emoji and text variation selectors removed."""
  return unicode_data.seq_to_text(
      cp for cp in seq
      if cp not in (unicode_data.EMOJI_VS, unicode_data.TEXT_VS))


def short_names(annotations, seq):
  """Return a list of the short names for seq, empty if there are none."""
  return list(annotations.get(annotation_key(seq), []))
