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

"""Build the table of emoji base forms from emoji-test.txt.

emoji-test.txt lists every fully-qualified sequence separately, so one
logical emoji shows up many times:

  1F937                    # 🤷 E4.0 person shrugging
  1F937 1F3FB              # 🤷🏻 E4.0 person shrugging: light skin tone
  1F937 200D 2642 FE0F     # 🤷‍♂️ E4.0 man shrugging
  1F937 200D 2640 FE0F     # 🤷‍♀️ E4.0 woman shrugging

We keep one EmojiRecord per base form and record on it whether it can take a
skin tone and how it can be gendered.  Gender comes in two flavors:

  - sign: the base joined with FEMALE SIGN or MALE SIGN, as above.
  - role: the 'person' in a person + activity sequence replaced with 'man'
    or 'woman':

      1F9D1 200D 2695 FE0F  # 🧑‍⚕️ E12.1 health worker
      1F468 200D 2695 FE0F  # 👨‍⚕️ E4.0 man health worker

Sequences where each person or hand takes its own skin tone (handshake,
holding hands, kiss, couple with heart) can't be described by one flag and
are dropped.

Variants are always listed after their base form, so the file is processed
strictly in order.  A variant with no base form means the assumptions here
no longer match the data, which is an error.
"""

import collections
import enum
import logging

from fontTools.misc.loggingTools import Timer

from unitables import cldr_data
from unitables import unicode_data
from unitables.unicode_data import EMOJI_VS, PERSON, ZWJ

_log = logging.getLogger(__name__)

GROUP_PREFIX = '# group: '
SUBGROUP_PREFIX = '# subgroup: '
FULLY_QUALIFIED = 'fully-qualified'

_MAN = 0x1f468
_WOMAN = 0x1f469
_GENDER_SIGNS = frozenset([unicode_data.FEMALE_SIGN, unicode_data.MALE_SIGN])

# Activities that combine with 'person', 'man', and 'woman'.  Checked against
# emoji 14.0, new releases can add more; a missing one shows up as a man/woman
# sequence creating its own record instead of marking the person one.
_ROLE_ACTIVITIES = [
    (0x2695, EMOJI_VS),  # health worker
    (0x1f393,),  # student
    (0x1f3eb,),  # teacher
    (0x2696, EMOJI_VS),  # judge
    (0x1f33e,),  # farmer
    (0x1f373,),  # cook
    (0x1f527,),  # mechanic
    (0x1f3ed,),  # factory worker
    (0x1f4bc,),  # office worker
    (0x1f52c,),  # scientist
    (0x1f4bb,),  # technologist
    (0x1f3a4,),  # singer
    (0x1f3a8,),  # artist
    (0x2708, EMOJI_VS),  # pilot
    (0x1f680,),  # astronaut
    (0x1f692,),  # firefighter
    (0x1f9af,),  # with white cane
    (0x1f9bc,),  # in motorized wheelchair
    (0x1f9bd,),  # in manual wheelchair
]

ROLE_GENDER_PREFIXES = tuple(
    (person,) + activity
    for person in (_MAN, _WOMAN) for activity in _ROLE_ACTIVITIES)

# Names of sequences that take a separate skin tone per person or hand.
_PER_LIMB_TONE_NAMES = ['holding hands', 'handshake', 'kiss:',
                        'couple with heart']


class GenderKind(enum.IntEnum):
  NONE = 0
  SIGN = 1
  ROLE = 2


class EmojiMergeError(ValueError):
  """A gender or skin tone variant has no matching base emoji."""


RawSequence = collections.namedtuple(
    'RawSequence', 'codepoints name group subgroup status')


class EmojiRecord(object):
  """One base form emoji and the modifiers it supports."""

  def __init__(self, codepoints, name, group, subgroup):
    self.codepoints = tuple(codepoints)
    self.name = name
    self.group = group
    self.subgroup = subgroup
    self.skin_tones = False
    self.gender = GenderKind.NONE
    self.cldr = []

  def visual(self):
    return unicode_data.seq_to_text(self.codepoints)

  def __str__(self):
    return self.visual()

  def __repr__(self):
    return 'EmojiRecord(%s, %r, group=%d, subgroup=%d, skin_tones=%s, %s)' % (
        unicode_data.seq_to_string(self.codepoints), self.name, self.group,
        self.subgroup, self.skin_tones, self.gender.name)

  def to_json(self):
    return {
        'codepoints': list(self.codepoints),
        'name': self.name,
        'group': self.group,
        'subgroup': self.subgroup,
        'cldr': list(self.cldr),
        'skin_tones': self.skin_tones,
        'gender': int(self.gender),
    }


class OrderedNameSet(object):
  """Names in the order first added, each with a stable index."""

  def __init__(self):
    self._names = []
    self._index = {}

  def add(self, name):
    """Add name if it is new, and return its index."""
    if name not in self._index:
      self._index[name] = len(self._names)
      self._names.append(name)
    return self._index[name]

  def index(self, name):
    return self._index[name]

  def names(self):
    return self._names[:]

  def __contains__(self, name):
    return name in self._index

  def __iter__(self):
    return iter(self._names)

  def __len__(self):
    return len(self._names)


class EmojiTable(object):
  """The finished table: group names, subgroup names per group, and the
  emoji records in file order."""

  def __init__(self, groups, subgroups, emojis):
    self.groups = groups
    self.subgroups = subgroups
    self.emojis = emojis

  def group_name(self, record):
    return self.groups[record.group]

  def subgroup_name(self, record):
    return self.subgroups[self.group_name(record)][record.subgroup]

  def to_json(self):
    return {
        'groups': list(self.groups),
        'subgroups': {g: list(self.subgroups[g]) for g in self.groups},
        'emojis': [e.to_json() for e in self.emojis],
    }


def parse_data_line(line, group, subgroup):
  """Parse one line of emoji-test.txt with the group and subgroup currently
  in effect.  Returns a RawSequence, or None if the line has no data.

  Data lines look like:
    1F44B 1F3FB ; fully-qualified # 👋🏻 E1.0 waving hand: light skin tone
  The name is what follows the emoji and its version in the comment."""
  comment = ''
  x = line.find('#')
  if x >= 0:
    comment = line[x + 1:].strip()
    line = line[:x]
  line = line.strip()
  if not line:
    return None

  if ';' not in line:
    raise ValueError('Did not match "%s" in emoji-test.txt' % line)
  sequence, status = line.split(';', 1)

  tokens = comment.split(None, 2)
  if len(tokens) < 3:
    raise ValueError('no name in comment of "%s" in emoji-test.txt' % line)
  if group is None or subgroup is None:
    raise ValueError(
        'sequence %s missing group or subgroup' % sequence.strip())

  return RawSequence(
      unicode_data.parse_codepoints(sequence), tokens[2], group, subgroup,
      status.strip())


def classify_codepoints(codepoints):
  """Split a sequence into its base form and modifiers.

  Returns a tuple of the base form codepoints, whether a skin tone modifier
  was present, and GenderKind.SIGN if a gender sign follows the first
  codepoint (else GenderKind.NONE).  A gender sign in first position is the
  emoji itself and stays in the base form."""
  base = []
  tone = False
  gender = GenderKind.NONE
  for i, cp in enumerate(codepoints):
    if unicode_data.is_skintone_modifier(cp):
      tone = True
    elif cp == ZWJ:
      continue
    elif cp in _GENDER_SIGNS and i > 0:
      gender = GenderKind.SIGN
    else:
      base.append(cp)
  return tuple(base), tone, gender


def _has_per_limb_tones(name):
  return any(n in name for n in _PER_LIMB_TONE_NAMES)


def _without_trailing_vs(base):
  if base and base[-1] == EMOJI_VS:
    return base[:-1]
  return None


class EmojiNormalizer(object):
  """Collects emoji-test.txt sequences into base form EmojiRecords.

  Feed it the whole file with feed(), or individual sequences with
  add_sequence(); then call table() for the result.  Sequences must arrive
  in file order since variants are matched against base forms already
  seen."""

  def __init__(self, role_prefixes=ROLE_GENDER_PREFIXES):
    self._role_prefixes = tuple(role_prefixes)
    self._groups = OrderedNameSet()
    self._subgroups = collections.OrderedDict()
    self._records = collections.OrderedDict()
    self._counts = collections.Counter()

  def add_group(self, group):
    """Register group, returning its id."""
    if group not in self._subgroups:
      self._subgroups[group] = OrderedNameSet()
    return self._groups.add(group)

  def add_subgroup(self, group, subgroup):
    """Register subgroup of group, returning its id within the group."""
    self.add_group(group)
    return self._subgroups[group].add(subgroup)

  def feed(self, text):
    """Process the text of emoji-test.txt."""
    group = None
    subgroup = None
    for line in text.splitlines():
      if line.startswith(GROUP_PREFIX):
        group = line[len(GROUP_PREFIX):].strip()
        subgroup = None
        self.add_group(group)
        continue
      if line.startswith(SUBGROUP_PREFIX):
        if group is None:
          raise ValueError('subgroup before any group: "%s"' % line)
        subgroup = line[len(SUBGROUP_PREFIX):].strip()
        self.add_subgroup(group, subgroup)
        continue

      raw = parse_data_line(line, group, subgroup)
      if raw is not None:
        self.add_sequence(raw)

  def add_sequence(self, raw):
    """Merge raw into the table.  Returns the record created or updated, or
    None if the sequence was skipped."""
    if raw.status != FULLY_QUALIFIED:
      # Only fully-qualified sequences should be generated by keyboards and
      # other input methods.
      self._counts['unqualified'] += 1
      return None

    base, tone, gender = classify_codepoints(raw.codepoints)

    if tone and _has_per_limb_tones(raw.name):
      _log.debug('dropping %s "%s"', unicode_data.seq_to_string(
          raw.codepoints), raw.name)
      self._counts['dropped'] += 1
      return None

    if self._is_role_gendered(base):
      record = self._find_base(raw, [(PERSON,) + base[1:]])
      self._set_gender(record, GenderKind.ROLE, raw)
    elif gender == GenderKind.SIGN:
      record = self._find_base(raw, [base, _without_trailing_vs(base)])
      self._set_gender(record, GenderKind.SIGN, raw)
    elif tone:
      alternate = _without_trailing_vs(base)
      if alternate is None:
        alternate = base + (EMOJI_VS,)
      record = self._find_base(raw, [base, alternate])
      record.skin_tones = True
    else:
      return self._create(base, raw)

    self._counts['merged'] += 1
    return record

  def _is_role_gendered(self, base):
    return any(base[:len(p)] == p for p in self._role_prefixes)

  def _set_gender(self, record, gender, raw):
    # An emoji is gendered either by sign or by role, never both.
    if record.gender not in (GenderKind.NONE, gender):
      raise EmojiMergeError('%s: %s "%s" but %s already has %s gender' % (
          gender.name, unicode_data.seq_to_string(raw.codepoints), raw.name,
          unicode_data.seq_to_string(record.codepoints), record.gender.name))
    record.gender = gender

  def _find_base(self, raw, keys):
    keys = [k for k in keys if k is not None]
    for key in keys:
      record = self._records.get(key)
      if record is not None:
        return record
    raise EmojiMergeError('not found: %s "%s" (tried %s)' % (
        unicode_data.seq_to_string(keys[0]), raw.name,
        ', '.join(unicode_data.seq_to_string(k) for k in keys)))

  def _create(self, base, raw):
    if base in self._records:
      raise ValueError('duplicate emoji %s, old name: %s, new name: %s' % (
          unicode_data.seq_to_string(base), self._records[base].name,
          raw.name))
    record = EmojiRecord(
        base, raw.name, self.add_group(raw.group),
        self.add_subgroup(raw.group, raw.subgroup))
    self._records[base] = record
    self._counts['created'] += 1
    return record

  def get(self, codepoints):
    """Return the record for the base form codepoints, or None."""
    return self._records.get(tuple(codepoints))

  def __len__(self):
    return len(self._records)

  def table(self, annotations=None):
    """Return the EmojiTable, with CLDR short names from annotations if
    provided."""
    emojis = list(self._records.values())
    if annotations is not None:
      attach_cldr_names(emojis, annotations)
    _log.info(
        '%d emoji: %d variants merged, %d per-limb tone sequences dropped, '
        '%d sequences not fully-qualified', self._counts['created'],
        self._counts['merged'], self._counts['dropped'],
        self._counts['unqualified'])
    return EmojiTable(
        self._groups.names(),
        {g: s.names() for g, s in self._subgroups.items()},
        emojis)


def attach_cldr_names(records, annotations):
  """Set the cldr short names of each record, records without annotations
  get an empty list."""
  missing = 0
  for record in records:
    record.cldr = cldr_data.short_names(annotations, record.codepoints)
    if not record.cldr:
      missing += 1
  _log.debug('%d emoji have no cldr annotation', missing)


def build_emoji_table(emoji_test_text, annotations=None):
  """Return the EmojiTable for the text of emoji-test.txt.  annotations is
  a mapping as returned by cldr_data.read_annotations."""
  normalizer = EmojiNormalizer()
  with Timer(_log, 'normalize emoji sequences'):
    normalizer.feed(unicode_data.decode(emoji_test_text))
  return normalizer.table(annotations)
