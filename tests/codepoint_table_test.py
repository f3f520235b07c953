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

"""Tests for codepoint_table.py."""

import json
import unittest

from unitables import codepoint_table
from unitables.codepoint_table import EastAsianWidth


UNICODE_DATA = """\
0007;<control>;Cc;0;BN;;;;;N;BELL;;;;
0022;QUOTATION MARK;Po;0;ON;;;;;N;;;;;
0041;LATIN CAPITAL LETTER A;Lu;0;L;;;;;N;;;;0061;
00E9;LATIN SMALL LETTER E WITH ACUTE;Ll;0;L;0065 0301;;;;N;LATIN SMALL LETTER E ACUTE;;00C9;;00C9
0080;<control>;Cc;0;BN;;;;;N;;;;;
20AC;EURO SIGN;Sc;0;ET;;;;;N;;;;;
3000;IDEOGRAPHIC SPACE;Zs;0;WS;<wide> 0020;;;;N;;;;;
4E00;<CJK Ideograph, First>;Lo;0;L;;;;;N;;;;;
9FFF;<CJK Ideograph, Last>;Lo;0;L;;;;;N;;;;;
"""

EAST_ASIAN_WIDTH = """\
# EastAsianWidth-14.0.0.txt
0000..001F;N     # Cc    [32] <control-0000>..<control-001F>
0020..007E;Na    # Zs   [95] SPACE..TILDE
00A1;A           # Po         INVERTED EXCLAMATION MARK
20A9;H           # Sc         WON SIGN
3000;F           # Zs         IDEOGRAPHIC SPACE
4E00..9FFF;W     # Lo [20992] CJK UNIFIED IDEOGRAPH-4E00..CJK UNIFIED IDEOGRAPH-9FFF
"""

ENTITIES = json.dumps({
    '&QUOT;': {'codepoints': [34], 'characters': '"'},
    '&QUOT': {'codepoints': [34], 'characters': '"'},
    '&quot;': {'codepoints': [34], 'characters': '"'},
    '&quot': {'codepoints': [34], 'characters': '"'},
    '&eacute;': {'codepoints': [233], 'characters': u'\u00e9'},
    '&euro;': {'codepoints': [8364], 'characters': u'\u20ac'},
    '&NotEqualTilde;': {'codepoints': [8770, 824],
                        'characters': u'\u2242\u0338'},
    '&ThickSpace;': {'codepoints': [8287, 8202],
                     'characters': u'\u205f\u200a'},
    '&MediumSpace;': {'codepoints': [8287], 'characters': u'\u205f'},
})

RFC1345 = """\
   5.  CHARSET TABLES

   The following is a list of the mnemonics.

 SP     0020    SPACE
 Nb     0023    NUMBER SIGN
 e'     00e9    LATIN SMALL LETTER E WITH ACUTE
 Eu     20ac    EURO SIGN
 NU     0000    NULL (NUL)
  &registration ISO-IR-6  0020    Registration number
 WrongCase 00E9  upper case hex does not match
Simonsen                                                       [Page 14]
"""

KEYSYMS = """\
#ifdef XK_LATIN1
#define XK_space                         0x0020  /* U+0020 SPACE */
#define XK_quotedbl                      0x0022  /* U+0022 QUOTATION MARK */
#define XK_A                             0x0041  /* U+0041 LATIN CAPITAL LETTER A */
#define XK_eacute                        0x00e9  /* U+00E9 LATIN SMALL LETTER E WITH ACUTE */
#define XK_EuroSign                      0x20ac  /* U+20AC EURO SIGN */
#define XK_EcuSign                       0x20a0  /* U+20A0 EURO-CURRENCY SIGN */
#define XK_BackSpace                     0xff08  /* Back space, back char */
#define XK_Cyrillic_DZHE                 0x06bf  /* deprecated */
#endif /* XK_LATIN1 */
"""


class LoadWidthsTest(unittest.TestCase):

    def test_ranges(self):
        widths = codepoint_table.load_widths(EAST_ASIAN_WIDTH)
        self.assertEqual(EastAsianWidth.NEUTRAL, widths[0x0007])
        self.assertEqual(EastAsianWidth.NARROW, widths[0x0041])
        self.assertEqual(EastAsianWidth.NARROW, widths[0x007e])
        self.assertEqual(EastAsianWidth.AMBIGUOUS, widths[0x00a1])
        self.assertEqual(EastAsianWidth.HALF_WIDTH, widths[0x20a9])
        self.assertEqual(EastAsianWidth.FULL_WIDTH, widths[0x3000])
        self.assertEqual(EastAsianWidth.WIDE, widths[0x4e00])
        self.assertEqual(EastAsianWidth.WIDE, widths[0x9fff])
        self.assertNotIn(0x007f, widths)

    def test_unknown_code(self):
        with self.assertRaises(ValueError):
            codepoint_table.load_widths('0041;X # LATIN CAPITAL LETTER A\n')


class LoadEntitiesTest(unittest.TestCase):

    def setUp(self):
        self.entities = codepoint_table.load_entities(ENTITIES)

    def test_preferred_name(self):
        """Tests that lowercase names win over uppercase ones of the same
        length."""
        self.assertEqual('quot', self.entities[0x22])
        self.assertEqual('eacute', self.entities[0xe9])
        self.assertEqual('euro', self.entities[0x20ac])

    def test_single_codepoint_only(self):
        self.assertNotIn(0x2242, self.entities)
        self.assertEqual('MediumSpace', self.entities[0x205f])


class LoadDigraphsTest(unittest.TestCase):

    def test_digraphs(self):
        digraphs = codepoint_table.load_digraphs(RFC1345)
        self.assertEqual('SP', digraphs[0x20])
        self.assertEqual('Nb', digraphs[0x23])
        self.assertEqual("e'", digraphs[0xe9])
        self.assertEqual('NU', digraphs[0x00])

    def test_extra_digraphs(self):
        digraphs = codepoint_table.load_digraphs(RFC1345)
        self.assertEqual('=e', digraphs[0x20ac])
        self.assertEqual('=R', digraphs[0x20bd])
        self.assertEqual(
            {0x20ac: '=e', 0x20bd: '=R'}, codepoint_table.load_digraphs(''))

    def test_skipped_lines(self):
        digraphs = codepoint_table.load_digraphs(RFC1345)
        self.assertNotIn('&registration', digraphs.values())
        self.assertNotIn('WrongCase', digraphs.values())
        self.assertNotIn('Simonsen', digraphs.values())


class LoadKeysymsTest(unittest.TestCase):

    def test_keysyms(self):
        keysyms = codepoint_table.load_keysyms(KEYSYMS)
        self.assertEqual(['space'], keysyms[0x20])
        self.assertEqual(['EuroSign'], keysyms[0x20ac])
        self.assertEqual(['EcuSign'], keysyms[0x20a0])
        self.assertNotIn(0xff08, keysyms)
        self.assertNotIn(0x06bf, keysyms)
        self.assertEqual(6, len(keysyms))

    def test_several_names(self):
        keysyms = codepoint_table.load_keysyms(
            '#define XK_ae     0x00e6  /* U+00E6 LATIN SMALL LETTER AE */\n'
            '#define XK_aelig  0x00e6  /* U+00E6 LATIN SMALL LETTER AE */\n')
        self.assertEqual(['ae', 'aelig'], keysyms[0xe6])


class BuildCodepointTableTest(unittest.TestCase):

    def setUp(self):
        self.records = codepoint_table.build_codepoint_table(
            UNICODE_DATA,
            widths=codepoint_table.load_widths(EAST_ASIAN_WIDTH),
            entities=codepoint_table.load_entities(ENTITIES),
            digraphs=codepoint_table.load_digraphs(RFC1345),
            keysyms=codepoint_table.load_keysyms(KEYSYMS))
        self.by_cp = {r.codepoint: r for r in self.records}

    def test_one_record_per_line(self):
        self.assertEqual(
            [0x7, 0x22, 0x41, 0xe9, 0x80, 0x20ac, 0x3000, 0x4e00, 0x9fff],
            [r.codepoint for r in self.records])

    def test_joined_record(self):
        self.assertEqual(
            codepoint_table.CodepointRecord(
                0x20ac, EastAsianWidth.UNKNOWN, 'Sc', 'EURO SIGN', '=e',
                'euro', 'EuroSign'),
            self.by_cp[0x20ac])
        quot = self.by_cp[0x22]
        self.assertEqual(EastAsianWidth.NARROW, quot.width)
        self.assertEqual('quot', quot.html)
        self.assertEqual('quotedbl', quot.keysym)
        self.assertEqual('', quot.digraph)

    def test_control_names(self):
        self.assertEqual('BELL', self.by_cp[0x7].name)
        self.assertEqual('<control>', self.by_cp[0x80].name)
        self.assertEqual('<CJK Ideograph, First>', self.by_cp[0x4e00].name)

    def test_missing_sources(self):
        records = codepoint_table.build_codepoint_table(UNICODE_DATA)
        a = records[2]
        self.assertEqual(
            (0x41, EastAsianWidth.UNKNOWN, 'Lu', 'LATIN CAPITAL LETTER A', '',
             '', ''), tuple(a))

    def test_bytes_input(self):
        records = codepoint_table.build_codepoint_table(
            UNICODE_DATA.encode('utf-8'))
        self.assertEqual(9, len(records))

    def test_bad_lines(self):
        with self.assertRaises(ValueError):
            codepoint_table.build_codepoint_table('0041;LATIN CAPITAL LETTER A\n')
        with self.assertRaises(ValueError):
            codepoint_table.build_codepoint_table('00G1;BAD;Lu;0;L;;;;;N;;;;;\n')
        with self.assertRaises(ValueError):
            codepoint_table.build_codepoint_table(
                '0x41;LATIN CAPITAL LETTER A;Lu;0;L;;;;;N;;;;0061;\n')

    def test_keysym_codepoint_not_plain_hex(self):
        keysyms = codepoint_table.load_keysyms(
            '#define XK_A  0x0041  /* U+0_41 LATIN CAPITAL LETTER A */\n')
        self.assertEqual({}, dict(keysyms))

    def test_to_json(self):
        data = codepoint_table.codepoint_table_to_json(self.records)
        self.assertEqual({
            'codepoint': 0x3000,
            'width': 2,
            'category': 'Zs',
            'name': 'IDEOGRAPHIC SPACE',
            'digraph': '',
            'html': '',
            'keysym': '',
        }, dict(data[6]))
        json.dumps(data)


if __name__ == '__main__':
    unittest.main()
