import struct
import unittest

from keycodes.keycodes import Generation
from protocol.alt_repeat_key import AltRepeatKeyEntry, AltRepeatKeyOptions, alt_repeat_keys_from_json, \
    alt_repeat_keys_to_json
from protocol.dynamic import describe_entries
from protocol.errors import ParseError, CapacityError
from protocol.keyboard_comm import Keyboard
from simulated_device import SimulatedDevice

CURRENT = Generation.CURRENT


class TestAltRepeatKey(unittest.TestCase):

    def test_from_string(self):
        ar = AltRepeatKeyEntry.from_string(3, "keycode = KC_3; alt_keycode= KC_5; options= arep_enabled;", CURRENT)
        self.assertEqual(ar.index, 3)
        self.assertEqual(ar.keycode, 0x20)
        self.assertEqual(ar.alt_keycode, 0x22)
        self.assertEqual(ar.allowed_mods, 0)
        self.assertTrue(ar.options.enabled)

    def test_from_string_full(self):
        ar = AltRepeatKeyEntry.from_string(0, "k=KC_A; a=KC_B; m=LCTL; o=enabled|bidirectional", CURRENT)
        self.assertEqual((ar.keycode, ar.alt_keycode, ar.allowed_mods), (4, 5, 1))
        self.assertTrue(ar.options.enabled)
        self.assertTrue(ar.options.bidirectional)
        self.assertFalse(ar.options.ignore_mod_handedness)

    def test_from_string_errors(self):
        for text in ["k=KC_A; a", "foo=bar", "o=invalid_option", "k=INVALID", "o=ko_enabled"]:
            with self.assertRaises(ParseError, msg=text):
                AltRepeatKeyEntry.from_string(0, text, CURRENT)

    def test_from_json(self):
        ar = AltRepeatKeyEntry.from_json(0, {"keycode": "KC_A", "alt_keycode": "KC_B", "allowed_mods": 1,
                                             "options": 10}, CURRENT)
        self.assertEqual((ar.keycode, ar.alt_keycode, ar.allowed_mods), (4, 5, 1))
        self.assertFalse(ar.options.default_to_this_alt_key)
        self.assertTrue(ar.options.bidirectional)
        self.assertTrue(ar.options.enabled)

    def test_from_json_errors(self):
        for data in ["not an object", {"keycode": 123}, {"allowed_mods": "string"}, {"options": "string"},
                     {"unknown_key": "KC_A"}]:
            with self.assertRaises(ParseError, msg=data):
                AltRepeatKeyEntry.from_json(0, data, CURRENT)

    def test_options_bitmask(self):
        options = AltRepeatKeyOptions()
        self.assertEqual(options.serialize(), 0)
        options.enabled = True
        self.assertEqual(options.serialize(), 8)
        options.bidirectional = True
        self.assertEqual(options.serialize(), 10)
        options.ignore_mod_handedness = True
        self.assertEqual(options.serialize(), 14)
        options.default_to_this_alt_key = True
        self.assertEqual(options.serialize(), 15)

    def test_empty(self):
        self.assertTrue(AltRepeatKeyEntry(0).is_empty())
        self.assertFalse(AltRepeatKeyEntry(1, keycode=4).is_empty())
        self.assertFalse(AltRepeatKeyEntry(2, options=8).is_empty())

    def test_describe(self):
        self.assertEqual(AltRepeatKeyEntry(0).describe(CURRENT), "0) EMPTY")
        ar = AltRepeatKeyEntry(1, keycode=4, alt_keycode=5, options=8)
        self.assertEqual(ar.describe(CURRENT),
                         "1) keycode = KC_A; alt_keycode = KC_B; "
                         "\n\tallowed_mods = KC_NO;"
                         "\n\tarep_option_default_to_this_alt_key = false"
                         "\n\tarep_option_bidirectional = false"
                         "\n\tarep_option_ignore_mod_handedness = false"
                         "\n\tarep_enabled = true")

    def test_describe_entries_all_empty(self):
        entries = [AltRepeatKeyEntry(0), AltRepeatKeyEntry(1)]
        self.assertEqual(describe_entries(entries, 2, "AltRepeat", CURRENT), ["AltRepeat slots 0 - 1 are EMPTY"])
        self.assertEqual(describe_entries([], 0, "AltRepeat", CURRENT), [])

    def test_json_round_trip(self):
        entries = [AltRepeatKeyEntry(0, keycode=4, options=10),
                   AltRepeatKeyEntry(1, keycode=0x1B, alt_keycode=0x1C, allowed_mods=1)]
        data = alt_repeat_keys_to_json(entries, CURRENT)
        self.assertEqual(data[1], {"keycode": "KC_X", "alt_keycode": "KC_Y", "allowed_mods": 1, "options": 0})
        self.assertEqual(alt_repeat_keys_from_json(data, CURRENT), entries)


class TestProtocolAltRepeatKey(unittest.TestCase):

    def test_reload_and_set(self):
        dev = SimulatedDevice()
        dev.expect("FE0D0700", b"\x00" + struct.pack("<HHBB", 4, 5, 1, 10))
        dev.expect_write("FE0D0800" + struct.pack("<HHBB", 6, 7, 0, 8).hex())

        kb = Keyboard(dev)
        kb.alt_repeat_key_count = 1
        kb.reload_alt_repeat_key()
        self.assertEqual(kb.alt_repeat_key_get(0), AltRepeatKeyEntry(0, 4, 5, 1, 10))

        entry = AltRepeatKeyEntry.from_string(0, "k=KC_C; a=KC_D; o=enabled", CURRENT)
        kb.alt_repeat_key_set(entry)
        self.assertEqual(kb.alt_repeat_key_get(0), entry)
        dev.finish()

    def test_set_out_of_range(self):
        kb = Keyboard(SimulatedDevice())
        kb.alt_repeat_key_count = 1
        with self.assertRaises(CapacityError):
            kb.alt_repeat_key_set(AltRepeatKeyEntry(4))
